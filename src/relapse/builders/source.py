"""Platform-independent source bundle."""

from __future__ import annotations

from pathlib import Path

from relapse.builders.base import Builder, register_builder


@register_builder
class SourceBuilder(Builder):
    type = "source"
    folder_suffix = "SOURCE"

    def populate(self, folder: Path) -> None:
        self.copy_files(self.project.files, folder)
        self.copy_exposed_files(folder)

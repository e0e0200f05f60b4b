"""Register an extra output type and archive format alongside the built-in ones."""

from pathlib import Path

from relapse import Archiver, Builder, Project, TaskRegistry, register_archiver, register_builder


@register_builder
class LinuxAppImageFolder(Builder):
    type = "linux_appdir"
    folder_suffix = "APPDIR"
    platforms = frozenset({"linux"})

    def populate(self, folder: Path) -> None:
        self.copy_files(self.project.files, folder / "usr" / "share" / "demo_app")
        (folder / "AppRun").write_text(
            f'#!/bin/sh\nexec python3 "$APPDIR/usr/share/demo_app/{self.project.executable}" "$@"\n',
            encoding="utf-8",
        )


@register_archiver
class PlainTarArchiver(Archiver):
    type = "tar"
    extension = "tar"
    format = "tar"


def package_appdir() -> None:
    project = Project(name="Demo App", version="1.0.2", files=["bin/demo_app"])
    project.add_build("linux_appdir").add_archive("tar")

    registry = TaskRegistry()
    project.generate_tasks(registry)
    # package -> package:linux:appdir -> package:linux:appdir:tar
    registry.invoke("package")


if __name__ == "__main__":
    package_appdir()

"""OS X application bundle."""

from __future__ import annotations

import plistlib
import shutil
from pathlib import Path

from relapse.builders.base import BuildContext, Builder, register_builder
from relapse.errors import ConfigError

LAUNCHER_TEMPLATE = """\
#!/bin/sh
cd "$(dirname "$0")/../Resources/application" || exit 1
exec python3 "{executable}" "$@"
"""


@register_builder
class OsxAppBuilder(Builder):
    type = "osx_app"
    folder_suffix = "OSX"
    platforms = frozenset({"osx"})

    def __init__(self, project: BuildContext) -> None:
        super().__init__(project)
        self._icon: str | None = None
        self.bundle_identifier: str | None = None

    @property
    def icon(self) -> str | None:
        return self._icon

    @icon.setter
    def icon(self, path: str) -> None:
        if Path(path).suffix.lower() != ".icns":
            raise ConfigError(
                "icon must be a .icns file.",
                context={"build": self.type, "icon": path},
            )
        self._icon = path

    @property
    def app_name(self) -> str:
        return f"{self.project.name or self.project.underscored_name}.app"

    def info_plist(self) -> dict[str, str]:
        underscored_name = self.project.underscored_name or "application"
        info = {
            "CFBundleName": self.project.name or underscored_name,
            "CFBundleIdentifier": self.bundle_identifier or f"org.relapse.{underscored_name}",
            "CFBundleExecutable": underscored_name,
            "CFBundlePackageType": "APPL",
            "CFBundleVersion": self.project.version or "0",
        }
        if self._icon is not None:
            info["CFBundleIconFile"] = Path(self._icon).name
        return info

    def populate(self, folder: Path) -> None:
        executable = self.project.executable
        if executable is None:
            raise ConfigError(
                "An executable is required for OS X applications.",
                hint="Set project.name or project.executable.",
                context={"build": self.type},
            )
        contents = folder / self.app_name / "Contents"
        resources = contents / "Resources"
        resources.mkdir(parents=True)
        self.copy_files(self.project.files, resources / "application")
        if self._icon is not None:
            shutil.copy2(self._icon, resources / Path(self._icon).name)

        with (contents / "Info.plist").open("wb") as handle:
            plistlib.dump(self.info_plist(), handle)

        launcher = contents / "MacOS" / self.info_plist()["CFBundleExecutable"]
        launcher.parent.mkdir(parents=True, exist_ok=True)
        launcher.write_text(LAUNCHER_TEMPLATE.format(executable=executable), encoding="utf-8")
        launcher.chmod(0o755)

        self.copy_exposed_files(folder)
        for url, title in self.project.links.items():
            with (folder / f"{title}.webloc").open("wb") as handle:
                plistlib.dump({"URL": url}, handle)

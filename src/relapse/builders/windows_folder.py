"""Windows folder with a launcher script and internet-shortcut link files."""

from __future__ import annotations

import shutil
from pathlib import Path, PureWindowsPath
from typing import Literal, get_args

from relapse.builders.base import BuildContext, Builder, register_builder
from relapse.errors import ConfigError

ExecutableType = Literal["console", "windows"]

INTERPRETERS: dict[ExecutableType, str] = {
    "console": "python",
    "windows": "pythonw",
}


def url_file_content(url: str) -> str:
    return f"[InternetShortcut]\r\nURL={url}\r\n"


@register_builder
class WindowsFolderBuilder(Builder):
    type = "windows_folder"
    folder_suffix = "WIN32"
    platforms = frozenset({"windows"})

    def __init__(self, project: BuildContext) -> None:
        super().__init__(project)
        self._executable_type: ExecutableType = "windows"
        self._icon: str | None = None

    @property
    def executable_type(self) -> ExecutableType:
        return self._executable_type

    @executable_type.setter
    def executable_type(self, value: ExecutableType) -> None:
        if value not in get_args(ExecutableType):
            raise ConfigError(
                "executable_type must be 'console' or 'windows'.",
                context={"build": self.type, "executable_type": str(value)},
            )
        self._executable_type = value

    @property
    def icon(self) -> str | None:
        return self._icon

    @icon.setter
    def icon(self, path: str) -> None:
        if Path(path).suffix.lower() != ".ico":
            raise ConfigError(
                "icon must be a .ico file.",
                context={"build": self.type, "icon": path},
            )
        self._icon = path

    @property
    def executable_name(self) -> str:
        return f"{self.project.underscored_name}.cmd"

    def populate(self, folder: Path) -> None:
        self.copy_files(self.project.files, folder / "src")
        self.copy_exposed_files(folder)
        for url, title in self.project.links.items():
            (folder / f"{title}.url").write_text(url_file_content(url), encoding="utf-8")
        if self._icon is not None:
            shutil.copy2(self._icon, folder / Path(self._icon).name)
        (folder / self.executable_name).write_text(self._launcher(), encoding="utf-8")

    def _launcher(self) -> str:
        executable = self.project.executable
        if executable is None:
            raise ConfigError(
                "An executable is required for Windows folders.",
                hint="Set project.name or project.executable.",
                context={"build": self.type},
            )
        script = PureWindowsPath("src", executable)
        interpreter = INTERPRETERS[self._executable_type]
        return f'@echo off\r\n{interpreter} "%~dp0{script}" %*\r\n'

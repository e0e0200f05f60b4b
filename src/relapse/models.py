"""Platform, naming and task-name helpers shared by the project and compiler."""

from __future__ import annotations

import re
import sys
from typing import Literal

Platform = Literal["windows", "osx", "linux"]

DEFAULT_PACKAGE_FOLDER = "pkg"
TAG_SEPARATOR = "_"
TASK_SEPARATOR = ":"

_NAME_DISALLOWED = re.compile(r"[^a-z0-9_\- ]")
_NAME_SEPARATORS = re.compile(r"[\-_ ]+")


def host_platform(system: str | None = None) -> Platform:
    """Map ``sys.platform`` (or *system*) to the platform names builders declare."""
    value = sys.platform if system is None else system
    if value.startswith(("win32", "cygwin", "msys")):
        return "windows"
    if value.startswith("darwin"):
        return "osx"
    return "linux"


def underscore_name(name: str) -> str:
    """Return *name* in the form used for file names, e.g. ``"My App!"`` -> ``"my_app"``."""
    cleaned = _NAME_DISALLOWED.sub("", name.strip().lower())
    return "_".join(part for part in _NAME_SEPARATORS.split(cleaned) if part)


def underscore_version(version: str) -> str:
    return version.replace(".", "_")


def build_task_name(tag: str) -> str:
    """``windows_folder_from_dist`` -> ``build:windows:folder:from:dist`` (every separator)."""
    return "build" + TASK_SEPARATOR + tag.replace(TAG_SEPARATOR, TASK_SEPARATOR)


def task_group(tag: str) -> str | None:
    """Prefix of *tag* before its first separator, or ``None`` when it has none."""
    if TAG_SEPARATOR not in tag:
        return None
    return tag.split(TAG_SEPARATOR, 1)[0]


def package_output_task(tag: str) -> str:
    """``windows_folder_from_dist`` -> ``windows:folder_from_dist`` (first separator only)."""
    return tag.replace(TAG_SEPARATOR, TASK_SEPARATOR, 1)


__all__ = [
    "DEFAULT_PACKAGE_FOLDER",
    "Platform",
    "TAG_SEPARATOR",
    "TASK_SEPARATOR",
    "build_task_name",
    "host_platform",
    "package_output_task",
    "task_group",
    "underscore_name",
    "underscore_version",
]

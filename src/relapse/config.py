"""Load a :class:`~relapse.project.Project` from a ``relapse.toml`` file.

Example::

    [project]
    name = "My Application"
    version = "1.2.0"
    files = ["bin/*", "lib/**/*.py"]
    exposed_files = ["README.txt"]
    archives = ["zip"]
    links = { "http://example.com" = "Website" }

    [[build]]
    type = "windows_folder"
    archives = ["tar_gz"]
    executable_type = "console"

File patterns are globbed relative to the directory holding the file and
stored relative to it, so tasks are expected to run from that directory.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .builders import Builder
from .errors import ConfigError
from .models import DEFAULT_PACKAGE_FOLDER, Platform, host_platform
from .observability import StructuredLogger
from .project import Project

DEFAULT_CONFIG_FILE = "relapse.toml"

_PROJECT_STRING_KEYS = ("name", "version", "output_path", "executable", "underscored_name")
_BUILD_RESERVED_KEYS = frozenset({"type", "archives"})


def load_project(
    path: str | Path = DEFAULT_CONFIG_FILE,
    *,
    platform: Platform | None = None,
    logger: StructuredLogger | None = None,
) -> Project:
    config_path = Path(path)
    data = _read_toml(config_path)
    table = data.get("project")
    if not isinstance(table, dict):
        raise ConfigError(
            "Configuration requires a [project] table.",
            context={"path": str(config_path)},
        )
    for key in _PROJECT_STRING_KEYS:
        if key in table and not isinstance(table[key], str):
            raise ConfigError(
                f"project.{key} must be a string.",
                context={"path": str(config_path), "key": key},
            )
    if not isinstance(table.get("verbose", True), bool):
        raise ConfigError(
            "project.verbose must be a boolean.",
            context={"path": str(config_path), "key": "verbose"},
        )

    root = config_path.parent
    project = Project(
        name=table.get("name"),
        version=table.get("version"),
        files=_expand_patterns(root, _string_list(table, "files", config_path)),
        exposed_files=_expand_patterns(root, _string_list(table, "exposed_files", config_path)),
        output_path=table.get("output_path", DEFAULT_PACKAGE_FOLDER),
        verbose=table.get("verbose", True),
        platform=platform or host_platform(),
        logger=logger or StructuredLogger(),
    )
    if "executable" in table:
        project.executable = table["executable"]
    if "underscored_name" in table:
        project.underscored_name = table["underscored_name"]

    for tag in _string_list(table, "archives", config_path):
        project.add_archive(tag)

    links = table.get("links", {})
    if not isinstance(links, dict):
        raise ConfigError(
            "project.links must be a table of url = title.",
            context={"path": str(config_path)},
        )
    for url, title in links.items():
        project.add_link(url, str(title))

    builds = data.get("build", [])
    if not isinstance(builds, list):
        raise ConfigError(
            "build entries must be declared as [[build]] tables.",
            context={"path": str(config_path)},
        )
    for entry in builds:
        _add_build(project, entry, config_path)
    return project


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            "Configuration file not found.",
            hint=f"Create {DEFAULT_CONFIG_FILE} or pass its path with -f.",
            context={"path": str(path)},
        ) from exc
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            "Configuration file is not valid TOML.",
            context={"path": str(path), "error": str(exc)},
        ) from exc


def _string_list(table: Mapping[str, Any], key: str, path: Path) -> list[str]:
    value = table.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(
            f"{key} must be a list of strings.",
            context={"path": str(path), "key": key},
        )
    return value


def _expand_patterns(root: Path, patterns: list[str]) -> list[str]:
    matched: dict[str, None] = {}
    for pattern in patterns:
        if Path(pattern).is_absolute() or ".." in Path(pattern).parts:
            raise ConfigError(
                "File patterns must be relative to the configuration directory.",
                context={"pattern": pattern, "root": str(root)},
            )
        paths = sorted(p for p in root.glob(pattern) if p.is_file())
        if not paths:
            raise ConfigError(
                "File pattern matched no files.",
                context={"pattern": pattern, "root": str(root)},
            )
        for p in paths:
            matched[p.relative_to(root).as_posix()] = None
    return list(matched)


def _add_build(project: Project, entry: object, path: Path) -> Builder:
    if not isinstance(entry, dict) or not isinstance(entry.get("type"), str):
        raise ConfigError(
            "Each [[build]] table requires a string type.",
            context={"path": str(path)},
        )
    builder = project.add_build(entry["type"])
    for tag in _string_list(entry, "archives", path):
        builder.add_archive(tag)
    for key, value in entry.items():
        if key not in _BUILD_RESERVED_KEYS:
            _set_builder_option(builder, key, value, path)
    return builder


def _set_builder_option(builder: Builder, key: str, value: object, path: Path) -> None:
    attribute = getattr(type(builder), key, None)
    settable = (
        isinstance(attribute, property) and attribute.fset is not None
    ) or key in vars(builder)
    if key.startswith("_") or not settable:
        raise ConfigError(
            "Unknown option for this output type.",
            context={"path": str(path), "build": builder.type, "option": key},
        )
    setattr(builder, key, value)


__all__ = ["DEFAULT_CONFIG_FILE", "load_project"]

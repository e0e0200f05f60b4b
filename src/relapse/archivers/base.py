"""Archiver contract, registry and archiver-set resolution."""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, TypeVar

from relapse.errors import ConfigError

if TYPE_CHECKING:
    from relapse.tasks import TaskEngine


class Archiver:
    """Compresses a builder's output folder into a single package file.

    Subclasses set ``type`` (the registry tag, also the last segment of the
    ``package:<output>:<type>`` task name), ``extension`` and ``format``
    (the :func:`shutil.make_archive` format name).
    """

    type: ClassVar[str]
    extension: ClassVar[str]
    format: ClassVar[str]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.type}>"

    def package_path(self, folder: Path) -> Path:
        return folder.with_name(f"{folder.name}.{self.extension}")

    def generate_tasks(self, engine: TaskEngine, output_task: str, folder: Path) -> None:
        """Define ``package:<output_task>:<type>`` and the archive file task it depends on."""
        package = self.package_path(folder)
        engine.define_task(
            package.as_posix(),
            (folder.as_posix(),),
            lambda: self.compress(folder, package),
        )
        engine.define_task(
            f"package:{output_task}:{self.type}",
            (package.as_posix(),),
            description=f"Create {package.as_posix()}",
        )

    def compress(self, folder: Path, package: Path) -> Path:
        if package.exists():
            package.unlink()
        archive = shutil.make_archive(
            str(folder),
            self.format,
            root_dir=folder.parent,
            base_dir=folder.name,
        )
        return Path(archive)


ArchiverT = TypeVar("ArchiverT", bound=type[Archiver])

ARCHIVERS: dict[str, type[Archiver]] = {}


def register_archiver(cls: ArchiverT) -> ArchiverT:
    ARCHIVERS[cls.type] = cls
    return cls


def has_archiver_type(tag: str) -> bool:
    return tag in ARCHIVERS


def create_archiver(tag: str) -> Archiver:
    cls = ARCHIVERS.get(tag)
    if cls is None:
        raise ConfigError(
            "Unsupported archive format.",
            hint=f"Use one of: {', '.join(sorted(ARCHIVERS))}.",
            context={"archive": tag},
        )
    return cls()


def resolve_archivers(
    local: Sequence[Archiver],
    global_: Sequence[Archiver],
) -> tuple[Archiver, ...]:
    """Local archivers in order, then global ones whose type the local set lacks."""
    local_types = {archiver.type for archiver in local}
    return (*local, *(archiver for archiver in global_ if archiver.type not in local_types))


class HasArchivers:
    """Mixin for owners of an archiver set (the project, and each builder)."""

    __slots__ = ()

    _archivers: list[Archiver]

    @property
    def archivers(self) -> tuple[Archiver, ...]:
        return tuple(self._archivers)

    def add_archive(self, tag: str) -> Archiver:
        """Add an archive format; each format may only be added once per owner."""
        if any(archiver.type == tag for archiver in self._archivers):
            raise ConfigError(
                "Archive format already added.",
                context={"archive": tag, "owner": str(self)},
            )
        archiver = create_archiver(tag)
        self._archivers.append(archiver)
        return archiver


__all__ = [
    "ARCHIVERS",
    "Archiver",
    "HasArchivers",
    "create_archiver",
    "has_archiver_type",
    "register_archiver",
    "resolve_archivers",
]

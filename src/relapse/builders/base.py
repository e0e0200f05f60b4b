"""Builder contract, registry and the read-only project view handed to builders."""

from __future__ import annotations

import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, TypeVar

from relapse.archivers.base import HasArchivers
from relapse.errors import ConfigError
from relapse.models import Platform, build_task_name, task_group

if TYPE_CHECKING:
    from relapse.observability import StructuredLogger
    from relapse.project import Project
    from relapse.tasks import TaskEngine


class BuildContext:
    """Read-only view of a project, the only route by which builders see its links.

    Reads go to the live project, so anything configured after ``add_build``
    is visible by the time tasks are generated.
    """

    __slots__ = ("_links", "_project")

    def __init__(self, project: Project, *, links: Mapping[str, str]) -> None:
        self._project = project
        self._links = links

    def __repr__(self) -> str:
        return f"<BuildContext {self._project}>"

    @property
    def name(self) -> str | None:
        return self._project.name

    @property
    def version(self) -> str | None:
        return self._project.version

    @property
    def underscored_name(self) -> str | None:
        return self._project.underscored_name

    @property
    def underscored_version(self) -> str | None:
        return self._project.underscored_version

    @property
    def executable(self) -> str | None:
        return self._project.executable

    @property
    def files(self) -> tuple[str, ...]:
        return tuple(self._project.files)

    @property
    def exposed_files(self) -> tuple[str, ...]:
        return tuple(self._project.exposed_files)

    @property
    def links(self) -> dict[str, str]:
        return dict(self._links)

    @property
    def output_path(self) -> str:
        return self._project.output_path

    @property
    def folder_base(self) -> Path:
        return self._project.folder_base

    @property
    def platform(self) -> Platform:
        return self._project.platform

    @property
    def verbose(self) -> bool:
        return self._project.verbose

    @property
    def logger(self) -> StructuredLogger:
        return self._project.logger


class Builder(HasArchivers):
    """One output shape (source bundle, Windows folder, OS X app, ...).

    Subclasses set ``type`` (the registry tag), ``folder_suffix`` and
    ``platforms`` (``None`` means every platform), and implement
    :meth:`populate` to fill the output folder. Builder-local archivers added
    with :meth:`add_archive` override project-wide ones of the same type.
    """

    type: ClassVar[str]
    folder_suffix: ClassVar[str]
    platforms: ClassVar[frozenset[Platform] | None] = None

    def __init__(self, project: BuildContext) -> None:
        self._project = project
        self._archivers = []

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.type}>"

    @property
    def project(self) -> BuildContext:
        return self._project

    @property
    def folder(self) -> Path:
        base = self._project.folder_base
        return base.with_name(f"{base.name}_{self.folder_suffix}")

    @property
    def task_group(self) -> str | None:
        return task_group(self.type)

    @property
    def build_task(self) -> str:
        return build_task_name(self.type)

    def valid_for_platform(self) -> bool:
        return self.platforms is None or self._project.platform in self.platforms

    def generate_tasks(self, engine: TaskEngine) -> None:
        """Define the folder task and ``build:<type>`` on top of it."""
        folder = self.folder
        engine.define_task(folder.as_posix(), (), lambda: self._build_folder(folder))
        engine.define_task(
            self.build_task,
            (folder.as_posix(),),
            description=f"Build {self.type} output",
        )

    def populate(self, folder: Path) -> None:
        raise NotImplementedError

    def copy_files(self, files: tuple[str, ...], destination: Path) -> None:
        for file in files:
            relative = Path(file)
            if relative.is_absolute() or ".." in relative.parts:
                raise ConfigError(
                    "Project files must be relative paths inside the project directory.",
                    hint="Use paths relative to the directory tasks run from.",
                    context={"build": self.type, "file": file},
                )
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(file, target)
            if self._project.verbose:
                self._log("copy_file", f"Copied {file}.", level="debug")

    def copy_exposed_files(self, destination: Path) -> None:
        for file in self._project.exposed_files:
            shutil.copy2(file, destination / Path(file).name)

    def _build_folder(self, folder: Path) -> None:
        if folder.exists():
            shutil.rmtree(folder)
        folder.mkdir(parents=True)
        self.populate(folder)
        self._log("build_folder", f"Created {folder.as_posix()}.")

    def _log(self, operation: str, message: str, *, level: str = "info") -> None:
        self._project.logger.log(
            operation=operation,
            task=self.build_task,
            builder=self.type,
            archiver=None,
            message=message,
            level=level,
        )


BuilderT = TypeVar("BuilderT", bound=type[Builder])

BUILDERS: dict[str, type[Builder]] = {}


def register_builder(cls: BuilderT) -> BuilderT:
    BUILDERS[cls.type] = cls
    return cls


def has_builder_type(tag: str) -> bool:
    return tag in BUILDERS


def builder_class(tag: str) -> type[Builder]:
    cls = BUILDERS.get(tag)
    if cls is None:
        raise ConfigError(
            "Unsupported output type.",
            hint=f"Use one of: {', '.join(sorted(BUILDERS))}.",
            context={"build": tag},
        )
    return cls


__all__ = [
    "BUILDERS",
    "BuildContext",
    "Builder",
    "builder_class",
    "has_builder_type",
    "register_builder",
]

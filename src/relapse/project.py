"""Project declaration: what to package, which outputs to build, how to archive them."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from .archivers import Archiver, HasArchivers, resolve_archivers
from .builders import BuildContext, Builder, builder_class
from .compiler import compile_build_tasks, compile_package_tasks
from .errors import ConfigError
from .models import (
    DEFAULT_PACKAGE_FOLDER,
    Platform,
    host_platform,
    underscore_name,
    underscore_version,
)
from .observability import StructuredLogger
from .tasks import TaskEngine


@dataclass(slots=True)
class Project(HasArchivers):
    """Declares an application release and compiles it into build/package tasks.

    Configure first (``add_build``, ``add_archive``, ``add_link``, attribute
    assignment), then call :meth:`generate_tasks` once with a task engine::

        project = Project(name="My Application", version="1.2.4", files=["bin/app"])
        project.add_build("source").add_archive("zip")
        project.generate_tasks(TaskRegistry())
    """

    name: str | None = None
    version: str | None = None
    files: list[str] = field(default_factory=list)
    exposed_files: list[str] = field(default_factory=list)
    output_path: str = DEFAULT_PACKAGE_FOLDER
    verbose: bool = True
    platform: Platform = field(default_factory=host_platform)
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    _underscored_name: str | None = field(init=False, default=None, repr=False)
    _underscored_version: str | None = field(init=False, default=None, repr=False)
    _executable: str | None = field(init=False, default=None, repr=False)
    _links: dict[str, str] = field(init=False, default_factory=dict, repr=False)
    _builders: list[Builder] = field(init=False, default_factory=list, repr=False)
    _archivers: list[Archiver] = field(init=False, default_factory=list, repr=False)
    _generated: bool = field(init=False, default=False, repr=False)

    def __str__(self) -> str:
        parts = [type(self).__name__]
        if self.name:
            parts.append(self.name)
        if self.version:
            parts.append(self.version)
        return f"<{' '.join(parts)}>"

    @property
    def underscored_name(self) -> str | None:
        if self._underscored_name is not None or self.name is None:
            return self._underscored_name
        return underscore_name(self.name)

    @underscored_name.setter
    def underscored_name(self, value: str | None) -> None:
        self._underscored_name = value

    @property
    def underscored_version(self) -> str | None:
        if self._underscored_version is not None or self.version is None:
            return self._underscored_version
        return underscore_version(self.version)

    @underscored_version.setter
    def underscored_version(self, value: str | None) -> None:
        self._underscored_version = value

    @property
    def executable(self) -> str | None:
        underscored_name = self.underscored_name
        if self._executable is not None or underscored_name is None:
            return self._executable
        return f"bin/{underscored_name}"

    @executable.setter
    def executable(self, value: str | None) -> None:
        self._executable = value

    @property
    def folder_base(self) -> Path:
        """Path every output folder extends, e.g. ``pkg/my_application_1_2_4``."""
        underscored_name = self.underscored_name
        if underscored_name is None:
            raise ConfigError(
                "Project name is required to derive output folders.",
                hint="Set project.name (or project.underscored_name).",
                context={"project": str(self)},
            )
        suffix = f"_{self.underscored_version}" if self.version else ""
        return Path(self.output_path) / f"{underscored_name}{suffix}"

    @property
    def builders(self) -> tuple[Builder, ...]:
        return tuple(self._builders)

    @property
    def generated(self) -> bool:
        return self._generated

    def add_build(self, tag: str, configure: Callable[[Builder], None] | None = None) -> Builder:
        """Add an output to produce; at least one is required before generating tasks."""
        self._ensure_configurable("add_build")
        cls = builder_class(tag)
        if any(builder.type == tag for builder in self._builders):
            raise ConfigError(
                "Output type is already added.",
                context={"build": tag, "project": str(self)},
            )
        builder = cls(BuildContext(self, links=self._links))
        self._builders.append(builder)
        if configure is not None:
            configure(builder)
        return builder

    @contextmanager
    def build(self, tag: str) -> Iterator[Builder]:
        yield self.add_build(tag)

    def add_archive(self, tag: str) -> Archiver:
        """Add a project-wide archive format, used by every builder lacking its own."""
        self._ensure_configurable("add_archive")
        return HasArchivers.add_archive(self, tag)

    def add_link(self, url: str, title: str) -> Self:
        """Add a link that builders turn into a shortcut file named *title*."""
        self._ensure_configurable("add_link")
        if not url or not title:
            raise ConfigError("add_link() requires both url and title.")
        self._links[url] = title
        return self

    def active_builders(self) -> list[Builder]:
        """Builders that can run on ``self.platform``, in the order they were added."""
        return [builder for builder in self._builders if builder.valid_for_platform()]

    def effective_archivers(self, builder: Builder) -> tuple[Archiver, ...]:
        """The builder's own archivers plus project-wide ones of types it does not override."""
        return resolve_archivers(builder.archivers, self.archivers)

    def generate_tasks(self, engine: TaskEngine) -> Self:
        """Define every build and package task for the active builders in *engine*."""
        if self._generated:
            raise ConfigError(
                "Tasks have already been generated for this project.",
                hint="Create a new Project (and task engine) to generate tasks again.",
                context={"project": str(self)},
            )
        compile_build_tasks(self, engine)
        compile_package_tasks(self, engine)
        self._generated = True
        return self

    def _ensure_configurable(self, operation: str) -> None:
        if self._generated:
            raise ConfigError(
                "Project configuration is frozen once tasks are generated.",
                context={"operation": operation, "project": str(self)},
            )

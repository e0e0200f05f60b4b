"""Declarative build and packaging tasks for application releases."""

from .archivers import Archiver, register_archiver, resolve_archivers
from .builders import BuildContext, Builder, register_builder
from .config import load_project
from .errors import (
    ConfigError,
    ErrorCode,
    RelapseError,
    TaskDefinitionError,
    TaskExecutionError,
    TaskNotFoundError,
)
from .observability import StructuredLogger
from .project import Project
from .tasks import Task, TaskEngine, TaskRegistry

__all__ = [
    "Archiver",
    "BuildContext",
    "Builder",
    "ConfigError",
    "ErrorCode",
    "Project",
    "RelapseError",
    "StructuredLogger",
    "Task",
    "TaskDefinitionError",
    "TaskEngine",
    "TaskExecutionError",
    "TaskNotFoundError",
    "TaskRegistry",
    "load_project",
    "register_archiver",
    "register_builder",
    "resolve_archivers",
]

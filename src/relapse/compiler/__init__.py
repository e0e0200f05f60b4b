"""Compiler passes that turn a configured project into build and package tasks."""

from .emit_tasks import PACKAGE_PLATFORM_GROUPS, compile_build_tasks, compile_package_tasks

__all__ = [
    "PACKAGE_PLATFORM_GROUPS",
    "compile_build_tasks",
    "compile_package_tasks",
]

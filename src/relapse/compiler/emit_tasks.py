"""Compile a project's builders and archivers into a named task graph.

Two passes share the platform-filtered builder list:

- build pass: ``build:<type-with-colons>`` per builder (emitted by the builder
  itself), ``build:<group>`` for tags with a separator, then ``build``;
- package pass: ``package:<output>:<archiver>`` per effective archiver (emitted
  by the archiver), ``package:<output>`` per builder, ``package:windows`` and
  ``package:osx`` second-level groups, then ``package``.

Build names replace every ``_`` in the tag with ``:`` while package output
names replace only the first one; both shapes are relied on by callers that
invoke tasks by name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relapse.errors import ConfigError
from relapse.models import build_task_name, package_output_task, task_group

if TYPE_CHECKING:
    from relapse.project import Project
    from relapse.tasks import TaskEngine

PACKAGE_PLATFORM_GROUPS: dict[str, str] = {
    "windows": "Windows",
    "osx": "OS X",
}


def compile_build_tasks(project: Project, engine: TaskEngine) -> list[str]:
    """Emit the build task graph and return the aggregate task names defined."""
    if not project.builders:
        raise ConfigError(
            "Must specify at least one valid output for this OS before tasks can be generated.",
            hint="Call add_build() with one of the registered output types.",
            context={"project": str(project)},
        )

    builders = project.active_builders()
    if not builders:
        project.logger.log(
            operation="platform_skip",
            task=None,
            builder=None,
            archiver=None,
            message="No builder is valid for this platform; no tasks generated.",
            extra={"platform": project.platform},
        )
        return []

    build_outputs: list[str] = []
    build_groups: dict[str, list[str]] = {}
    for builder in builders:
        builder.generate_tasks(engine)
        task_name = build_task_name(builder.type)
        group = task_group(builder.type)
        if group is None:
            build_outputs.append(task_name)
            continue
        build_groups.setdefault(group, []).append(task_name)
        group_task = f"build:{group}"
        if group_task not in build_outputs:
            build_outputs.append(group_task)

    defined: list[str] = []
    for group, tasks in build_groups.items():
        defined.append(
            _define_aggregate(project, engine, f"build:{group}", tasks, f"Build all {group} outputs")
        )
    defined.append(_define_aggregate(project, engine, "build", build_outputs, "Build all outputs"))
    return defined


def compile_package_tasks(project: Project, engine: TaskEngine) -> list[str]:
    """Emit the package task graph and return the aggregate task names defined."""
    builders = project.active_builders()
    if not builders:
        return []

    platform_tasks: dict[str, list[str]] = {group: [] for group in PACKAGE_PLATFORM_GROUPS}
    top_level_tasks: list[str] = []
    defined: list[str] = []
    for builder in builders:
        output_task = package_output_task(builder.type)
        archivers = project.effective_archivers(builder)
        for archiver in archivers:
            archiver.generate_tasks(engine, output_task, builder.folder)
            project.logger.log(
                operation="define_package",
                task=f"package:{output_task}:{archiver.type}",
                builder=builder.type,
                archiver=archiver.type,
                message="Archiver package task generated.",
            )

        package_task = f"package:{output_task}"
        defined.append(
            _define_aggregate(
                project,
                engine,
                package_task,
                [f"{package_task}:{archiver.type}" for archiver in archivers],
                f"Package all {builder.type}",
            )
        )

        group = _platform_group(output_task)
        if group is None:
            top_level_tasks.append(package_task)
            continue
        platform_tasks[group].append(package_task)
        if f"package:{group}" not in top_level_tasks:
            top_level_tasks.append(f"package:{group}")

    for group, tasks in platform_tasks.items():
        if tasks:
            defined.append(
                _define_aggregate(
                    project,
                    engine,
                    f"package:{group}",
                    tasks,
                    f"Package all {PACKAGE_PLATFORM_GROUPS[group]}",
                )
            )
    defined.append(_define_aggregate(project, engine, "package", top_level_tasks, "Package all"))
    return defined


def _platform_group(output_task: str) -> str | None:
    for group in PACKAGE_PLATFORM_GROUPS:
        if output_task.startswith(f"{group}:"):
            return group
    return None


def _define_aggregate(
    project: Project,
    engine: TaskEngine,
    name: str,
    prerequisites: list[str],
    description: str,
) -> str:
    engine.define_task(name, tuple(prerequisites), description=description)
    project.logger.log(
        operation="define_task",
        task=name,
        builder=None,
        archiver=None,
        message=description,
        extra={"prerequisites": list(prerequisites)},
    )
    return name


__all__ = [
    "PACKAGE_PLATFORM_GROUPS",
    "compile_build_tasks",
    "compile_package_tasks",
]

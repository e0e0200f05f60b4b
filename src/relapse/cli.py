"""Command line entrypoint: ``relapse [-f relapse.toml] [-T] [TASK ...]``."""

from __future__ import annotations

import argparse
import contextlib
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import get_args

from .config import DEFAULT_CONFIG_FILE, load_project
from .errors import RelapseError
from .models import Platform
from .project import Project
from .tasks import TaskRegistry

DEFAULT_TASK = "package"
NO_TASKS_MESSAGE = "No tasks for this platform."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relapse",
        description="Build and package an application from a relapse.toml declaration.",
    )
    parser.add_argument(
        "-f",
        "--file",
        default=DEFAULT_CONFIG_FILE,
        help=f"project configuration (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "-T",
        "--list",
        action="store_true",
        help="list the generated tasks that have descriptions and exit",
    )
    parser.add_argument(
        "--platform",
        choices=get_args(Platform),
        default=None,
        help="generate tasks as if running on this platform",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="write structured log records to this JSON-lines file",
    )
    parser.add_argument(
        "tasks",
        nargs="*",
        metavar="TASK",
        help=f"tasks to run (default: {DEFAULT_TASK})",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config_path = Path(args.file).resolve()
    project: Project | None = None
    try:
        project = load_project(config_path, platform=args.platform)
        registry = TaskRegistry(logger=project.logger)
        with contextlib.chdir(config_path.parent):
            project.generate_tasks(registry)
            if args.list:
                _print_task_list(registry)
            elif not args.tasks and not len(registry):
                print(NO_TASKS_MESSAGE)
            else:
                for name in args.tasks or [DEFAULT_TASK]:
                    registry.invoke(name)
    except RelapseError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        if args.log_file is not None and project is not None:
            project.logger.to_json_lines(args.log_file)
    return 0


def _print_task_list(registry: TaskRegistry) -> None:
    described = [task for task in registry.tasks if task.description]
    if not described:
        print(NO_TASKS_MESSAGE)
        return
    width = max(len(task.name) for task in described)
    for task in sorted(described, key=lambda item: item.name):
        print(f"relapse {task.name.ljust(width)}  # {task.description}")


if __name__ == "__main__":
    sys.exit(main())

"""Task-engine protocol and the in-process registry that runs emitted tasks.

The compiler only ever talks to a :class:`TaskEngine`; :class:`TaskRegistry`
is the engine used by the command line and the test-suite. It keeps task
definitions in definition order, refuses redefinition, and runs a task's
prerequisites depth-first before its own action, at most once per task.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

from relapse.errors import TaskDefinitionError, TaskExecutionError, TaskNotFoundError
from relapse.observability import StructuredLogger

TaskAction = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Task:
    name: str
    prerequisites: tuple[str, ...] = ()
    action: TaskAction | None = None
    description: str | None = None


class TaskEngine(Protocol):
    def define_task(
        self,
        name: str,
        prerequisites: Iterable[str] = (),
        action: TaskAction | None = None,
        *,
        description: str | None = None,
    ) -> Task:
        """Register a task; defining the same name twice is an error."""

    def lookup_task(self, name: str) -> Task:
        """Return a defined task or raise ``TaskNotFoundError``."""


@dataclass(slots=True)
class TaskRegistry:
    """In-process task engine with memoised, dependency-ordered execution."""

    logger: StructuredLogger = field(default_factory=StructuredLogger)
    _tasks: dict[str, Task] = field(init=False, default_factory=dict, repr=False)
    _completed: set[str] = field(init=False, default_factory=set, repr=False)

    def define_task(
        self,
        name: str,
        prerequisites: Iterable[str] = (),
        action: TaskAction | None = None,
        *,
        description: str | None = None,
    ) -> Task:
        if not name:
            raise TaskDefinitionError("Task names must be non-empty.")
        if name in self._tasks:
            raise TaskDefinitionError(
                "Task is already defined.",
                hint="Each task may only be defined once per registry.",
                context={"task": name},
            )
        task = Task(
            name=name,
            prerequisites=tuple(prerequisites),
            action=action,
            description=description,
        )
        self._tasks[name] = task
        return task

    def lookup_task(self, name: str) -> Task:
        task = self._tasks.get(name)
        if task is None:
            raise TaskNotFoundError(
                "Task is not defined.",
                hint="Run with --list to see the available tasks.",
                context={"task": name},
            )
        return task

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks.values())

    def names(self) -> list[str]:
        return list(self._tasks)

    def completed(self, name: str) -> bool:
        return name in self._completed

    def invoke(self, name: str) -> None:
        self._invoke(name, chain=())

    def clear(self) -> None:
        self._tasks.clear()
        self._completed.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def _invoke(self, name: str, *, chain: tuple[str, ...]) -> None:
        if name in chain:
            cycle = " => ".join((*chain, name))
            raise TaskExecutionError(
                "Circular task dependency detected.",
                context={"task": name, "cycle": cycle},
            )
        if name in self._completed:
            return
        task = self.lookup_task(name)
        for prerequisite in task.prerequisites:
            self._invoke(prerequisite, chain=(*chain, name))
        if task.action is not None:
            self.logger.log(
                operation="invoke_task",
                task=name,
                builder=None,
                archiver=None,
                message="Running task action.",
            )
            task.action()
        self._completed.add(name)


__all__ = ["Task", "TaskAction", "TaskEngine", "TaskRegistry"]

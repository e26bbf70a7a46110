"""Declarative task graph of a module."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from enterprise_build.conventions.ordering import resolve_order
from enterprise_build.conventions.types import Requirement
from enterprise_build.errors import InvalidInputError, TaskNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["Task", "TaskContainer"]


@dataclass
class Task:
    """A named build step and the tasks it depends on.

    ``inputs`` carries the declarative values handed to the external tool
    that performs the step (compiler settings, merge instruction, ...).
    """

    name: str
    depends_on: list[str] = field(default_factory=list)
    inputs: dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def depend_on(self, *names: str) -> None:
        for name in names:
            if name not in self.depends_on:
                self.depends_on.append(name)

    def unwire(self, *names: str) -> None:
        self.depends_on = [n for n in self.depends_on if n not in names]


class TaskContainer:
    """Tasks registered on one module, keyed by name."""

    def __init__(self, module_name: str) -> None:
        self._module_name = module_name
        self._tasks: dict[str, Task] = {}

    def register(self, name: str, depends_on: list[str] | None = None, description: str = "") -> Task:
        """Register a task, or return the existing one with extra dependencies merged in."""
        if not name:
            raise InvalidInputError(message="Task name must be a non-empty string")
        task = self._tasks.get(name)
        if task is None:
            task = Task(name=name, description=description)
            self._tasks[name] = task
            logger.debug("Module '%s': registered task '%s'", self._module_name, name)
        task.depend_on(*(depends_on or []))
        return task

    def named(self, name: str) -> Task:
        """Return the task called ``name``.

        Raises:
            TaskNotFoundError: If no such task is registered.
        """
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskNotFoundError(module_name=self._module_name, task_name=name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def names(self) -> list[str]:
        return list(self._tasks)

    def execution_plan(self, name: str) -> list[str]:
        """Return the tasks needed to run ``name``, prerequisites first.

        Raises:
            TaskNotFoundError: If ``name`` or any task it depends on is unknown.
            CircularDependencyError: If task dependencies form a cycle.
        """
        closure: list[str] = []
        seen: set[str] = set()
        stack = [name]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            closure.append(current)
            stack.extend(reversed(self.named(current).depends_on))

        entries = [
            (task_name, [Requirement(dep) for dep in self._tasks[task_name].depends_on])
            for task_name in reversed(closure)
        ]
        return resolve_order(entries)

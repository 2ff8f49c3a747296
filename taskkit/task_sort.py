"""Orderings for task listings."""

from __future__ import annotations

from typing import Any, MutableSequence, Protocol


class TaskSorter(Protocol):
    def sort(self, tasks: MutableSequence[Any]) -> None: ...


class Noop:
    """Keeps tasks in the order they were given."""

    def sort(self, tasks: MutableSequence[Any]) -> None:
        # Every task compares equal, so the stable sort keeps the given order.
        tasks[:] = sorted(tasks, key=lambda _task: 0)


class AlphaNumeric:
    """Sorts tasks by name."""

    def sort(self, tasks: MutableSequence[Any]) -> None:
        tasks[:] = sorted(tasks, key=lambda t: t.task)


class AlphaNumericWithRootTasksFirst:
    """Sorts tasks by name, listing tasks without a namespace first."""

    def sort(self, tasks: MutableSequence[Any]) -> None:
        tasks[:] = sorted(tasks, key=lambda t: (":" in t.task, t.task))
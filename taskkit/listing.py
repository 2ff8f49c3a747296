"""Task listing options, plain name listings and Taskfile creation."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Any, Iterable, Optional, TextIO

from .errors import TaskfileAlreadyExistsError
from .filepathext import smart_join
from .task_sort import AlphaNumericWithRootTasksFirst, TaskSorter

DEFAULT_TASKFILE = """version: '3'

vars:
  GREETING: Hello, World!

tasks:
  default:
    cmds:
      - echo "{{.GREETING}}"
    silent: true
"""

DEFAULT_TASKFILE_NAME = "Taskfile.yml"


@dataclass
class ListOptions:
    """Options controlling how tasks are listed."""

    list_only_tasks_with_descriptions: bool = False
    list_all_tasks: bool = False
    format_task_list_as_json: bool = False
    no_status: bool = False

    def should_list_tasks(self) -> bool:
        """True if one of the listing options is set."""
        return self.list_only_tasks_with_descriptions or self.list_all_tasks

    def validate(self) -> None:
        """Raise ``ValueError`` if the options are inconsistent."""
        if self.list_only_tasks_with_descriptions and self.list_all_tasks:
            raise ValueError("task: cannot use --list and --list-all at the same time")
        if self.format_task_list_as_json and not self.should_list_tasks():
            raise ValueError("task: --json only applies to --list or --list-all")
        if self.no_status and not self.format_task_list_as_json:
            raise ValueError("task: --no-status only applies to --json with --list or --list-all")


def list_task_names(
    tasks: Iterable[Any],
    all_tasks: bool = False,
    out: Optional[TextIO] = None,
    sorter: Optional[TaskSorter] = None,
) -> None:
    """Print task names and aliases, one per line.

    Only tasks with a description are printed unless ``all_tasks`` is set;
    internal tasks are never printed.
    """
    writer = out if out is not None else sys.stdout
    ordered = list(tasks)
    (sorter if sorter is not None else AlphaNumericWithRootTasksFirst()).sort(ordered)

    for task in ordered:
        if getattr(task, "internal", False):
            continue
        if not (all_tasks or getattr(task, "desc", "")):
            continue
        print(task.task.rstrip(":"), file=writer)
        for alias in getattr(task, "aliases", None) or []:
            print(alias.rstrip(":"), file=writer)


def init_taskfile(out: TextIO, directory: str) -> str:
    """Create a default Taskfile in ``directory`` and return its path."""
    path = smart_join(directory, DEFAULT_TASKFILE_NAME)
    if os.path.exists(path):
        raise TaskfileAlreadyExistsError()
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(DEFAULT_TASKFILE)
    out.write(f"{DEFAULT_TASKFILE} created in the current directory\n")
    return path
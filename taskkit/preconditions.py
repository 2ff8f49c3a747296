"""Checking a task's preconditions before it runs."""

from __future__ import annotations

from typing import Any

from .env import task_environ
from .execext import run_command
from .logger import Color, Logger


class PreconditionFailedError(Exception):
    """A precondition command of a task failed."""

    def __init__(self) -> None:
        super().__init__("task: precondition not met")


def check_preconditions(task: Any, logger: Logger) -> bool:
    """Run every precondition; log its message and raise on the first failure."""
    for precondition in getattr(task, "preconditions", None) or []:
        try:
            run_command(precondition.sh, directory=task.dir, env=task_environ(task))
        except Exception as err:
            logger.errf(Color.MAGENTA, "task: %s\n", precondition.msg)
            raise PreconditionFailedError() from err
    return True
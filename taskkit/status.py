"""Status commands that decide whether a task is up to date."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .env import task_environ
from .execext import run_command
from .logger import Color, Logger


@dataclass
class StatusChecker:
    """Runs a task's status commands; all must succeed for it to be up to date."""

    logger: Optional[Logger] = None

    def _log(self, s: str, *args: Any) -> None:
        if self.logger is not None:
            self.logger.verbose_outf(Color.YELLOW, s, *args)

    def is_up_to_date(self, task: Any) -> bool:
        for command in getattr(task, "status", None) or []:
            try:
                run_command(command, directory=task.dir, env=task_environ(task))
            except Exception as err:  # any failure means "not up to date"
                self._log("task: status command %s exited non-zero: %s\n", command, err)
                return False
            self._log("task: status command %s exited zero\n", command)
        return True
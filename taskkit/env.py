"""Environment variables for tasks."""

from __future__ import annotations

import os
from typing import Any, Optional

from .omap import OrderedMap


def task_environ(task: Any) -> Optional[dict[str, str]]:
    """The process environment extended with the task's string variables.

    Variables already set in the process environment are only replaced when
    the task's entry asks to overwrite them. Returns ``None`` when the task
    has no environment of its own.
    """
    task_env = getattr(task, "env", None)
    if task_env is None:
        return None

    environ = dict(os.environ)
    for key, entry in task_env.items():
        value = getattr(entry, "value", entry)
        if not isinstance(value, str):
            continue
        if key in os.environ and not getattr(entry, "overwrite", False):
            continue
        environ[key] = value
    return environ


def environ_vars() -> OrderedMap[str, str]:
    """All process environment variables as an ordered map."""
    return OrderedMap(os.environ.items())
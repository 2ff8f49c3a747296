"""Combining status commands and sources into one up-to-date decision."""

from __future__ import annotations

from typing import Any, Optional

from .logger import Logger
from .sources import new_sources_checker
from .status import StatusChecker


def is_task_up_to_date(
    task: Any,
    method: str = "none",
    temp_dir: str = "",
    dry: bool = False,
    logger: Optional[Logger] = None,
    status_checker: Optional[Any] = None,
    sources_checker: Optional[Any] = None,
) -> bool:
    """True if every configured check (status, sources) reports up to date.

    A task with neither status commands nor sources is never up to date.
    """
    if status_checker is None:
        status_checker = StatusChecker(logger)
    if sources_checker is None:
        sources_checker = new_sources_checker(method, temp_dir, dry)

    status_is_set = bool(getattr(task, "status", None))
    sources_is_set = bool(getattr(task, "sources", None))

    status_up_to_date = status_checker.is_up_to_date(task) if status_is_set else False
    sources_up_to_date = sources_checker.is_up_to_date(task) if sources_is_set else False

    if status_is_set and sources_is_set:
        return status_up_to_date and sources_up_to_date
    if status_is_set:
        return status_up_to_date
    if sources_is_set:
        return sources_up_to_date
    return False
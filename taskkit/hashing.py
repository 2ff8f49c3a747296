"""Hashes that decide whether a task call was already executed."""

from __future__ import annotations

import dataclasses
import hashlib
from typing import Any, Callable, Mapping

HashFunc = Callable[[Any], str]


def _canonical(value: Any) -> str:
    if value is None or isinstance(value, (bool, int, float, str, bytes)):
        return repr(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        inner = ",".join(
            f"{f.name}={_canonical(getattr(value, f.name))}" for f in dataclasses.fields(value)
        )
        return f"{type(value).__name__}({inner})"
    if isinstance(value, Mapping) or callable(getattr(value, "items", None)):
        entries = sorted(f"{_canonical(k)}:{_canonical(v)}" for k, v in value.items())
        return "{" + ",".join(entries) + "}"
    if isinstance(value, (set, frozenset)):
        return "set(" + ",".join(sorted(_canonical(v) for v in value)) + ")"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonical(v) for v in value) + "]"
    if hasattr(value, "__dict__"):
        inner = ",".join(f"{k}={_canonical(v)}" for k, v in sorted(vars(value).items()))
        return f"{type(value).__name__}({inner})"
    return repr(value)


def empty_hash(task: Any) -> str:
    """Every call is distinct: the task always runs."""
    # No part of the task goes into the key.
    return (getattr(task, "task", "") or "")[:0]


def name_hash(task: Any) -> str:
    """Calls of the same task are the same: the task runs once."""
    return task.task


def structure_hash(task: Any) -> str:
    """Calls are the same only if the compiled task is identical."""
    digest = hashlib.sha256(_canonical(task).encode("utf-8")).digest()
    return f"{task.task}:{int.from_bytes(digest[:8], 'big')}"


_BY_RUN: dict[str, HashFunc] = {
    "always": empty_hash,
    "once": name_hash,
    "when_changed": structure_hash,
}


def get_hash(task: Any, default_run: str = "always") -> str:
    """Hash ``task`` according to its ``run`` setting, or ``default_run``."""
    run = getattr(task, "run", "") or default_run
    try:
        func = _BY_RUN[run]
    except KeyError:
        raise ValueError(f'task: invalid run "{run}"') from None
    return func(task)
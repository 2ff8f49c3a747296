"""Glob matching of task sources and generated files."""

from __future__ import annotations

import glob as _glob
import os
import stat
from typing import Any, Iterable

from .execext import expand
from .filepathext import smart_join


def _pattern_of(entry: Any) -> tuple[str, bool]:
    if isinstance(entry, str):
        return entry, False
    return entry.glob, bool(getattr(entry, "negate", False))


def globs(directory: str, patterns: Iterable[Any]) -> list[str]:
    """Files matched by ``patterns``, sorted; negated patterns remove matches.

    Patterns are strings or objects with ``glob`` and ``negate`` attributes.
    Patterns that fail to match are ignored.
    """
    included: dict[str, bool] = {}
    for entry in patterns or ():
        pattern, negate = _pattern_of(entry)
        try:
            matches = glob(directory, pattern)
        except (OSError, ValueError):
            continue
        for match in matches:
            included[match] = not negate
    return sorted(path for path, keep in included.items() if keep)


def glob(directory: str, pattern: str) -> list[str]:
    """Regular files matching ``pattern`` relative to ``directory``.

    Raises ``FileNotFoundError`` when nothing matches the pattern.
    """
    full = expand(smart_join(directory, pattern))
    matches = sorted(_glob.glob(full, recursive=True))
    if not matches:
        raise FileNotFoundError(f"no files match {full}")
    return [path for path in matches if not stat.S_ISDIR(os.stat(path).st_mode)]
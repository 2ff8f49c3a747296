"""Path helpers that understand Taskfile special directory variables."""

from __future__ import annotations

import os

_KNOWN_ABS_DIRS = (".ROOT_DIR", ".TASKFILE_DIR", ".USER_WORKING_DIR")


def _join(*parts: str) -> str:
    present = [part for part in parts if part]
    if not present:
        return ""
    return os.path.normpath(os.path.join(*present))


def smart_join(a: str, b: str) -> str:
    """Join ``a`` and ``b`` unless ``b`` is already absolute."""
    if is_abs(b):
        return b
    return _join(a, b)


def is_abs(path: str) -> bool:
    """True for absolute paths and for paths using a known absolute variable."""
    if any(special in path for special in _KNOWN_ABS_DIRS):
        return True
    return os.path.isabs(path)


def try_abs_to_rel(abs_path: str) -> str:
    """Make ``abs_path`` relative to the working directory when possible."""
    if not os.path.isabs(abs_path):
        return abs_path
    try:
        return os.path.relpath(abs_path, os.getcwd())
    except (OSError, ValueError):
        return abs_path
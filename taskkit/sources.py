"""Checkers deciding whether a task's sources changed since its last run."""

from __future__ import annotations

import abc
import hashlib
import os
import re
import time
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from .filepathext import smart_join
from .globbing import glob, globs

_FILENAME_RE = re.compile(r"[^A-z0-9]")
_CHUNK = 128 * 1024


def normalize_filename(name: str) -> str:
    """Replace characters unsafe in file names with ``-``."""
    return _FILENAME_RE.sub("-", name)


def _task_name(task: Any) -> str:
    return getattr(task, "label", "") or task.task


def _sources(task: Any) -> list[Any]:
    return list(getattr(task, "sources", None) or [])


def _generates(task: Any) -> list[Any]:
    return list(getattr(task, "generates", None) or [])


class SourcesChecker(abc.ABC):
    """Decides whether the sources of a task are up to date."""

    kind: str = ""

    @abc.abstractmethod
    def is_up_to_date(self, task: Any) -> bool: ...

    @abc.abstractmethod
    def value(self, task: Any) -> Any: ...

    @abc.abstractmethod
    def on_error(self, task: Any) -> None: ...


class ChecksumChecker(SourcesChecker):
    """Compares a checksum of the source files with the one stored last time."""

    kind = "checksum"

    def __init__(self, temp_dir: str, dry: bool = False) -> None:
        self.temp_dir = temp_dir
        self.dry = dry

    def is_up_to_date(self, task: Any) -> bool:
        if not _sources(task):
            return False

        checksum_file = self._checksum_file_path(task)
        try:
            with open(checksum_file, encoding="utf-8") as handle:
                old_hash = handle.read().strip()
        except OSError:
            old_hash = ""

        try:
            new_hash = self._checksum(task)
        except OSError:
            return False

        if not self.dry and old_hash != new_hash:
            try:
                os.makedirs(smart_join(self.temp_dir, "checksum"), exist_ok=True)
            except OSError:
                pass
            with open(checksum_file, "w", encoding="utf-8") as handle:
                handle.write(new_hash + "\n")

        for entry in _generates(task):
            pattern = entry if isinstance(entry, str) else entry.glob
            if not isinstance(entry, str) and getattr(entry, "negate", False):
                continue
            try:
                generated = glob(task.dir, pattern)
            except FileNotFoundError:
                return False
            if not generated:
                return False

        return old_hash == new_hash

    def value(self, task: Any) -> str:
        return self._checksum(task)

    def on_error(self, task: Any) -> None:
        """Forget the stored checksum so the task runs again next time."""
        if not _sources(task):
            return
        os.remove(self._checksum_file_path(task))

    def _checksum(self, task: Any) -> str:
        digest = hashlib.blake2b(digest_size=16)
        for path in globs(task.dir, _sources(task)):
            # The file name is part of the sum so renaming a file changes it.
            digest.update(os.path.basename(path).encode("utf-8"))
            with open(path, "rb") as handle:
                for chunk in iter(lambda: handle.read(_CHUNK), b""):
                    digest.update(chunk)
        return digest.hexdigest()

    def _checksum_file_path(self, task: Any) -> str:
        return os.path.join(self.temp_dir, "checksum", normalize_filename(_task_name(task)))


def _max_mtime(paths: Iterable[str]) -> Optional[int]:
    newest: Optional[int] = None
    for path in paths:
        mtime = os.stat(path).st_mtime_ns
        if newest is None or mtime > newest:
            newest = mtime
    return newest


def _any_newer(paths: Iterable[str], threshold: int) -> bool:
    return any(os.stat(path).st_mtime_ns > threshold for path in paths)


class TimestampChecker(SourcesChecker):
    """Compares modification times of sources with those of generated files."""

    kind = "timestamp"

    def __init__(self, temp_dir: str, dry: bool = False) -> None:
        self.temp_dir = temp_dir
        self.dry = dry

    def is_up_to_date(self, task: Any) -> bool:
        if not _sources(task):
            return False

        sources = globs(task.dir, _sources(task))
        generates = globs(task.dir, _generates(task))

        stamp = self._timestamp_file_path(task)
        if os.path.exists(stamp):
            # An old marker file means the task has to run again.
            generates.append(stamp)
        elif not self.dry:
            os.makedirs(os.path.dirname(stamp), exist_ok=True)
            open(stamp, "w").close()

        task_time = time.time_ns()

        try:
            newest_generated = _max_mtime(generates)
        except OSError:
            return False
        if newest_generated is None:
            return False

        try:
            should_update = _any_newer(sources, newest_generated)
        except OSError:
            return False

        if not self.dry:
            os.utime(stamp, ns=(task_time, task_time))

        return not should_update

    def value(self, task: Any) -> datetime:
        """The newest modification time among the sources, or the epoch."""
        newest = _max_mtime(globs(task.dir, _sources(task)))
        if newest is None:
            return datetime.fromtimestamp(0, timezone.utc)
        return datetime.fromtimestamp(newest / 1_000_000_000, timezone.utc)

    def on_error(self, task: Any) -> None:
        return None

    def _timestamp_file_path(self, task: Any) -> str:
        return os.path.join(self.temp_dir, "timestamp", normalize_filename(task.task))


class NoneChecker(SourcesChecker):
    """Never considers a task up to date."""

    kind = "none"

    def is_up_to_date(self, task: Any) -> bool:
        return False

    def value(self, task: Any) -> str:
        return ""

    def on_error(self, task: Any) -> None:
        return None


def new_sources_checker(method: str, temp_dir: str = "", dry: bool = False) -> SourcesChecker:
    """Build the checker for ``method``: timestamp, checksum or none."""
    if method == "timestamp":
        return TimestampChecker(temp_dir, dry)
    if method == "checksum":
        return ChecksumChecker(temp_dir, dry)
    if method == "none":
        return NoneChecker()
    raise ValueError(f'task: invalid method "{method}"')
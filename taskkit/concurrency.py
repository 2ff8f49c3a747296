"""Limiting how many tasks run at the same time."""

from __future__ import annotations

import threading
from typing import Callable, Optional


def _nothing() -> None:
    return None


class _Undo:
    """A one-shot callable that is also a context manager calling itself on exit."""

    def __init__(self, action: Callable[[], None]) -> None:
        self._action = action
        self._done = False
        self._lock = threading.Lock()

    def __call__(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
        self._action()

    def __enter__(self) -> "_Undo":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self()


class ConcurrencyLimiter:
    """Allows at most ``concurrency`` holders at once; zero or less means no limit."""

    def __init__(self, concurrency: int = 0) -> None:
        self._semaphore: Optional[threading.Semaphore] = (
            threading.Semaphore(concurrency) if concurrency > 0 else None
        )

    def acquire(self) -> _Undo:
        """Take a slot, blocking until one is free; call the result to give it back."""
        if self._semaphore is None:
            return _Undo(_nothing)
        self._semaphore.acquire()
        return _Undo(self._semaphore.release)

    def release(self) -> _Undo:
        """Give up a held slot for a while; call the result to take one again."""
        if self._semaphore is None:
            return _Undo(_nothing)
        self._semaphore.release()
        return _Undo(self._semaphore.acquire)
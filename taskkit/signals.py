"""Interception of interrupt signals so running commands can clean up."""

from __future__ import annotations

import json
import os
import signal
from dataclasses import dataclass
from typing import Any, Callable

from .logger import Color, Logger

_NAMES = {signal.SIGINT: "interrupt", signal.SIGTERM: "terminated"}


def _signal_name(signum: int) -> str:
    try:
        sig = signal.Signals(signum)
    except ValueError:
        return f"signal {signum}"
    return _NAMES.get(sig, sig.name)


@dataclass
class InterruptCounter:
    """Logs the first two signals and forces an exit on the third."""

    logger: Logger
    exit_func: Callable[[int], Any] = os._exit
    count: int = 0

    def handle(self, signum: int, frame: Any = None) -> None:
        self.count += 1
        name = json.dumps(_signal_name(signum))
        if self.count < 3:
            self.logger.outf(Color.YELLOW, "task: Signal received: %s\n", name)
            return
        self.logger.errf(
            Color.RED,
            "task: Signal received for the third time: %s. Forcing shutdown\n",
            name,
        )
        for stream in (self.logger.stdout, self.logger.stderr):
            if stream is not None:
                stream.flush()
        self.exit_func(1)


def intercept_interrupt_signals(logger: Logger) -> InterruptCounter:
    """Install handlers for SIGINT and SIGTERM; must run in the main thread."""
    counter = InterruptCounter(logger)
    signal.signal(signal.SIGINT, counter.handle)
    signal.signal(signal.SIGTERM, counter.handle)
    return counter
"""A test helper that sleeps for a while, optionally handling interrupts."""

from __future__ import annotations

import os
import queue
import re
import signal
import sys
import threading
import time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Sequence, TextIO

from .errors import _format_duration

USAGE = """sleepit: sleep for the specified duration, optionally handling signals
When the line "sleepit: ready" is printed, it means that it is safe to send signals to it
Usage: sleepit <command> [<args>]
Commands
  default     Use default action: on reception of SIGINT terminate abruptly
  handle      Handle signals: on reception of SIGINT perform cleanup before exiting
  version     Show the sleepit version"""

FULL_VERSION = "unknown"

_UNITS_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_PART_RE = re.compile(r"([0-9]*\.?[0-9]*)(ns|us|µs|μs|ms|s|m|h)")
_STEP = 0.1
_POLL = 0.01


def parse_duration(text: str) -> float:
    """Parse a duration such as ``1h2m``, ``1.5s`` or ``50ms`` into seconds."""
    s = text
    sign = 1
    if s and s[0] in "+-":
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s == "0":
        return 0.0
    if not s:
        raise ValueError(f'time: invalid duration "{text}"')
    total = Decimal(0)
    position = 0
    while position < len(s):
        match = _PART_RE.match(s, position)
        if match is None or match.group(1) in ("", "."):
            raise ValueError(f'time: invalid duration "{text}"')
        try:
            total += Decimal(match.group(1)) * _UNITS_NS[match.group(2)]
        except InvalidOperation:
            raise ValueError(f'time: invalid duration "{text}"') from None
        position = match.end()
    return sign * float(total / Decimal(1_000_000_000))


def format_duration(seconds: float) -> str:
    """Render seconds the way durations are written, e.g. ``5s`` or ``50ms``."""
    return _format_duration(seconds)


class _Printer:
    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._lock = threading.Lock()

    def __call__(self, line: str) -> None:
        with self._lock:
            self._out.write(line + "\n")
            self._out.flush()


class _Worker:
    """Simulated work that ends at a deadline or when cancelled."""

    def __init__(self, name: str, howlong: float, done: "queue.Queue[str]", say: _Printer) -> None:
        self.name = name
        self._deadline = time.monotonic() + howlong
        self._done = done
        self._say = say
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        self._say(f"sleepit: {self.name} started")
        while True:
            if self._cancelled.is_set():
                self._say(f"sleepit: {self.name} canceled")
                return
            if time.monotonic() > self._deadline:
                self._say(f"sleepit: {self.name} done")
                self._done.put(self.name)
                return
            self._cancelled.wait(_STEP)

    def cancel(self) -> None:
        """Cancel and wait until the worker has stopped."""
        self._cancelled.set()
        self._thread.join()


def supervisor(
    sleep: float,
    cleanup: float = 0.0,
    term_after: int = 0,
    signals: Optional["queue.Queue[Any]"] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Run the work; on the first signal switch to cleanup. Return the exit code.

    0: work finished; 3: cleanup finished; 4: terminated after ``term_after`` signals.
    """
    say = _Printer(out if out is not None else sys.stdout)
    say("sleepit: ready")
    say(
        f"sleepit: PID={os.getpid()} sleep={format_duration(sleep)} "
        f"cleanup={format_duration(cleanup)}"
    )
    done: "queue.Queue[str]" = queue.Queue()
    work = _Worker("work", sleep, done, say)
    work_cancelled = False
    cleaner: Optional[_Worker] = None
    count = 0

    while True:
        if signals is not None:
            try:
                sig = signals.get_nowait()
            except queue.Empty:
                pass
            else:
                count += 1
                say(f"sleepit: got signal={sig} count={count}")
                if count == 1:
                    work.cancel()
                    work_cancelled = True
                    cleaner = _Worker("cleanup", cleanup, done, say)
                if count == term_after:
                    if cleaner is not None:
                        cleaner.cancel()
                    return 4
                continue
        try:
            name = done.get(timeout=_POLL)
        except queue.Empty:
            continue
        if name == "work":
            if work_cancelled:
                continue
            return 0
        return 3


class _UsageError(Exception):
    pass


class _HelpRequested(Exception):
    pass


_Spec = dict  # flag name -> (parser, default, help)


def _parse_go_flags(args: Sequence[str], spec: dict[str, tuple[Callable[[str], Any], Any, str]]):
    values = {name: default for name, (_, default, _) in spec.items()}
    position = 0
    while position < len(args):
        arg = args[position]
        if len(arg) < 2 or arg[0] != "-":
            break
        position += 1
        if arg == "--":
            break
        body = arg[2:] if arg.startswith("--") else arg[1:]
        if not body or body[0] in "-=":
            raise _UsageError(f"bad flag syntax: {arg}")
        name, eq, value = body.partition("=")
        if name not in spec:
            if name in ("h", "help"):
                raise _HelpRequested()
            raise _UsageError(f"flag provided but not defined: -{name}")
        if not eq:
            if position >= len(args):
                raise _UsageError(f"flag needs an argument: -{name}")
            value = args[position]
            position += 1
        parser = spec[name][0]
        try:
            values[name] = parser(value)
        except ValueError:
            raise _UsageError(f'invalid value "{value}" for flag -{name}: parse error') from None
    return values, list(args[position:])


def _parse_int(text: str) -> int:
    return int(text, 0)


def _print_flagset_usage(name: str, spec: dict) -> None:
    print(f"Usage of {name}:", file=sys.stderr)
    for flag, (parser, default, help_text) in spec.items():
        kind = "duration" if parser is parse_duration else "int"
        shown = format_duration(default) if parser is parse_duration else str(default)
        print(f"  -{flag} {kind}\n    \t{help_text} (default {shown})", file=sys.stderr)


def _format_list(items: Sequence[str]) -> str:
    return "[" + " ".join(items) + "]"


def run(args: Sequence[str]) -> int:
    """Run the command line ``args`` (without the program name); return the exit code."""
    args = list(args)
    if not args:
        print(USAGE, file=sys.stderr)
        return 2

    default_spec = {"sleep": (parse_duration, 5.0, "Sleep duration")}
    handle_spec = {
        "sleep": (parse_duration, 5.0, "Sleep duration"),
        "cleanup": (parse_duration, 5.0, "Cleanup duration"),
        "term-after": (
            _parse_int,
            0,
            "Terminate immediately after `N` signals.\n"
            "Default is to terminate only when the cleanup phase has completed.",
        ),
    }
    specs: dict[str, dict] = {"default": default_spec, "handle": handle_spec, "version": {}}

    command = args[0]
    if command not in specs:
        print(USAGE, file=sys.stderr)
        return 2

    spec = specs[command]
    try:
        values, rest = _parse_go_flags(args[1:], spec)
    except _HelpRequested:
        _print_flagset_usage(command, spec)
        return 0
    except _UsageError as err:
        print(err, file=sys.stderr)
        _print_flagset_usage(command, spec)
        return 2

    if command == "default":
        if rest:
            print(f"default: unexpected arguments: {_format_list(rest)}", file=sys.stderr)
            return 2
        return supervisor(values["sleep"], 0.0, 0, None)

    if command == "handle":
        if values["term-after"] == 1:
            print("handle: term-after cannot be 1", file=sys.stderr)
            return 2
        if rest:
            print(f"handle: unexpected arguments: {_format_list(rest)}", file=sys.stderr)
            return 2
        signals: "queue.Queue[str]" = queue.Queue()
        previous = signal.signal(signal.SIGINT, lambda signum, frame: signals.put("interrupt"))
        try:
            return supervisor(values["sleep"], values["cleanup"], values["term-after"], signals)
        finally:
            signal.signal(signal.SIGINT, previous)

    if rest:
        print(f"version: unexpected arguments: {_format_list(rest)}", file=sys.stderr)
        return 2
    print(f"sleepit version {FULL_VERSION}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``sleepit`` command."""
    return run(sys.argv[1:] if argv is None else argv)
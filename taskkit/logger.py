"""Coloured output to stdout and stderr, plus interactive prompts."""

from __future__ import annotations

import enum
import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Optional, TextIO

_INT_RE = re.compile(r"[+-]?\d+")
_RESET = "\x1b[0m"


class PromptCancelledError(Exception):
    """The user answered a prompt with something other than a continue value."""

    def __init__(self) -> None:
        super().__init__("prompt cancelled")


class NoTerminalError(Exception):
    """A prompt was requested but stdin/stdout are not a terminal."""

    def __init__(self) -> None:
        super().__init__("no terminal")


def _isatty(fd: int) -> bool:
    try:
        return os.isatty(fd)
    except OSError:
        return False


def is_terminal() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    return _isatty(0) and _isatty(1)


def _colors_enabled() -> bool:
    if os.environ.get("FORCE_COLOR", ""):
        return True
    if os.environ.get("NO_COLOR", ""):
        return False
    if os.environ.get("TERM", "") == "dumb":
        return False
    return _isatty(1)


class Color(enum.Enum):
    """Terminal colours; each may be overridden by a ``TASK_COLOR_*`` variable."""

    DEFAULT = ("TASK_COLOR_RESET", 0)
    BLUE = ("TASK_COLOR_BLUE", 34)
    GREEN = ("TASK_COLOR_GREEN", 32)
    CYAN = ("TASK_COLOR_CYAN", 36)
    YELLOW = ("TASK_COLOR_YELLOW", 33)
    MAGENTA = ("TASK_COLOR_MAGENTA", 35)
    RED = ("TASK_COLOR_RED", 31)

    def __init__(self, env_name: str, default_code: int) -> None:
        self.env_name = env_name
        self.default_code = default_code

    @property
    def code(self) -> int:
        """The SGR code to use, honouring an environment override."""
        override = os.environ.get(self.env_name, "")
        if _INT_RE.fullmatch(override):
            return int(override)
        return self.default_code

    def paint(self, text: str) -> str:
        """Wrap ``text`` in escape sequences when colour output is enabled."""
        if not _colors_enabled():
            return text
        return f"\x1b[{self.code}m{text}{_RESET}"


def _format(s: str, args: tuple[Any, ...]) -> str:
    return s % args if args else s


@dataclass
class Logger:
    """Prints to stdout or stderr, optionally in colour."""

    stdin: Optional[TextIO] = None
    stdout: Optional[TextIO] = None
    stderr: Optional[TextIO] = None
    verbose: bool = False
    color: bool = False
    assume_yes: bool = False
    assume_term: bool = False

    @property
    def _stdin(self) -> TextIO:
        return self.stdin if self.stdin is not None else sys.stdin

    @property
    def _stdout(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    @property
    def _stderr(self) -> TextIO:
        return self.stderr if self.stderr is not None else sys.stderr

    def _write(self, writer: TextIO, color: Color, s: str, args: tuple[Any, ...]) -> None:
        if not self.color:
            color = Color.DEFAULT
        writer.write(color.paint(_format(s, args)))

    def outf(self, color: Color, s: str, *args: Any) -> None:
        """Print to stdout; ``s`` is a %-format when arguments are given."""
        self._write(self._stdout, color, s, args)

    def foutf(self, writer: TextIO, color: Color, s: str, *args: Any) -> None:
        """Print to ``writer``."""
        self._write(writer, color, s, args)

    def verbose_outf(self, color: Color, s: str, *args: Any) -> None:
        if self.verbose:
            self.outf(color, s, *args)

    def errf(self, color: Color, s: str, *args: Any) -> None:
        """Print to stderr."""
        self._write(self._stderr, color, s, args)

    def verbose_errf(self, color: Color, s: str, *args: Any) -> None:
        if self.verbose:
            self.errf(color, s, *args)

    def prompt(self, color: Color, prompt: str, default_value: str, *args: str) -> None:
        """Ask a question; return normally only if the answer is a continue value."""
        if self.assume_yes:
            self.outf(color, "%s [assuming yes]\n", prompt)
            return
        if not self.assume_term and not is_terminal():
            raise NoTerminalError()
        if not args:
            raise ValueError("no continue values provided")

        self.outf(color, "%s [%s/%s]\n", prompt, args[0].lower(), default_value.upper())

        line = self._stdin.readline()
        if not line.endswith("\n"):
            raise EOFError("unexpected end of input")
        answer = line.lower().strip()
        if answer not in args:
            raise PromptCancelledError()
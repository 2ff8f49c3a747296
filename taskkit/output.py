"""Output styles that decide how task command output is written."""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TextIO, Tuple, Union


class Templater(Protocol):
    def replace(self, tmpl: str) -> str: ...


CloseFunc = Callable[[Optional[BaseException]], None]
Wrapped = Tuple[TextIO, TextIO, CloseFunc]


@dataclass(frozen=True)
class Interleaved:
    """Writes output straight through as it arrives."""

    def wrap_writer(
        self, stdout: TextIO, stderr: TextIO, prefix: str = "", templater: Optional[Templater] = None
    ) -> Wrapped:
        def close(err: Optional[BaseException] = None) -> None:
            stdout.flush()
            stderr.flush()

        return stdout, stderr, close


class _GroupWriter(io.TextIOBase):
    def __init__(self, writer: TextIO, begin: str, end: str) -> None:
        super().__init__()
        self._writer = writer
        self._buffer = io.StringIO()
        self._begin = begin
        self._end = end

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        return self._buffer.write(text)

    def flush_group(self) -> None:
        content = self._buffer.getvalue()
        if not content:
            return
        self._writer.write(self._begin)
        self._writer.write(content + self._end)
        self._buffer = io.StringIO()


@dataclass(frozen=True)
class Group:
    """Buffers all output and writes it in one block when the task ends."""

    begin: str = ""
    end: str = ""
    error_only: bool = False

    def wrap_writer(
        self, stdout: TextIO, stderr: TextIO, prefix: str = "", templater: Optional[Templater] = None
    ) -> Wrapped:
        begin = templater.replace(self.begin) + "\n" if self.begin else ""
        end = templater.replace(self.end) + "\n" if self.end else ""
        writer = _GroupWriter(stdout, begin, end)

        def close(err: Optional[BaseException] = None) -> None:
            if self.error_only and err is None:
                return
            writer.flush_group()

        return writer, writer, close


class _PrefixWriter(io.TextIOBase):
    def __init__(self, writer: TextIO, prefix: str) -> None:
        super().__init__()
        self._writer = writer
        self._prefix = prefix
        self._pending = ""

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        self._pending += text
        self._write_lines(force=False)
        return len(text)

    def finish(self) -> None:
        self._write_lines(force=True)

    def _write_lines(self, force: bool) -> None:
        *lines, rest = self._pending.split("\n")
        for line in lines:
            self._write_line(line + "\n")
        if force:
            self._write_line(rest)
            rest = ""
        self._pending = rest

    def _write_line(self, line: str) -> None:
        if not line:
            return
        if not line.endswith("\n"):
            line += "\n"
        self._writer.write(f"[{self._prefix}] {line}")


@dataclass(frozen=True)
class Prefixed:
    """Writes every output line prefixed with the task name."""

    def wrap_writer(
        self, stdout: TextIO, stderr: TextIO, prefix: str = "", templater: Optional[Templater] = None
    ) -> Wrapped:
        writer = _PrefixWriter(stdout, prefix)

        def close(err: Optional[BaseException] = None) -> None:
            writer.finish()

        return writer, writer, close


Output = Union[Interleaved, Group, Prefixed]


def _check_group_unset(name: str, group_begin: str, group_end: str) -> None:
    if group_begin or group_end:
        raise ValueError(
            f"task: output style {json.dumps(name)} does not support the group begin/end parameter"
        )


def build_for(
    name: str = "",
    group_begin: str = "",
    group_end: str = "",
    group_error_only: bool = False,
) -> Output:
    """Build the output style with the given name."""
    if name in ("interleaved", ""):
        _check_group_unset(name, group_begin, group_end)
        return Interleaved()
    if name == "group":
        return Group(begin=group_begin, end=group_end, error_only=group_error_only)
    if name == "prefixed":
        _check_group_unset(name, group_begin, group_end)
        return Prefixed()
    raise ValueError(f"task: output style {json.dumps(name)} not recognized")
"""Parsing of command-line task names and global variables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .omap import OrderedMap


@dataclass
class Call:
    """A request to run a task, with optional variables."""

    task: str
    vars: Optional[OrderedMap[str, Any]] = None


def parse(*args: str) -> tuple[list[Call], OrderedMap[str, str]]:
    """Split arguments into task calls and ``NAME=value`` global variables."""
    calls: list[Call] = []
    globals_: OrderedMap[str, str] = OrderedMap()
    for arg in args:
        if "=" not in arg:
            calls.append(Call(task=arg))
            continue
        name, value = arg.split("=", 1)
        globals_.set(name, value)
    return calls, globals_
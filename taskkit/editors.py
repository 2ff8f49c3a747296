"""Task list output for editor integrations."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Location:
    """Where a task is defined in a Taskfile."""

    line: int = 0
    column: int = 0
    taskfile: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "column": self.column, "taskfile": self.taskfile}


@dataclass
class EditorTask:
    """A single task in the editor listing."""

    name: str
    desc: str = ""
    summary: str = ""
    aliases: Optional[list[str]] = field(default_factory=list)
    up_to_date: bool = False
    location: Optional[Location] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "desc": self.desc,
            "summary": self.summary,
            "aliases": None if self.aliases is None else list(self.aliases),
            "up_to_date": self.up_to_date,
            "location": None if self.location is None else self.location.to_dict(),
        }


@dataclass
class EditorTaskfile:
    """The task list of a Taskfile, as consumed by editors."""

    tasks: list[EditorTask] = field(default_factory=list)
    location: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"tasks": [task.to_dict() for task in self.tasks], "location": self.location}

    def to_json(self) -> str:
        """Indented JSON with HTML-sensitive characters escaped, ending in a newline."""
        text = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        for char, escape in _HTML_ESCAPES.items():
            text = text.replace(char, escape)
        return text + "\n"
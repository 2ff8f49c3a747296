"""Command-line flags of the task runner."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from .experiments import GENTLE_FORCE, REMOTE_TASKFILES, Experiment, load_experiments
from .sleepit import parse_duration

USAGE = """Usage: task [flags...] [task...]

Runs the specified task(s). Falls back to the "default" task if no task name
was specified, or lists all tasks if an unknown task name was specified.

Example: 'task hello' with the following 'Taskfile.yml' file will generate an
'output.txt' file with the content "hello".

'''
version: '3'
tasks:
  hello:
    cmds:
      - echo "I am going to write a file named 'output.txt' now."
      - echo "hello" > output.txt
    generates:
      - output.txt
'''

Options:
"""

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass
class Flags:
    """Parsed command-line options plus the remaining positional arguments."""

    version: bool = False
    help: bool = False
    init: bool = False
    list: bool = False
    list_all: bool = False
    list_json: bool = False
    task_sort: str = ""
    status: bool = False
    no_status: bool = False
    insecure: bool = False
    force: bool = False
    force_all: bool = False
    watch: bool = False
    verbose: bool = False
    silent: bool = False
    assume_yes: bool = False
    dry: bool = False
    summary: bool = False
    exit_code: bool = False
    parallel: bool = False
    concurrency: int = 0
    dir: str = ""
    entrypoint: str = ""
    output: str = ""
    output_group_begin: str = ""
    output_group_end: str = ""
    output_group_error_only: bool = False
    color: bool = True
    interval: float = 0.0
    global_: bool = False
    experiments: bool = False
    download: bool = False
    offline: bool = False
    timeout: float = 0.0
    args: list[str] = field(default_factory=list)
    args_len_at_dash: int = -1

    def validate(self) -> None:
        """Raise ``ValueError`` for combinations of flags that cannot be used together."""
        if self.download and self.offline:
            raise ValueError("task: You can't set both --download and --offline flags")
        if self.global_ and self.dir:
            raise ValueError("task: You can't set both --global and --dir")
        if self.dir and self.entrypoint:
            raise ValueError("task: You can't set both --dir and --taskfile")
        if self.output != "group":
            if self.output_group_begin:
                raise ValueError("task: You can't set --output-group-begin without --output=group")
            if self.output_group_end:
                raise ValueError("task: You can't set --output-group-end without --output=group")
            if self.output_group_error_only:
                raise ValueError(
                    "task: You can't set --output-group-error-only without --output=group"
                )


@dataclass(frozen=True)
class _Option:
    long: str
    short: str
    dest: str
    kind: str
    default: Any


def _enabled(experiments: Mapping[str, Experiment], name: str) -> bool:
    x = experiments.get(name)
    return bool(x is not None and x.enabled)


def _options(experiments: Mapping[str, Experiment]) -> list[_Option]:
    options = [
        _Option("version", "", "version", "bool", False),
        _Option("help", "h", "help", "bool", False),
        _Option("init", "i", "init", "bool", False),
        _Option("list", "l", "list", "bool", False),
        _Option("list-all", "a", "list_all", "bool", False),
        _Option("json", "j", "list_json", "bool", False),
        _Option("sort", "", "task_sort", "str", ""),
        _Option("status", "", "status", "bool", False),
        _Option("no-status", "", "no_status", "bool", False),
        _Option("insecure", "", "insecure", "bool", False),
        _Option("watch", "w", "watch", "bool", False),
        _Option("verbose", "v", "verbose", "bool", False),
        _Option("silent", "s", "silent", "bool", False),
        _Option("yes", "y", "assume_yes", "bool", False),
        _Option("parallel", "p", "parallel", "bool", False),
        _Option("dry", "n", "dry", "bool", False),
        _Option("summary", "", "summary", "bool", False),
        _Option("exit-code", "x", "exit_code", "bool", False),
        _Option("dir", "d", "dir", "str", ""),
        _Option("taskfile", "t", "entrypoint", "str", ""),
        _Option("output", "o", "output", "str", ""),
        _Option("output-group-begin", "", "output_group_begin", "str", ""),
        _Option("output-group-end", "", "output_group_end", "str", ""),
        _Option("output-group-error-only", "", "output_group_error_only", "bool", False),
        _Option("color", "c", "color", "bool", True),
        _Option("concurrency", "C", "concurrency", "int", 0),
        _Option("interval", "I", "interval", "duration", 0.0),
        _Option("global", "g", "global_", "bool", False),
        _Option("experiments", "", "experiments", "bool", False),
    ]
    if _enabled(experiments, GENTLE_FORCE):
        options.append(_Option("force", "f", "force", "bool", False))
        options.append(_Option("force-all", "", "force_all", "bool", False))
    else:
        options.append(_Option("force", "f", "force_all", "bool", False))
    if _enabled(experiments, REMOTE_TASKFILES):
        options.append(_Option("download", "", "download", "bool", False))
        options.append(_Option("offline", "", "offline", "bool", False))
        options.append(_Option("timeout", "", "timeout", "duration", 10.0))
    return options


def _convert(option: _Option, value: str) -> Any:
    shown = f"-{option.short}, --{option.long}" if option.short else f"--{option.long}"
    try:
        if option.kind == "bool":
            if value in _TRUE:
                return True
            if value in _FALSE:
                return False
            raise ValueError(value)
        if option.kind == "int":
            try:
                return int(value, 0)
            except ValueError:
                return int(value, 10)
        if option.kind == "duration":
            return parse_duration(value)
    except ValueError:
        raise ValueError(f'invalid argument "{value}" for "{shown}" flag') from None
    return value


def parse_flags(
    argv: Optional[Sequence[str]] = None,
    experiments: Optional[Mapping[str, Experiment]] = None,
) -> Flags:
    """Parse ``argv`` (without the program name); flags may follow task names."""
    args = list(sys.argv[1:] if argv is None else argv)
    if experiments is None:
        experiments = load_experiments(args)
    options = _options(experiments)
    by_long = {o.long: o for o in options}
    by_short = {o.short: o for o in options if o.short}
    values: dict[str, Any] = {o.dest: o.default for o in options}
    positional: list[str] = []
    at_dash = -1

    position = 0
    while position < len(args):
        arg = args[position]
        position += 1
        if arg == "--":
            at_dash = len(positional)
            positional.extend(args[position:])
            break
        if arg.startswith("--"):
            name, eq, value = arg[2:].partition("=")
            option = by_long.get(name)
            if option is None:
                raise ValueError(f"unknown flag: --{name}")
            if eq:
                values[option.dest] = _convert(option, value)
            elif option.kind == "bool":
                values[option.dest] = True
            else:
                if position >= len(args):
                    raise ValueError(f"flag needs an argument: --{name}")
                values[option.dest] = _convert(option, args[position])
                position += 1
        elif arg.startswith("-") and len(arg) > 1:
            shorts = arg[1:]
            while shorts:
                char, rest = shorts[0], shorts[1:]
                option = by_short.get(char)
                if option is None:
                    raise ValueError(f"unknown shorthand flag: {char!r} in {arg}")
                if rest.startswith("="):
                    values[option.dest] = _convert(option, rest[1:])
                    break
                if option.kind == "bool":
                    values[option.dest] = True
                    shorts = rest
                    continue
                if rest:
                    values[option.dest] = _convert(option, rest)
                    break
                if position >= len(args):
                    raise ValueError(f"flag needs an argument: {char!r} in -{char}")
                values[option.dest] = _convert(option, args[position])
                position += 1
                break
        else:
            positional.append(arg)

    return Flags(**values, args=positional, args_len_at_dash=at_dash)
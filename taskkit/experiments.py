"""Experimental features switched on through ``TASK_X_*`` environment variables."""

from __future__ import annotations

import os
import posixpath
import sys
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, TextIO, Union

from dotenv import dotenv_values

from .logger import Color, Logger

ENV_PREFIX = "TASK_X_"

GENTLE_FORCE = "GENTLE_FORCE"
REMOTE_TASKFILES = "REMOTE_TASKFILES"
ANY_VARIABLES = "ANY_VARIABLES"


@dataclass(frozen=True)
class Experiment:
    """An experiment, its raw environment value and whether that value enables it."""

    name: str
    enabled: bool = False
    value: str = ""

    def __str__(self) -> str:
        if self.enabled:
            return f"on ({self.value})"
        return "off"


def new_experiment(name: str, *args: str) -> Experiment:
    """Read experiment ``name``; ``args`` are the values that enable it (default ``1``)."""
    enabled_values = args or ("1",)
    value = os.environ.get(f"{ENV_PREFIX}{name}", "")
    return Experiment(name=name, enabled=value in enabled_values, value=value)


def _option_value(args: Sequence[str], short: str, long: str) -> str:
    """Last value given to ``-short``/``--long`` in ``args``, ignoring other flags."""
    found = ""
    position = 0
    while position < len(args):
        arg = args[position]
        position += 1
        if arg == "--":
            break
        if arg in (f"-{short}", f"--{long}"):
            if position < len(args):
                found = args[position]
                position += 1
        elif arg.startswith(f"--{long}="):
            found = arg[len(long) + 3:]
        elif arg.startswith(f"-{short}") and not arg.startswith("--"):
            found = arg[2:].removeprefix("=")
    return found


def env_file_path(argv: Optional[Sequence[str]] = None) -> str:
    """The ``.env`` file next to the directory or Taskfile named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    directory = _option_value(args, "d", "dir")
    if directory:
        return posixpath.normpath(posixpath.join(directory, ".env"))
    taskfile = _option_value(args, "t", "taskfile")
    if taskfile:
        return posixpath.normpath(posixpath.join(posixpath.dirname(taskfile), ".env"))
    return ".env"


def read_dot_env(argv: Optional[Sequence[str]] = None) -> None:
    """Export every ``TASK_X_*`` entry of the ``.env`` file into the environment."""
    try:
        values = dotenv_values(env_file_path(argv))
    except OSError:
        return
    for key, value in values.items():
        if key.startswith(ENV_PREFIX) and value is not None:
            os.environ[key] = value


def load_experiments(argv: Optional[Sequence[str]] = None) -> dict[str, Experiment]:
    """Read the ``.env`` file, then every known experiment, keyed by name."""
    read_dot_env(argv)
    return {
        GENTLE_FORCE: new_experiment(GENTLE_FORCE),
        REMOTE_TASKFILES: new_experiment(REMOTE_TASKFILES),
        ANY_VARIABLES: new_experiment(ANY_VARIABLES, "1", "2"),
    }


def list_experiments(
    logger: Logger,
    experiments: Union[Mapping[str, Experiment], Iterable[Experiment]],
    out: Optional[TextIO] = None,
) -> None:
    """Print each experiment and its state in aligned columns."""
    writer = out if out is not None else sys.stdout
    items = list(experiments.values() if isinstance(experiments, Mapping) else experiments)
    width = max((len(f"* {x.name}: ") for x in items), default=0)
    for x in items:
        padding = " " * (width - len(f"* {x.name}: "))
        logger.foutf(writer, Color.YELLOW, "* ")
        logger.foutf(writer, Color.GREEN, "%s", x.name)
        logger.foutf(writer, Color.DEFAULT, ": %s%s\n", padding, str(x))
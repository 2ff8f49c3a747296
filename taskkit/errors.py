"""Errors raised while loading Taskfiles and running tasks, each with an exit code."""

from __future__ import annotations

import http
import json
from datetime import timedelta
from typing import Any, Iterable, Optional

# General exit codes
CODE_OK = 0
CODE_UNKNOWN = 1

# Taskfile related exit codes
CODE_TASKFILE_NOT_FOUND = 100
CODE_TASKFILE_ALREADY_EXISTS = 101
CODE_TASKFILE_INVALID = 102
CODE_TASKFILE_FETCH_FAILED = 103
CODE_TASKFILE_NOT_TRUSTED = 104
CODE_TASKFILE_NOT_SECURE = 105
CODE_TASKFILE_CACHE_NOT_FOUND = 106
CODE_TASKFILE_VERSION_CHECK_ERROR = 107
CODE_TASKFILE_NETWORK_TIMEOUT = 108

# Task related exit codes
CODE_TASK_NOT_FOUND = 200
CODE_TASK_RUN_ERROR = 201
CODE_TASK_INTERNAL = 202
CODE_TASK_NAME_CONFLICT = 203
CODE_TASK_CALLED_TOO_MANY_TIMES = 204
CODE_TASK_CANCELLED = 205
CODE_TASK_MISSING_REQUIRED_VARS = 206


def _quote(value: Any) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def _fraction(value: int, unit: int) -> str:
    whole, part = divmod(value, unit)
    if not part:
        return str(whole)
    digits = str(part).rjust(len(str(unit)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def _format_duration(value: float | timedelta) -> str:
    """Render a duration the way human-readable durations are printed by the CLI."""
    if isinstance(value, timedelta):
        value = value.total_seconds()
    ns = round(value * 1_000_000_000)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{_fraction(ns, 1_000)}µs"
    if ns < 1_000_000_000:
        return f"{sign}{_fraction(ns, 1_000_000)}ms"
    hours, rem = divmod(ns, 3600 * 1_000_000_000)
    minutes, rem = divmod(rem, 60 * 1_000_000_000)
    seconds = _fraction(rem, 1_000_000_000) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return sign + seconds


class TaskError(Exception):
    """Base class for errors that carry a process exit code."""

    code: int = CODE_UNKNOWN


class TaskNotFoundError(TaskError):
    """The requested task does not exist in the Taskfile."""

    code = CODE_TASK_NOT_FOUND

    def __init__(self, task_name: str, did_you_mean: str = "") -> None:
        self.task_name = task_name
        self.did_you_mean = did_you_mean
        if did_you_mean:
            message = (
                f"task: Task {_quote(task_name)} does not exist. "
                f"Did you mean {_quote(did_you_mean)}?"
            )
        else:
            message = f"task: Task {_quote(task_name)} does not exist"
        super().__init__(message)


class TaskRunError(TaskError):
    """A command in a task failed."""

    code = CODE_TASK_RUN_ERROR

    def __init__(self, task_name: str, err: BaseException) -> None:
        self.task_name = task_name
        self.err = err
        super().__init__(f"task: Failed to run task {_quote(task_name)}: {err}")

    def task_exit_code(self) -> int:
        """Exit status of the failed command if known, else this error's code."""
        status = getattr(self.err, "exit_status", None)
        if isinstance(status, int) and not isinstance(status, bool):
            return status
        return self.code


class TaskInternalError(TaskError):
    """An internal task was called directly."""

    code = CODE_TASK_INTERNAL

    def __init__(self, task_name: str) -> None:
        self.task_name = task_name
        super().__init__(f'task: Task "{task_name}" is internal')


class TaskNameConflictError(TaskError):
    """Several tasks match one name or alias."""

    code = CODE_TASK_NAME_CONFLICT

    def __init__(self, call: str, task_names: Iterable[str]) -> None:
        self.call = call
        self.task_names = list(task_names)
        super().__init__(
            f"task: Found multiple tasks ({', '.join(self.task_names)}) "
            f"that match {_quote(call)}"
        )


class TaskCalledTooManyTimesError(TaskError):
    """The maximum number of calls of a task was exceeded."""

    code = CODE_TASK_CALLED_TOO_MANY_TIMES

    def __init__(self, task_name: str, maximum_task_call: int) -> None:
        self.task_name = task_name
        self.maximum_task_call = maximum_task_call
        super().__init__(
            f"task: Maximum task call exceeded ({maximum_task_call}) for task "
            f"{_quote(task_name)}: probably an cyclic dep or infinite loop"
        )


class TaskCancelledByUserError(TaskError):
    """The user declined a prompt."""

    code = CODE_TASK_CANCELLED

    def __init__(self, task_name: str) -> None:
        self.task_name = task_name
        super().__init__(f"task: Task {_quote(task_name)} cancelled by user")


class TaskCancelledNoTerminalError(TaskError):
    """A task with a prompt was run outside a terminal."""

    code = CODE_TASK_CANCELLED

    def __init__(self, task_name: str) -> None:
        self.task_name = task_name
        super().__init__(
            f"task: Task {_quote(task_name)} cancelled because it has a prompt and "
            "the environment is not a terminal. Use --yes (-y) to run anyway."
        )


class TaskMissingRequiredVarsError(TaskError):
    """A task lacks variables it requires."""

    code = CODE_TASK_MISSING_REQUIRED_VARS

    def __init__(self, task_name: str, missing_vars: Iterable[str]) -> None:
        self.task_name = task_name
        self.missing_vars = list(missing_vars)
        super().__init__(
            f"task: Task {_quote(task_name)} cancelled because it is missing "
            f"required variables: {', '.join(self.missing_vars)}"
        )


class TaskfileNotFoundError(TaskError):
    """No Taskfile was found."""

    code = CODE_TASKFILE_NOT_FOUND

    def __init__(self, uri: str, walk: bool = False) -> None:
        self.uri = uri
        self.walk = walk
        walk_text = " (or any of the parent directories)" if walk else ""
        super().__init__(f"task: No Taskfile found at {_quote(uri)}{walk_text}")


class TaskfileAlreadyExistsError(TaskError):
    """A Taskfile already exists where one was to be created."""

    code = CODE_TASKFILE_ALREADY_EXISTS

    def __init__(self) -> None:
        super().__init__("task: A Taskfile already exists")


class TaskfileInvalidError(TaskError):
    """The Taskfile could not be parsed."""

    code = CODE_TASKFILE_INVALID

    def __init__(self, uri: str, err: Any) -> None:
        self.uri = uri
        self.err = err
        super().__init__(f"task: Failed to parse {uri}:\n{err}")


class TaskfileFetchFailedError(TaskError):
    """Downloading a remote Taskfile failed."""

    code = CODE_TASKFILE_FETCH_FAILED

    def __init__(self, uri: str, http_status_code: int = 0) -> None:
        self.uri = uri
        self.http_status_code = http_status_code
        status_text = ""
        if http_status_code:
            try:
                phrase = http.HTTPStatus(http_status_code).phrase
            except ValueError:
                phrase = ""
            status_text = f" with status code {http_status_code} ({phrase})"
        super().__init__(f"task: Download of {_quote(uri)} failed{status_text}")


class TaskfileNotTrustedError(TaskError):
    """The user did not trust a remote Taskfile."""

    code = CODE_TASKFILE_NOT_TRUSTED

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"task: Taskfile {_quote(uri)} not trusted by user")


class TaskfileNotSecureError(TaskError):
    """A remote Taskfile would be downloaded over an insecure connection."""

    code = CODE_TASKFILE_NOT_SECURE

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(
            f"task: Taskfile {_quote(uri)} cannot be downloaded over an insecure "
            "connection. You can override this by using the --insecure flag"
        )


class TaskfileCacheNotFoundError(TaskError):
    """An offline Taskfile is missing from the cache."""

    code = CODE_TASKFILE_CACHE_NOT_FOUND

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(
            f"task: Taskfile {_quote(uri)} was not found in the cache. Remove the "
            "--offline flag to use a remote copy or download it using the --download flag"
        )


class TaskfileVersionCheckError(TaskError):
    """The Taskfile schema version is missing or unsupported."""

    code = CODE_TASKFILE_VERSION_CHECK_ERROR

    def __init__(self, uri: str, schema_version: Optional[Any] = None, message: str = "") -> None:
        self.uri = uri
        self.schema_version = schema_version
        self.message = message
        if schema_version is None:
            text = f"task: Missing schema version in Taskfile {_quote(uri)}"
        else:
            text = (
                f"task: Invalid schema version in Taskfile {_quote(uri)}:\n"
                f"Schema version ({schema_version}) {message}"
            )
        super().__init__(text)


class TaskfileNetworkTimeoutError(TaskError):
    """A remote Taskfile could not be fetched in time."""

    code = CODE_TASKFILE_NETWORK_TIMEOUT

    def __init__(self, uri: str, timeout: float | timedelta, checked_cache: bool = False) -> None:
        self.uri = uri
        self.timeout = timeout
        self.checked_cache = checked_cache
        cache_text = " and no offline copy was found in the cache" if checked_cache else ""
        super().__init__(
            f"task: Network connection timed out after {_format_duration(timeout)} "
            f"while attempting to download Taskfile {_quote(uri)}{cache_text}"
        )
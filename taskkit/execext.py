"""Running shell commands and expanding shell-style paths."""

from __future__ import annotations

import io
import os
import re
import shlex
import shutil
import subprocess
from typing import Any, Mapping, Optional, Sequence

_VAR_RE = re.compile(r"\$\{(\w+)\}|\$(\w+)")


class ExitStatusError(Exception):
    """A shell command finished with a non-zero exit status."""

    def __init__(self, exit_status: int) -> None:
        self.exit_status = exit_status
        super().__init__(f"exit status {exit_status}")


def _shell() -> str:
    return shutil.which("bash") or shutil.which("sh") or "/bin/sh"


def _fileno(stream: Any) -> Optional[int]:
    try:
        return stream.fileno()
    except (AttributeError, OSError, io.UnsupportedOperation, ValueError):
        return None


def _output_target(stream: Any) -> tuple[Any, Any]:
    """Return what to hand to the process and the stream to copy captured output to."""
    if stream is None:
        return subprocess.DEVNULL, None
    fd = _fileno(stream)
    if fd is not None:
        stream.flush()
        return fd, None
    return subprocess.PIPE, stream


def _copy_captured(data: Optional[bytes], target: Any) -> None:
    if target is None or not data:
        return
    if isinstance(target, (io.RawIOBase, io.BufferedIOBase)):
        target.write(data)
    else:
        target.write(data.decode("utf-8", errors="replace"))


def run_command(
    command: str,
    directory: str = "",
    env: Optional[Mapping[str, str]] = None,
    posix_opts: Sequence[str] = (),
    bash_opts: Sequence[str] = (),
    stdin: Any = None,
    stdout: Any = None,
    stderr: Any = None,
) -> None:
    """Run ``command`` in a shell with ``errexit`` set.

    Streams left as ``None`` are discarded (or empty, for stdin). An empty or
    missing ``env`` means the current process environment. Raises
    ``ExitStatusError`` when the command exits non-zero.
    """
    params: list[str] = []
    for opt in [*posix_opts, "e"]:
        if len(opt) == 1:
            params.append(f"-{opt}")
        else:
            params.extend(["-o", opt])

    script = command
    if bash_opts:
        script = f"shopt -s {' '.join(bash_opts)}\n{command}"

    environ = dict(env) if env else dict(os.environ)

    stdin_arg: Any = subprocess.DEVNULL
    input_data: Optional[bytes] = None
    if stdin is not None:
        fd = _fileno(stdin)
        if fd is not None:
            stdin_arg = fd
        else:
            data = stdin.read()
            input_data = data.encode("utf-8") if isinstance(data, str) else bytes(data)
            stdin_arg = None

    out_arg, out_target = _output_target(stdout)
    err_arg, err_target = _output_target(stderr)

    kwargs: dict[str, Any] = {
        "cwd": directory or None,
        "env": environ,
        "stdout": out_arg,
        "stderr": err_arg,
    }
    if input_data is not None:
        kwargs["input"] = input_data
    else:
        kwargs["stdin"] = stdin_arg

    result = subprocess.run([_shell(), *params, "-c", script], check=False, **kwargs)

    _copy_captured(result.stdout, out_target)
    _copy_captured(result.stderr, err_target)

    if result.returncode != 0:
        code = result.returncode if result.returncode > 0 else 128 - result.returncode
        raise ExitStatusError(code)


def is_exit_error(err: BaseException) -> bool:
    """True if ``err`` reports a command's exit status."""
    return isinstance(err, ExitStatusError)


def expand(s: str) -> str:
    """Expand variables and a leading ``~`` in ``s``; spaces do not split it."""
    if os.sep == "\\":
        s = s.replace("\\", "/")
    s = s.replace(" ", "\\ ")
    s = _VAR_RE.sub(lambda m: os.environ.get(m.group(1) or m.group(2), ""), s)
    fields = shlex.split(s)
    if not fields:
        return ""
    first = fields[0]
    if first.startswith("~"):
        first = os.path.expanduser(first)
    return first
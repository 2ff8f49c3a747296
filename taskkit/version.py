"""The version of this tool."""

from __future__ import annotations

from importlib import metadata

_version = ""


def get_version() -> str:
    """Return the configured version, the installed version, or ``unknown``."""
    if _version:
        return _version
    try:
        installed = metadata.version("taskkit")
    except metadata.PackageNotFoundError:
        return "unknown"
    return installed or "unknown"
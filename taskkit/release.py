"""Release helper: bump the version and update the changelog and package files."""

from __future__ import annotations

import re
import subprocess
import sys
from datetime import date as _date
from typing import Optional, Sequence

import semver

CHANGELOG_SOURCE = "CHANGELOG.md"
CHANGELOG_TARGET = "docs/docs/changelog.md"

_RELEASE_RE = re.compile(r"## Unreleased")
_VERSION_RE = re.compile(r'^  "version": "\d+\.\d+\.\d+",$', re.MULTILINE)


def _parse_version(text: str) -> semver.Version:
    text = text.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    return semver.Version.parse(text, optional_minor_and_patch=True)


def get_version() -> semver.Version:
    """The version of the latest git tag."""
    result = subprocess.run(
        ["git", "describe", "--tags", "--abbrev=0"],
        check=True,
        capture_output=True,
        text=True,
    )
    return _parse_version(result.stdout)


def bump_version(version: semver.Version, verb: str) -> semver.Version:
    """Apply ``major``, ``minor``, ``patch`` or an explicit version to ``version``."""
    if verb == "major":
        return semver.Version(version.major + 1, 0, 0)
    if verb == "minor":
        return semver.Version(version.major, version.minor + 1, 0)
    if verb == "patch":
        if version.prerelease or version.build:
            return semver.Version(version.major, version.minor, version.patch)
        return semver.Version(version.major, version.minor, version.patch + 1)
    return _parse_version(verb)


def changelog(
    version: semver.Version,
    source_path: str = CHANGELOG_SOURCE,
    target_path: str = CHANGELOG_TARGET,
    date: Optional[str] = None,
) -> None:
    """Date the unreleased section and copy the changelog under the target's frontmatter."""
    with open(target_path, encoding="utf-8") as handle:
        current = handle.read()
    sections = current.split("---", 2)
    if len(sections) != 3:
        raise ValueError("error: invalid frontmatter")
    frontmatter = sections[1].strip()

    with open(source_path, encoding="utf-8") as handle:
        text = handle.read()
    day = date if date is not None else _date.today().strftime("%Y-%m-%d")
    heading = f"## v{version} - {day}"
    text = _RELEASE_RE.sub(lambda _: heading, text)

    with open(source_path, "w", encoding="utf-8") as handle:
        handle.write(text)
    with open(target_path, "w", encoding="utf-8") as handle:
        handle.write(f"---\n{frontmatter}\n---\n\n{text}")


def set_json_version(file_name: str, version: semver.Version) -> None:
    """Replace the top-level ``"version"`` line of a JSON package file."""
    with open(file_name, encoding="utf-8") as handle:
        text = handle.read()
    line = f'  "version": "{version}",'
    text = _VERSION_RE.sub(lambda _: line, text)
    with open(file_name, "w", encoding="utf-8") as handle:
        handle.write(text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: ``release <major|minor|patch|VERSION>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if len(args) != 1:
            raise ValueError("error: expected version number")
        version = bump_version(get_version(), args[0])
        print(version)
        changelog(version)
        set_json_version("package.json", version)
        set_json_version("package-lock.json", version)
    except (ValueError, OSError, subprocess.CalledProcessError) as err:
        print(err)
        return 1
    return 0
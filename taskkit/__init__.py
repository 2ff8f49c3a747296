"""Building blocks for a task runner: ordered variables, output styles, up-to-date checks, listing and helper commands."""

__version__ = "0.1.0"
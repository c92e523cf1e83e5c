"""Exceptions for fatal, run-aborting conditions.

Per-file problems (a file failing its integrity test, an encode or backup
that did not succeed) are not exceptions; they are recorded as outcomes and
counted. Everything in this module stops the current operation and is
reported to the user by the CLI.
"""

from pathlib import Path


class FlacHealthError(Exception):
    """Base exception for fatal FLAC Health errors.

    All run-aborting exceptions inherit from this class, allowing the CLI
    to catch them with a single except clause.
    """


class ConfigStoreError(FlacHealthError):
    """Raised when the persisted library configuration cannot be read or written."""


class LibraryNotFoundError(FlacHealthError):
    """Raised when a library root is missing or is not a directory.

    Attributes:
        path: The path that was requested.
    """

    def __init__(self, path: Path, reason: str = "does not exist") -> None:
        self.path = path
        super().__init__(f"The directory '{path}' {reason}.")


class ReportNotFoundError(FlacHealthError):
    """Raised when no scan report is available for re-encoding."""

    def __init__(self, reports_dir: Path) -> None:
        self.reports_dir = reports_dir
        super().__init__(
            f"No scan report found in '{reports_dir}'. Please run a scan first."
        )


class ReportFormatError(FlacHealthError):
    """Raised when a scan report cannot be parsed."""


class ToolNotAvailableError(FlacHealthError):
    """Raised when a required external tool is not installed.

    Attributes:
        tool: Name of the missing tool.
    """

    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        message = f"The '{tool}' command is not installed."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)

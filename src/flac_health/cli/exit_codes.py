"""Centralized exit codes for the CLI.

Every fatal precondition failure (missing flac, missing directory, no
report, declined confirmation) exits with GENERAL_ERROR.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for FLAC Health."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT (conventionally 130, but we use 2 for simplicity)

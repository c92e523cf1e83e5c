"""Shared CLI output helpers for errors and warnings."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from flac_health.cli.exit_codes import ExitCode


def error_exit(message: str, code: ExitCode | int = ExitCode.GENERAL_ERROR) -> NoReturn:
    """Print ``Error: message`` to stderr and exit.

    Note:
        This function never returns; it always calls sys.exit().
    """
    click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def warning_output(message: str) -> None:
    """Print ``Warning: message`` to stderr."""
    click.echo(f"Warning: {message}", err=True)


def banner(title: str, width: int = 38) -> None:
    """Print a title framed by rules."""
    rule = "=" * width
    click.echo(rule)
    click.echo(f" {title}")
    click.echo(rule)

"""Set or update the configured library path."""

from __future__ import annotations

from pathlib import Path

import click

from flac_health.cli.session import LIBRARY_PROMPT, CliSession
from flac_health.scanner.orchestrator import validate_library_root


def set_library_path(session: CliSession) -> None:
    """Prompt for a library directory and persist it.

    Raises:
        LibraryNotFoundError: If the entered path is not a directory.
        ConfigStoreError: If the configuration cannot be written.
    """
    current = session.store.load()
    if current.is_set:
        click.echo(f"Current library path: {current.library_path}")
    else:
        click.echo("No library path configured yet.")

    entered = click.prompt(
        LIBRARY_PROMPT,
        default=current.library_path or None,
    )
    root = validate_library_root(Path(entered.strip()).expanduser())
    saved = session.store.save(root.resolve())
    click.echo(f"Library path set to: {saved.library_path}")

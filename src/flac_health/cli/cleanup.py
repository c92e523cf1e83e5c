"""Remove backup folders from the library."""

from __future__ import annotations

import click

from flac_health.cli.output import error_exit, warning_output
from flac_health.cli.session import CliSession
from flac_health.core.formatting import format_file_size
from flac_health.executor.cleanup import (
    CleanupResult,
    directory_size,
    find_backup_dirs,
    remove_backup_dirs,
)

# Folders listed before the confirmation prompt
MAX_LISTED = 10


def run_cleanup(session: CliSession) -> CleanupResult | None:
    """List backup folders under the library and delete them on confirmation.

    Returns:
        CleanupResult, or None when there was nothing to remove.
    """
    root = session.resolve_library()
    backup_dir_name = session.config.reencode.backup_dir_name

    dirs = find_backup_dirs(root, backup_dir_name)
    if not dirs:
        click.echo(f"No '{backup_dir_name}' folders found under {root}.")
        return None

    total_size = sum(directory_size(d) for d in dirs)
    click.echo(
        f"Found {len(dirs):,} backup folder(s) using {format_file_size(total_size)}:"
    )
    for directory in dirs[:MAX_LISTED]:
        click.echo(f"  {directory}")
    if len(dirs) > MAX_LISTED:
        click.echo(f"  ... and {len(dirs) - MAX_LISTED:,} more")

    if not click.confirm("Delete these backup folders?", default=False):
        error_exit("User did not confirm. Aborting cleanup.")

    result = remove_backup_dirs(dirs)
    click.echo(
        f"Removed {len(result.removed):,} backup folder(s), "
        f"freed {format_file_size(result.bytes_freed)}."
    )
    for directory, error in result.failed:
        warning_output(f"Could not remove {directory}: {error}")
    return result

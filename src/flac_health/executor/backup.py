"""Backup creation for files about to be replaced.

Backups live in a directory beside the original (for example inside the
album folder), keyed by file name. A new backup of the same file replaces
the previous one: last backup wins, there is no versioning.
"""

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def get_backup_path(file_path: Path, backup_dir_name: str) -> Path:
    """Get the backup path for a given file.

    Args:
        file_path: Path to the original file.
        backup_dir_name: Name of the sibling backup directory.

    Returns:
        Path where the backup would be stored.
    """
    return file_path.parent / backup_dir_name / file_path.name


def has_backup(file_path: Path, backup_dir_name: str) -> bool:
    """Check if a backup exists for a file."""
    return get_backup_path(file_path, backup_dir_name).exists()


def _fsync_file(path: Path) -> None:
    with path.open("rb") as f:
        os.fsync(f.fileno())


def _fsync_dir(path: Path) -> None:
    # Directory fsync is not supported everywhere (e.g. Windows)
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def create_backup(file_path: Path, backup_dir_name: str) -> Path:
    """Copy a file into its sibling backup directory before modification.

    The copy keeps the original's content and timestamps (shutil.copy2).
    It is written to a hidden partial file, flushed to disk and then moved
    over any previous backup of the same name, so a copy that fails midway
    never truncates an existing backup.

    Args:
        file_path: Path to the file to back up.
        backup_dir_name: Name of the sibling backup directory.

    Returns:
        Path to the created backup file.

    Raises:
        FileNotFoundError: If the source file does not exist.
        OSError: If the directory or copy cannot be created.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Cannot backup: file not found: {file_path}")

    backup_path = get_backup_path(file_path, backup_dir_name)
    backup_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = backup_path.with_name(f".{backup_path.name}.partial")

    logger.debug(
        "Creating backup",
        extra={
            "source_path": str(file_path),
            "backup_path": str(backup_path),
            "file_size_bytes": file_path.stat().st_size,
            "replacing_existing": backup_path.exists(),
        },
    )

    try:
        shutil.copy2(file_path, partial_path)
        _fsync_file(partial_path)
        os.replace(partial_path, backup_path)
    except OSError:
        partial_path.unlink(missing_ok=True)
        raise
    _fsync_dir(backup_path.parent)

    logger.debug(
        "Backup created successfully",
        extra={"backup_path": str(backup_path)},
    )
    return backup_path

"""Removal of backup directories left behind by re-encode runs."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """Result of removing backup directories."""

    removed: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)
    bytes_freed: int = 0


def directory_size(path: Path) -> int:
    """Total size in bytes of the regular files below path."""
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            try:
                total += (Path(dirpath) / name).stat().st_size
            except OSError:
                continue
    return total


def find_backup_dirs(root: Path, backup_dir_name: str) -> list[Path]:
    """Locate backup directories anywhere under root.

    Backup directories are not descended into; nested matches are not
    reported separately.
    """
    found: list[Path] = []
    for dirpath, dirnames, _filenames in os.walk(root):
        if backup_dir_name in dirnames:
            found.append(Path(dirpath) / backup_dir_name)
            dirnames.remove(backup_dir_name)
        dirnames.sort()
    return sorted(found)


def remove_backup_dirs(dirs: list[Path]) -> CleanupResult:
    """Delete the given backup directories.

    A directory that cannot be removed is recorded and the rest are still
    processed.
    """
    result = CleanupResult()
    for directory in dirs:
        size = directory_size(directory)
        try:
            shutil.rmtree(directory)
        except OSError as e:
            logger.warning("Could not remove %s: %s", directory, e)
            result.failed.append((directory, str(e)))
            continue
        logger.info("Removed backup directory %s", directory)
        result.removed.append(directory)
        result.bytes_freed += size
    return result

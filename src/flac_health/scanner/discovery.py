"""Candidate file discovery."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def iter_audio_files(
    root: Path,
    extension: str,
    *,
    exclude_dirs: frozenset[str] = frozenset(),
) -> Iterator[Path]:
    """Yield every file under root whose suffix matches extension.

    Matching is case-insensitive. Directories named in exclude_dirs (backup
    folders) are not descended into. Directories are visited in sorted
    order so results are deterministic. Unreadable directories are logged
    and skipped.
    """
    wanted = extension.casefold()

    def on_error(error: OSError) -> None:
        logger.warning("Cannot read directory %s: %s", error.filename, error)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirs)
        for name in sorted(filenames):
            if name.casefold().endswith(wanted):
                path = Path(dirpath) / name
                if path.is_file():
                    yield path


def modified_after(path: Path, since: datetime) -> bool:
    """True if the file's modification time is strictly after since."""
    return path.stat().st_mtime > since.timestamp()


def discover_candidates(
    root: Path,
    extension: str,
    *,
    since: datetime | None = None,
    exclude_dirs: frozenset[str] = frozenset(),
) -> list[Path]:
    """Collect scan candidates, optionally restricted to files changed after since."""
    candidates: list[Path] = []
    for path in iter_audio_files(root, extension, exclude_dirs=exclude_dirs):
        if since is not None:
            try:
                if not modified_after(path, since):
                    continue
            except OSError as e:
                logger.warning("Cannot stat %s: %s", path, e)
                continue
        candidates.append(path)
    logger.debug(
        "Discovered %d candidate files",
        len(candidates),
        extra={"root": str(root), "since": since.isoformat() if since else None},
    )
    return candidates

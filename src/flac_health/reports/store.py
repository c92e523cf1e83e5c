"""Naming and lookup of scan reports in the reports directory."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from flac_health.core.datetime_utils import file_timestamp

logger = logging.getLogger(__name__)

REPORT_PREFIX = "flac_scan_"
REPORT_SUFFIX = ".csv"


def new_report_path(reports_dir: Path, timestamp: datetime) -> Path:
    """Return an unused report path named after the scan timestamp.

    Two scans started within the same second get a numeric suffix rather
    than overwriting each other.
    """
    stem = f"{REPORT_PREFIX}{file_timestamp(timestamp)}"
    candidate = reports_dir / f"{stem}{REPORT_SUFFIX}"
    counter = 1
    while candidate.exists():
        candidate = reports_dir / f"{stem}_{counter}{REPORT_SUFFIX}"
        counter += 1
    return candidate


def list_reports(reports_dir: Path) -> list[Path]:
    """List reports oldest first (by modification time, then name)."""
    if not reports_dir.is_dir():
        return []
    reports = [
        p
        for p in reports_dir.iterdir()
        if p.is_file()
        and p.name.lower().startswith(REPORT_PREFIX)
        and p.name.lower().endswith(REPORT_SUFFIX)
    ]
    return sorted(reports, key=lambda p: (p.stat().st_mtime, p.name))


def find_latest_report(reports_dir: Path) -> Path | None:
    """Return the most recent report, or None if there are none."""
    reports = list_reports(reports_dir)
    if not reports:
        logger.debug("No reports in %s", reports_dir)
        return None
    return reports[-1]

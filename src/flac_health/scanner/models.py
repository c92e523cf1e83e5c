"""Scanner data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

SCAN_VERSION = "1"


class ScanMode(str, Enum):
    """Which files a scan considers."""

    FULL = "full"
    INCREMENTAL = "incremental"


@dataclass
class ScanResult:
    """Result of a scan operation."""

    mode: ScanMode
    started_at: datetime
    total: int = 0
    errors: int = 0
    report_path: Path | None = None
    failed_paths: list[Path] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    since: datetime | None = None  # Incremental cutoff, if any


class ScanMetadata(BaseModel):
    """Persisted record of when a library was last scanned.

    Timestamps are timezone-aware UTC datetimes, serialized as ISO-8601.
    The record belongs to one library root; it says nothing about any
    other directory.
    """

    model_config = ConfigDict(extra="allow")

    library_root: str | None = None
    last_full_scan: datetime | None = None
    last_incremental_scan: datetime | None = None
    scan_version: str = SCAN_VERSION

    def for_library(self, root: Path) -> ScanMetadata:
        """Return this record if it belongs to root, else a blank one for root.

        A library that was never scanned (or a record written without a
        root) has no timestamps, so an incremental scan covers everything.
        """
        key = str(root.resolve())
        if self.library_root == key:
            return self
        return ScanMetadata(library_root=key)

    def incremental_since(self) -> datetime | None:
        """Cutoff for the next incremental scan: the most recent scan of either kind."""
        stamps = [s for s in (self.last_full_scan, self.last_incremental_scan) if s]
        return max(stamps) if stamps else None

    def record_scan(self, mode: ScanMode, started_at: datetime) -> ScanMetadata:
        """Return a copy updated for a finished scan.

        A full scan covered every file, so it also moves the incremental
        baseline. An incremental scan only moves its own timestamp.
        """
        update: dict[str, object] = {
            "last_incremental_scan": started_at,
            "scan_version": SCAN_VERSION,
        }
        if mode is ScanMode.FULL:
            update["last_full_scan"] = started_at
        return self.model_copy(update=update)

"""Library scan orchestration.

The scanner discovers candidate files, asks a FileTester about each one in
turn, and writes every failing path to a timestamped report. A file that
fails its test is data, not an error: the scan always runs to the end.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Protocol

from flac_health.config.models import AppConfig
from flac_health.core.datetime_utils import EPOCH, utc_now
from flac_health.exceptions import LibraryNotFoundError
from flac_health.reports.csv_report import ReportWriter
from flac_health.reports.store import new_report_path
from flac_health.scanner.discovery import discover_candidates
from flac_health.scanner.metadata import ScanMetadataStore
from flac_health.scanner.models import ScanMode, ScanResult
from flac_health.tools.interface import FileTester

logger = logging.getLogger(__name__)


class ScanProgressCallback(Protocol):
    """Protocol for scan progress callbacks."""

    def on_scan_start(self, total: int, mode: ScanMode) -> None:
        """Called once candidates are known."""
        ...

    def on_scan_progress(self, processed: int, total: int, errors: int) -> None:
        """Called periodically, throttled by count and percentage."""
        ...

    def on_file_error(self, path: Path) -> None:
        """Called for every file that fails its integrity test."""
        ...


class ProgressThrottle:
    """Decides when a progress update is worth emitting.

    An update is due every ``every`` files, whenever the completed
    percentage has grown by at least ``percent_step`` points since the last
    update, and on the final file.
    """

    def __init__(self, total: int, every: int, percent_step: float) -> None:
        self.total = total
        self.every = every
        self.percent_step = percent_step
        self._last_count = 0
        self._last_percent = 0.0

    def due(self, processed: int) -> bool:
        if processed >= self.total:
            due = True
        elif processed - self._last_count >= self.every:
            due = True
        else:
            percent = processed * 100.0 / self.total if self.total else 100.0
            due = percent - self._last_percent >= self.percent_step
        if due:
            self._last_count = processed
            self._last_percent = (
                processed * 100.0 / self.total if self.total else 100.0
            )
        return due


def validate_library_root(root: Path) -> Path:
    """Return root if it is an existing directory.

    Raises:
        LibraryNotFoundError: If root is missing or not a directory.
    """
    if not root.exists():
        raise LibraryNotFoundError(root)
    if not root.is_dir():
        raise LibraryNotFoundError(root, "is not a directory")
    return root


class Scanner:
    """Runs integrity scans over a library root."""

    def __init__(
        self,
        config: AppConfig,
        tester: FileTester,
        *,
        metadata_store: ScanMetadataStore | None = None,
        progress: ScanProgressCallback | None = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            config: Loaded settings (extension, throttling, data paths).
            tester: Integrity tester invoked once per candidate file.
            metadata_store: Scan metadata persistence. Defaults to the
                store in the configured data directory.
            progress: Optional progress callback.
        """
        self.config = config
        self.tester = tester
        self.metadata_store = metadata_store or ScanMetadataStore(
            config.metadata_file
        )
        self.progress = progress

    def scan(
        self,
        root: Path,
        mode: ScanMode = ScanMode.FULL,
        since: datetime | None = None,
    ) -> ScanResult:
        """Scan root for files that fail the integrity test.

        Args:
            root: Library root directory.
            mode: FULL scans every candidate; INCREMENTAL only files
                modified strictly after ``since``.
            since: Incremental cutoff. When None in incremental mode the
                persisted metadata is consulted, falling back to the epoch.

        Returns:
            ScanResult with counts and the report path (None if clean).

        Raises:
            LibraryNotFoundError: If root is missing or not a directory.
        """
        root = validate_library_root(root)
        started_at = utc_now()
        start_time = time.monotonic()
        metadata = self.metadata_store.load().for_library(root)

        if mode is ScanMode.INCREMENTAL:
            if since is None:
                since = metadata.incremental_since() or EPOCH
            logger.info("Incremental scan of %s since %s", root, since.isoformat())
        else:
            since = None
            logger.info("Full scan of %s", root)

        candidates = discover_candidates(
            root,
            self.config.scan.extension,
            since=since,
            exclude_dirs=frozenset({self.config.reencode.backup_dir_name}),
        )
        total = len(candidates)
        result = ScanResult(mode=mode, started_at=started_at, total=total, since=since)

        if self.progress:
            self.progress.on_scan_start(total, mode)

        writer = ReportWriter(
            new_report_path(self.config.reports_dir, started_at),
            started_at,
            total_files=total,
            scan_type=mode.value,
        )
        throttle = ProgressThrottle(
            total,
            self.config.scan.progress_every,
            self.config.scan.progress_percent_step,
        )

        try:
            for processed, path in enumerate(candidates, start=1):
                if not self.tester.test_file(path):
                    result.errors += 1
                    result.failed_paths.append(path.absolute())
                    writer.add(path.absolute())
                    logger.info("Error detected in: %s", path)
                    if self.progress:
                        self.progress.on_file_error(path)
                if self.progress and throttle.due(processed):
                    self.progress.on_scan_progress(processed, total, result.errors)
        except BaseException:
            # Leave a partial report with its placeholder header in place.
            writer.close()
            raise

        if result.errors == 0:
            writer.discard()
            result.report_path = None
        else:
            result.report_path = writer.finalize()

        self.metadata_store.save(metadata.record_scan(mode, started_at))

        result.elapsed_seconds = time.monotonic() - start_time
        logger.info(
            "Scan complete",
            extra={
                "mode": mode.value,
                "total_files": result.total,
                "error_count": result.errors,
                "report_path": str(result.report_path) if result.report_path else None,
                "elapsed_seconds": round(result.elapsed_seconds, 2),
            },
        )
        return result

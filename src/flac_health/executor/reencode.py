"""Re-encode files listed in a scan report.

For each listed file the re-encoder runs three steps, stopping at the first
one that fails:

1. Encode the source into ``tmp_<name>`` beside it, decoding through
   stream errors and keeping the original modification time.
2. Copy the original into the sibling backup directory.
3. Atomically replace the original with the temp file.

The original is never touched unless step 2 succeeded. Failures are
per-file outcomes; they are counted and logged and the run moves on to the
next file. Nothing is retried.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from flac_health.config.models import AppConfig
from flac_health.core.datetime_utils import utc_now
from flac_health.executor.backup import create_backup
from flac_health.executor.run_log import RunLogWriter, new_log_path
from flac_health.reports.csv_report import read_report
from flac_health.tools.interface import EncodeOptions, FileEncoder

logger = logging.getLogger(__name__)


class ReencodeStatus(str, Enum):
    """Outcome of re-encoding one file."""

    SUCCESS = "success"
    MISSING = "missing"
    ENCODE_FAILED = "encode_failed"
    BACKUP_FAILED = "backup_failed"
    # Backup exists but the original could not be replaced; the live file
    # still holds the old content.
    REPLACE_FAILED = "replace_failed"

    @property
    def succeeded(self) -> bool:
        return self is ReencodeStatus.SUCCESS


@dataclass(frozen=True)
class FileOutcome:
    """Result of re-encoding a single file."""

    path: Path
    status: ReencodeStatus
    message: str = ""
    backup_path: Path | None = None


@dataclass
class ReencodeResult:
    """Aggregate result of a re-encode run."""

    report_path: Path
    log_path: Path
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.status.succeeded)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def count(self, status: ReencodeStatus) -> int:
        """Number of files that ended with the given status."""
        return sum(1 for o in self.outcomes if o.status is status)


class ReencodeProgress(Protocol):
    """Protocol for re-encode progress reporting."""

    def on_start(self, total: int) -> None:
        """Called once with the number of listed files."""
        ...

    def on_item_start(self, index: int, path: Path) -> None:
        """Called before a file is processed."""
        ...

    def on_item_complete(self, index: int, outcome: FileOutcome) -> None:
        """Called after a file is processed."""
        ...

    def on_complete(self, result: ReencodeResult) -> None:
        """Called once after the last file."""
        ...


def _format_outcome(outcome: FileOutcome) -> str:
    path = outcome.path
    if outcome.status is ReencodeStatus.SUCCESS:
        return f"SUCCESS: {path} reencoded successfully."
    if outcome.status is ReencodeStatus.MISSING:
        return f"FAILURE: {path} no longer exists."
    if outcome.status is ReencodeStatus.ENCODE_FAILED:
        detail = f" ({outcome.message})" if outcome.message else ""
        return f"FAILURE: Reencoding failed for {path}{detail}"
    if outcome.status is ReencodeStatus.BACKUP_FAILED:
        return (
            f"WARNING: Failed to backup {path}. Skipping reencode for this file. "
            f"({outcome.message})"
        )
    return (
        f"FAILURE: Could not overwrite {path} with the reencoded file "
        f"({outcome.message}). Backup kept at {outcome.backup_path}."
    )


class Reencoder:
    """Re-encodes the files listed in a scan report with backups."""

    def __init__(
        self,
        config: AppConfig,
        encoder: FileEncoder,
        *,
        options: EncodeOptions | None = None,
        progress: ReencodeProgress | None = None,
    ) -> None:
        self.config = config
        self.encoder = encoder
        self.options = options or EncodeOptions()
        self.progress = progress

    def temp_path_for(self, source: Path) -> Path:
        """Unused temporary output path beside the source file.

        ``tmp_<name>`` unless something already lives there, in which case
        a counter is added (``tmp_1_<name>``) so an existing file is never
        overwritten or deleted.
        """
        prefix = self.config.reencode.temp_prefix
        candidate = source.with_name(f"{prefix}{source.name}")
        counter = 1
        while candidate.exists():
            candidate = source.with_name(f"{prefix}{counter}_{source.name}")
            counter += 1
        return candidate

    def reencode_file(self, source: Path) -> FileOutcome:
        """Run the encode, backup and replace steps for one file."""
        if not source.is_file():
            return FileOutcome(source, ReencodeStatus.MISSING, "file not found")

        temp_path = self.temp_path_for(source)

        # 1. Encode into the temp file
        try:
            encoded = self.encoder.encode_file(source, temp_path, self.options)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            return FileOutcome(source, ReencodeStatus.ENCODE_FAILED, str(e))
        if not encoded.success:
            temp_path.unlink(missing_ok=True)
            return FileOutcome(source, ReencodeStatus.ENCODE_FAILED, encoded.message)

        # 2. Back up the original; on failure the original stays untouched
        try:
            backup_path = create_backup(source, self.config.reencode.backup_dir_name)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            return FileOutcome(source, ReencodeStatus.BACKUP_FAILED, str(e))
        logger.info("Backup created for: %s -> %s", source, backup_path)

        # 3. Swap the re-encoded file in
        try:
            os.replace(temp_path, source)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            logger.error(
                "Replace failed after backup; original unchanged",
                extra={
                    "file_path": str(source),
                    "backup_path": str(backup_path),
                    "error": str(e),
                },
            )
            return FileOutcome(
                source, ReencodeStatus.REPLACE_FAILED, str(e), backup_path
            )

        return FileOutcome(source, ReencodeStatus.SUCCESS, backup_path=backup_path)

    def reencode(self, report_path: Path) -> ReencodeResult:
        """Re-encode every file listed in report_path.

        Args:
            report_path: Scan report to read candidates from.

        Returns:
            ReencodeResult with per-file outcomes and the run log path.

        Raises:
            ReportFormatError: If the report cannot be parsed.
            OSError: If the report or run log cannot be opened.
        """
        candidates = read_report(report_path)
        started_at = utc_now()
        log_path = new_log_path(self.config.logs_dir, started_at)
        result = ReencodeResult(report_path=report_path, log_path=log_path)

        logger.info(
            "Reencoding %d file(s) from %s", len(candidates), report_path
        )
        if self.progress:
            self.progress.on_start(len(candidates))

        with RunLogWriter(log_path) as run_log:
            run_log.write(f"Reencoding started using report {report_path}")

            for index, source in enumerate(candidates):
                if self.progress:
                    self.progress.on_item_start(index, source)

                outcome = self.reencode_file(source)
                result.outcomes.append(outcome)
                run_log.write(_format_outcome(outcome))

                if outcome.status.succeeded:
                    logger.info("Reencoded %s", source)
                else:
                    logger.warning(
                        "Reencode of %s ended with %s: %s",
                        source,
                        outcome.status.value,
                        outcome.message,
                    )
                if self.progress:
                    self.progress.on_item_complete(index, outcome)

            run_log.write("Reencoding complete")
            run_log.write(f"Total files processed: {result.total}")
            run_log.write(f"Successful reencodes: {result.succeeded}")
            run_log.write(f"Failed reencodes: {result.failed}")
            replace_failed = result.count(ReencodeStatus.REPLACE_FAILED)
            if replace_failed:
                run_log.write(
                    f"Files backed up but not replaced: {replace_failed}"
                )

        if self.progress:
            self.progress.on_complete(result)
        return result

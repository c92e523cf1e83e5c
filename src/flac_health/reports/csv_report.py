"""Scan report file format.

A report is a small CSV document:

    # 2026-10-19T08:15:02+00:00 | Files: 1532 | Errors: 2 | full
    filepath
    "/music/Artist/Album/01 Track.flac"
    "/music/Artist/Album/02 ""Quoted"" Track.flac"

Line 1 is a comment header. Line 2 is the single-column schema label.
Every following record is one absolute path written by the csv module with
QUOTE_ALL: the field is always wrapped in double quotes, embedded double
quotes are doubled, and embedded newlines stay inside the quoted field, so
any path the filesystem allows survives a write/read cycle.

The error count is not known until the scan ends, so the header is written
with a placeholder and rewritten once by finalize().
"""

from __future__ import annotations

import csv
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TextIO

from flac_health.core.datetime_utils import format_iso_timestamp, parse_iso_timestamp
from flac_health.exceptions import ReportFormatError

logger = logging.getLogger(__name__)

HEADER_PREFIX = "# "
SCHEMA_LABEL = "filepath"
ERROR_PLACEHOLDER = "?"

_HEADER_PATTERN = re.compile(
    r"^# (?P<timestamp>\S+) \| Files: (?P<total>\d+) \| "
    r"Errors: (?P<errors>\d+|\?) \| (?P<scan_type>\w+)$"
)


@dataclass(frozen=True)
class ReportHeader:
    """Parsed report header."""

    timestamp: datetime
    total_files: int
    error_count: int | None
    scan_type: str


def format_header(
    timestamp: datetime, total_files: int, error_count: int | None, scan_type: str
) -> str:
    """Format the comment header line (without newline)."""
    errors = ERROR_PLACEHOLDER if error_count is None else str(error_count)
    return (
        f"{HEADER_PREFIX}{format_iso_timestamp(timestamp)} | Files: {total_files} | "
        f"Errors: {errors} | {scan_type}"
    )


def parse_header(line: str) -> ReportHeader:
    """Parse a report header line.

    Raises:
        ReportFormatError: If the line is not a valid header.
    """
    match = _HEADER_PATTERN.match(line.rstrip("\r\n"))
    if match is None:
        raise ReportFormatError(f"Not a scan report header: {line.strip()!r}")
    errors = match.group("errors")
    return ReportHeader(
        timestamp=parse_iso_timestamp(match.group("timestamp")),
        total_files=int(match.group("total")),
        error_count=None if errors == ERROR_PLACEHOLDER else int(errors),
        scan_type=match.group("scan_type"),
    )


class ReportWriter:
    """Incrementally writes a scan report.

    Nothing touches the disk until the first path is added, so a scan that
    finds no errors never creates a report.

    Example:
        writer = ReportWriter(path, started_at, total_files=10, scan_type="full")
        writer.add(Path("/music/a.flac"))
        writer.finalize()
    """

    def __init__(
        self,
        path: Path,
        timestamp: datetime,
        total_files: int,
        scan_type: str,
    ) -> None:
        self.path = path
        self.timestamp = timestamp
        self.total_files = total_files
        self.scan_type = scan_type
        self.count = 0
        self._file: TextIO | None = None
        self._writer = None

    @property
    def created(self) -> bool:
        """True once the report file exists on disk."""
        return self._file is not None

    def _open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("w", encoding="utf-8", newline="")
        self._file.write(
            format_header(self.timestamp, self.total_files, None, self.scan_type)
        )
        self._file.write("\n")
        self._file.write(f"{SCHEMA_LABEL}\n")
        self._writer = csv.writer(
            self._file, quoting=csv.QUOTE_ALL, lineterminator="\n"
        )
        logger.info("Created scan report %s", self.path)

    def add(self, file_path: Path) -> None:
        """Append one failing file path, creating the report if needed."""
        if self._file is None:
            self._open()
        self._writer.writerow([str(file_path)])
        self._file.flush()
        self.count += 1

    def close(self) -> None:
        """Close the underlying file without patching the header."""
        if self._file is not None and not self._file.closed:
            self._file.close()

    def finalize(self) -> Path | None:
        """Close the report and patch the error count into its header.

        Returns:
            The report path, or None if no path was ever added.
        """
        if self._file is None:
            return None
        self.close()
        patch_error_count(self.path, self.count)
        return self.path

    def discard(self) -> None:
        """Close and delete the report if it was created."""
        self.close()
        if self._file is not None:
            self.path.unlink(missing_ok=True)
            logger.debug("Discarded scan report %s", self.path)


def patch_error_count(path: Path, error_count: int) -> None:
    """Rewrite the header of an existing report with the final error count.

    The rest of the file is copied verbatim into a sibling temp file that
    then replaces the report.
    """
    tmp_path = path.with_name(f".{path.name}.tmp")
    with path.open("r", encoding="utf-8", newline="") as src:
        header = parse_header(src.readline())
        with tmp_path.open("w", encoding="utf-8", newline="") as dst:
            dst.write(
                format_header(
                    header.timestamp, header.total_files, error_count, header.scan_type
                )
            )
            dst.write("\n")
            for chunk in iter(lambda: src.read(64 * 1024), ""):
                dst.write(chunk)
    os.replace(tmp_path, path)


def read_report_header(path: Path) -> ReportHeader:
    """Read only the header of a report."""
    with path.open("r", encoding="utf-8", newline="") as f:
        return parse_header(f.readline())


def read_report(path: Path) -> list[Path]:
    """Read the failing file paths from a report, in order.

    The header and schema lines are skipped; blank records are ignored.

    Raises:
        ReportFormatError: If the file is not a scan report.
        OSError: If the file cannot be read.
    """
    with path.open("r", encoding="utf-8", newline="") as f:
        first = f.readline()
        if first.startswith(HEADER_PREFIX):
            parse_header(first)
            reader = csv.reader(f)
            rows = list(reader)
        else:
            # Headerless legacy report: the schema label is the first row
            f.seek(0)
            rows = list(csv.reader(f))

    if not rows or rows[0] != [SCHEMA_LABEL]:
        raise ReportFormatError(f"Missing '{SCHEMA_LABEL}' schema line in {path}")

    paths: list[Path] = []
    for row in rows[1:]:
        if not row or not row[0]:
            continue
        if len(row) != 1:
            raise ReportFormatError(f"Unexpected record in {path}: {row!r}")
        paths.append(Path(row[0]))
    return paths

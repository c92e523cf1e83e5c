"""Human-readable re-encode run logs.

Each re-encode run writes one plain text file to the logs directory
(``reencode_<timestamp>.log``) with a timestamped line per file and a
final summary. The file is for people to read; nothing parses it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import TextIO

from flac_health.core.datetime_utils import file_timestamp, utc_now

logger = logging.getLogger(__name__)

LOG_PREFIX = "reencode_"
LOG_SUFFIX = ".log"


def new_log_path(logs_dir: Path, timestamp: datetime) -> Path:
    """Return an unused log path named after the run timestamp."""
    stem = f"{LOG_PREFIX}{file_timestamp(timestamp)}"
    candidate = logs_dir / f"{stem}{LOG_SUFFIX}"
    counter = 1
    while candidate.exists():
        candidate = logs_dir / f"{stem}_{counter}{LOG_SUFFIX}"
        counter += 1
    return candidate


class RunLogWriter:
    """Append-only writer for a re-encode run log.

    Usage:
        with RunLogWriter(path) as log:
            log.write("SUCCESS: /music/a.flac reencoded successfully.")
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._file: TextIO | None = None

    def __enter__(self) -> RunLogWriter:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("a", encoding="utf-8")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._file is not None:
            if exc_type is not None:
                self.write(f"Run aborted: {exc_type.__name__}: {exc_val}")
            self._file.close()
            self._file = None

    def write(self, message: str) -> None:
        """Append one timestamped line and flush it to disk."""
        if self._file is None:
            raise RuntimeError("RunLogWriter is not open")
        stamp = utc_now().astimezone().strftime("%Y-%m-%d %H:%M:%S")
        self._file.write(f"[{stamp}] {message}\n")
        self._file.flush()

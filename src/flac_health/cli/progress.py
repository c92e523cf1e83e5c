"""Terminal progress display for scans and re-encode runs.

On a TTY, counters update in place using a carriage return. Otherwise each
(throttled) update is printed as its own line so redirected output stays
readable.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

import click

from flac_health.core.formatting import truncate_filename

if TYPE_CHECKING:
    from flac_health.executor.reencode import FileOutcome, ReencodeResult
    from flac_health.scanner.models import ScanMode


def _format_rate(rate: float) -> str:
    """Format a files-per-second rate for display.

    Rates >= 1 are shown as comma-separated integers (e.g. '1,240/sec').
    Rates < 1 are shown with one decimal place (e.g. '0.3/sec').
    """
    if rate >= 1.0:
        return f"{int(rate):,}/sec"
    return f"{rate:.1f}/sec"


class _LineDisplay:
    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._tty = sys.stdout.isatty()
        self._has_output = False
        self._start_time = time.monotonic()

    def _rate(self, completed: int) -> float:
        elapsed = time.monotonic() - self._start_time
        if elapsed <= 0:
            return 0.0
        return completed / elapsed

    def _write(self, text: str) -> None:
        if not self._enabled:
            return
        if self._tty:
            # \r moves to start of line, \033[K clears to end of line
            sys.stdout.write(f"\r\033[K{text}")
            sys.stdout.flush()
            self._has_output = True
        else:
            click.echo(text)

    def _finish_line(self) -> None:
        if self._enabled and self._tty and self._has_output:
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._has_output = False

    def _echo(self, text: str) -> None:
        """Print a full line without disturbing the progress line."""
        self._finish_line()
        click.echo(text)


class ScanProgressDisplay(_LineDisplay):
    """ScanProgressCallback that prints to the terminal."""

    def on_scan_start(self, total: int, mode: ScanMode) -> None:
        self._start_time = time.monotonic()
        self._echo(f"Scanning {total:,} FLAC file(s) ({mode.value} scan)...")

    def on_scan_progress(self, processed: int, total: int, errors: int) -> None:
        percent = processed * 100 // total if total else 100
        self._write(
            f"Scanning... {processed:,}/{total:,} ({percent}%) "
            f"errors: {errors:,} ({_format_rate(self._rate(processed))})"
        )

    def on_file_error(self, path: Path) -> None:
        self._echo(f"Error detected in: {path}")

    def finish(self) -> None:
        self._finish_line()


class ReencodeProgressDisplay(_LineDisplay):
    """ReencodeProgress that prints to the terminal."""

    def __init__(self, *, enabled: bool = True) -> None:
        super().__init__(enabled=enabled)
        self.total = 0

    def on_start(self, total: int) -> None:
        self.total = total
        self._start_time = time.monotonic()

    def on_item_start(self, index: int, path: Path) -> None:
        name = truncate_filename(path.name, 40)
        self._write(f"Reencoding {index + 1:,}/{self.total:,} [{name}]")

    def on_item_complete(self, index: int, outcome: FileOutcome) -> None:
        if not outcome.status.succeeded:
            self._echo(f"FAILURE ({outcome.status.value}): {outcome.path}")

    def on_complete(self, result: ReencodeResult) -> None:
        self._finish_line()

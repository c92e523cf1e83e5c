"""Full and incremental library scans."""

from __future__ import annotations

import click

from flac_health.cli.progress import ScanProgressDisplay
from flac_health.cli.session import CliSession
from flac_health.scanner.models import ScanMode, ScanResult
from flac_health.scanner.orchestrator import Scanner


def run_scan(session: CliSession, mode: ScanMode) -> ScanResult:
    """Scan the configured library and print a summary.

    Raises:
        LibraryNotFoundError: If the library root is missing.
        ToolNotAvailableError: If flac is not installed.
    """
    root = session.resolve_library()
    tester = session.get_tool()

    click.echo(f"Scanning FLAC files in: {root}")

    display = ScanProgressDisplay()
    scanner = Scanner(session.config, tester, progress=display)
    try:
        result = scanner.scan(root, mode)
    finally:
        display.finish()

    output_summary(result)
    return result


def output_summary(result: ScanResult) -> None:
    """Print the end-of-scan summary."""
    if result.mode is ScanMode.INCREMENTAL and result.since is not None:
        since = result.since.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        click.echo(f"Incremental scan: files modified after {since}")
    click.echo(
        f"Scan complete. Total FLAC files scanned: {result.total:,}. "
        f"Errors found: {result.errors:,}."
    )
    if result.report_path is not None:
        click.echo(f"CSV report generated: {result.report_path}")
    else:
        click.echo("No errors found; no report written.")
    click.echo(f"Elapsed: {result.elapsed_seconds:.1f}s")

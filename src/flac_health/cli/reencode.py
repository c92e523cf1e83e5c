"""Re-encode the files listed in the latest scan report."""

from __future__ import annotations

import click

from flac_health.cli.output import error_exit
from flac_health.cli.progress import ReencodeProgressDisplay
from flac_health.cli.session import CliSession
from flac_health.exceptions import ReportFormatError, ReportNotFoundError
from flac_health.executor.reencode import Reencoder, ReencodeResult, ReencodeStatus
from flac_health.reports.csv_report import read_report_header
from flac_health.reports.store import find_latest_report


def run_reencode(session: CliSession) -> ReencodeResult:
    """Confirm the latest report with the user, then re-encode its files.

    Exits with an error if the user does not confirm.

    Raises:
        ReportNotFoundError: If there is no report to work from.
        ToolNotAvailableError: If flac is not installed.
    """
    encoder = session.get_tool()
    reports_dir = session.config.reports_dir

    report_path = find_latest_report(reports_dir)
    if report_path is None:
        raise ReportNotFoundError(reports_dir)

    click.echo(f"Latest scan report found: {report_path}")
    try:
        header = read_report_header(report_path)
    except ReportFormatError:
        # Reports from before the header line was introduced
        header = None
    if header is not None:
        scanned_at = header.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        errors = "?" if header.error_count is None else f"{header.error_count:,}"
        click.echo(
            f"  {header.scan_type} scan at {scanned_at}: "
            f"{header.total_files:,} files, {errors} errors"
        )

    if not click.confirm("Use this report for reencoding?", default=False):
        error_exit("User did not confirm. Aborting reencoding process.")

    display = ReencodeProgressDisplay()
    reencoder = Reencoder(session.config, encoder, progress=display)
    result = reencoder.reencode(report_path)

    output_summary(result)
    return result


def output_summary(result: ReencodeResult) -> None:
    """Print the end-of-run summary."""
    click.echo(f"Total files processed: {result.total:,}")
    click.echo(f"Successful reencodes: {result.succeeded:,}")
    click.echo(f"Failed reencodes: {result.failed:,}")
    replace_failed = result.count(ReencodeStatus.REPLACE_FAILED)
    if replace_failed:
        click.echo(
            f"  {replace_failed:,} file(s) were backed up but could not be "
            "replaced; see the log for backup locations.",
            err=True,
        )
    click.echo(f"Detailed log saved as: {result.log_path}")

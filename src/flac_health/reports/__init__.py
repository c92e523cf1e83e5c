"""Scan report reading, writing and lookup."""

from flac_health.reports.csv_report import (
    ReportHeader,
    ReportWriter,
    patch_error_count,
    read_report,
    read_report_header,
)
from flac_health.reports.store import (
    find_latest_report,
    list_reports,
    new_report_path,
)

__all__ = [
    "ReportHeader",
    "ReportWriter",
    "find_latest_report",
    "list_reports",
    "new_report_path",
    "patch_error_count",
    "read_report",
    "read_report_header",
]

"""Shared helpers used across FLAC Health."""

from flac_health.core.datetime_utils import (
    EPOCH,
    file_timestamp,
    format_iso_timestamp,
    parse_iso_timestamp,
    utc_now,
)
from flac_health.core.formatting import format_file_size, truncate_filename
from flac_health.core.subprocess_utils import run_command

__all__ = [
    "EPOCH",
    "file_timestamp",
    "format_file_size",
    "format_iso_timestamp",
    "parse_iso_timestamp",
    "run_command",
    "truncate_filename",
    "utc_now",
]

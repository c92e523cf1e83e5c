"""UTC datetime utilities.

Timestamps are stored as ISO-8601 UTC strings. Report and log file names
use a filesystem-safe UTC stamp (``YYYY-MM-DD_HH-MM-SS``).
"""

from datetime import datetime, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Used in report and log file names; always rendered in UTC
FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso_timestamp(timestamp: str) -> datetime:
    """Parse ISO-8601 timestamp, handling both Z and +00:00 suffixes.

    Naive datetime strings (no timezone) are assumed to be UTC.
    """
    normalized = timestamp.replace("Z", "+00:00")
    dt = datetime.fromisoformat(normalized)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_iso_timestamp(dt: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with second precision."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds")


def file_timestamp(dt: datetime) -> str:
    """Format a datetime as a UTC stamp for use in a file name.

    Naive datetimes are assumed to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(FILE_TIMESTAMP_FORMAT)

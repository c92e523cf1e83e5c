"""JSON log formatting.

Scanner and executor code attach structured fields with ``extra=``
(``file_path``, ``backup_path``, ``error_count``, ``elapsed_seconds`` and so
on). JSONFormatter puts those under a ``context`` object so a log file can be
filtered by file or by run without parsing message text.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

# Attributes every LogRecord carries; anything else came from extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _json_default(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields attached to a record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Keys: ``timestamp`` (UTC ISO-8601), ``level``, ``logger``, ``message``,
    plus ``context`` when extra fields are present and ``exception`` when
    the record carries a traceback. Paths, datetimes and enums in the
    context are rendered as strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=_json_default, ensure_ascii=False)

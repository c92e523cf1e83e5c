"""File-modifying operations: backups, re-encoding and backup cleanup."""

from flac_health.executor.backup import create_backup, get_backup_path, has_backup
from flac_health.executor.cleanup import (
    CleanupResult,
    find_backup_dirs,
    remove_backup_dirs,
)
from flac_health.executor.reencode import (
    FileOutcome,
    ReencodeProgress,
    Reencoder,
    ReencodeResult,
    ReencodeStatus,
)
from flac_health.executor.run_log import RunLogWriter, new_log_path

__all__ = [
    "CleanupResult",
    "FileOutcome",
    "ReencodeProgress",
    "ReencodeResult",
    "ReencodeStatus",
    "Reencoder",
    "RunLogWriter",
    "create_backup",
    "find_backup_dirs",
    "get_backup_path",
    "has_backup",
    "new_log_path",
    "remove_backup_dirs",
]

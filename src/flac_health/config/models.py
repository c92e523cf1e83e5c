"""Configuration data models.

This module defines dataclasses for FLAC Health runtime settings. These are
read-only settings loaded from ``config.toml`` and the environment; the
library path chosen by the user lives in the persisted store instead
(see ``flac_health.config.store``).
"""

from dataclasses import dataclass, field
from pathlib import Path

# Name of the per-album directory holding pre-re-encode copies
DEFAULT_BACKUP_DIR_NAME = "backup_FLAC_originals"


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    If not specified, tools are looked up in PATH.
    """

    flac: Path | None = None


@dataclass
class ScanConfig:
    """Configuration for library scans."""

    # File suffix to scan for (matched case-insensitively)
    extension: str = ".flac"

    # Emit progress at least every N files
    progress_every: int = 100

    # ...or whenever the completed percentage grows by this many points
    progress_percent_step: float = 5.0

    # Seconds allowed for a single integrity test (None = no limit)
    test_timeout: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.extension:
            raise ValueError("extension must not be empty")
        if not self.extension.startswith("."):
            self.extension = f".{self.extension}"
        if self.progress_every < 1:
            raise ValueError(
                f"progress_every must be at least 1, got {self.progress_every}"
            )
        if not 0 < self.progress_percent_step <= 100:
            raise ValueError(
                "progress_percent_step must be in (0, 100], "
                f"got {self.progress_percent_step}"
            )


@dataclass
class ReencodeConfig:
    """Configuration for re-encoding flagged files."""

    backup_dir_name: str = DEFAULT_BACKUP_DIR_NAME

    # Prefix for the temporary output written beside the source file
    temp_prefix: str = "tmp_"

    # Seconds allowed for a single encode (None = no limit)
    encode_timeout: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.backup_dir_name or "/" in self.backup_dir_name:
            raise ValueError(
                f"backup_dir_name must be a plain directory name, "
                f"got {self.backup_dir_name!r}"
            )
        if not self.temp_prefix:
            raise ValueError("temp_prefix must not be empty")


@dataclass
class LoggingConfig:
    """Configuration for application logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class AppConfig:
    """Complete FLAC Health settings."""

    data_dir: Path
    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    reencode: ReencodeConfig = field(default_factory=ReencodeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def library_file(self) -> Path:
        """Path of the persisted library configuration."""
        return self.data_dir / "library.json"

    @property
    def metadata_file(self) -> Path:
        """Path of the persisted scan metadata."""
        return self.data_dir / "scan_metadata.json"

    @property
    def reports_dir(self) -> Path:
        """Directory where scan reports accumulate."""
        return self.data_dir / "reports"

    @property
    def logs_dir(self) -> Path:
        """Directory where re-encode logs accumulate."""
        return self.data_dir / "logs"

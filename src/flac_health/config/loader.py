"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (FLAC_HEALTH_*)
3. Config file (~/.flac-health/config.toml)
4. Default values

Environment variables:
- FLAC_HEALTH_DATA_DIR: Data directory (overrides ~/.flac-health/)
- FLAC_HEALTH_CONFIG_PATH: Path to config file (overrides default location)
- FLAC_HEALTH_FLAC_PATH: Path to the flac executable
- FLAC_HEALTH_LOG_LEVEL: Log level (debug, info, warning, error)
- FLAC_HEALTH_LOG_FILE: Log file path
"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from flac_health.config.env import EnvReader
from flac_health.config.logging_factory import build_logging_config
from flac_health.config.models import (
    AppConfig,
    LoggingConfig,
    ReencodeConfig,
    ScanConfig,
    ToolPathsConfig,
)
from flac_health.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".flac-health"
CONFIG_FILE_NAME = "config.toml"

# Section fields holding filesystem paths
_PATH_FIELDS = frozenset({"flac", "file"})


def get_data_dir(env_reader: EnvReader | None = None) -> Path:
    """Get the FLAC Health data directory.

    This is the base directory for the library configuration, scan
    metadata, reports and re-encode logs. Can be overridden by the
    FLAC_HEALTH_DATA_DIR environment variable (tilde expansion supported).

    Returns:
        Path to the data directory (~/.flac-health/ by default).
    """
    reader = env_reader or EnvReader()
    return reader.get_path("FLAC_HEALTH_DATA_DIR", default=DEFAULT_DATA_DIR)


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the settings file path.

    Can be overridden by FLAC_HEALTH_CONFIG_PATH.
    """
    reader = env_reader or EnvReader()
    env_path = reader.get_path("FLAC_HEALTH_CONFIG_PATH")
    if env_path:
        return env_path
    return get_data_dir(reader) / CONFIG_FILE_NAME


def _build_section(
    section_name: str, dataclass_type: type, data: dict[str, Any]
) -> Any:
    """Construct a settings dataclass from a TOML section.

    Unknown keys are logged and ignored so an outdated settings file does
    not prevent the tool from starting.
    """
    if not isinstance(data, dict):
        raise ValueError(f"[{section_name}] must be a table")

    expected = {f.name for f in fields(dataclass_type)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in expected:
            logger.warning("Ignoring unknown setting %s.%s", section_name, key)
            continue
        if key in _PATH_FIELDS and value is not None:
            value = Path(value).expanduser()
        kwargs[key] = value
    return dataclass_type(**kwargs)


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    flac_path: Path | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> AppConfig:
    """Get FLAC Health settings with full precedence handling.

    Args:
        config_path: Path to config file (overrides FLAC_HEALTH_CONFIG_PATH).
        flac_path: CLI override for the flac executable.
        log_level: CLI override for the log level.
        log_file: CLI override for the log file.
        log_format: CLI override for the log format ("text" or "json").
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        AppConfig with merged configuration.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        ValueError: When a configured value fails validation.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    file_config = load_toml_file(path, strict=strict)

    tools = _build_section("tools", ToolPathsConfig, file_config.get("tools", {}))
    scan = _build_section("scan", ScanConfig, file_config.get("scan", {}))
    reencode = _build_section(
        "reencode", ReencodeConfig, file_config.get("reencode", {})
    )
    logging_config = _build_section(
        "logging", LoggingConfig, file_config.get("logging", {})
    )

    # Environment overrides file
    env_flac = reader.get_path("FLAC_HEALTH_FLAC_PATH")
    if env_flac is not None:
        tools.flac = env_flac
    logging_config = build_logging_config(
        logging_config,
        level=reader.get_str("FLAC_HEALTH_LOG_LEVEL"),
        file=reader.get_path("FLAC_HEALTH_LOG_FILE"),
    )

    # CLI overrides everything
    if flac_path is not None:
        tools.flac = flac_path
    logging_config = build_logging_config(
        logging_config, level=log_level, file=log_file, format=log_format
    )

    return AppConfig(
        data_dir=get_data_dir(reader),
        tools=tools,
        scan=scan,
        reencode=reencode,
        logging=logging_config,
    )


def ensure_data_dirs(config: AppConfig) -> None:
    """Create the data, reports and logs directories if missing.

    Raises:
        OSError: If a directory cannot be created.
    """
    for directory in (config.data_dir, config.reports_dir, config.logs_dir):
        directory.mkdir(parents=True, exist_ok=True)
    logger.debug("Data directory ready: %s", config.data_dir)


def display_path(path: Path | str) -> str:
    """Compact a path for display by replacing the home directory with ~."""
    return str(path).replace(str(Path.home()), "~", 1)

"""Configuration management for FLAC Health.

Settings are loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (FLAC_HEALTH_*)
3. Config file (~/.flac-health/config.toml)
4. Default values (lowest priority)

The user's library path is persisted separately by LibraryConfigStore.
"""

from flac_health.config.env import EnvReader
from flac_health.config.loader import (
    ensure_data_dirs,
    get_config,
    get_data_dir,
    get_default_config_path,
)
from flac_health.config.logging_factory import build_logging_config
from flac_health.config.models import (
    AppConfig,
    LoggingConfig,
    ReencodeConfig,
    ScanConfig,
    ToolPathsConfig,
)
from flac_health.config.store import LibraryConfig, LibraryConfigStore
from flac_health.config.toml_parser import TomlParseError, load_toml_file

__all__ = [
    # Models
    "AppConfig",
    "LoggingConfig",
    "ReencodeConfig",
    "ScanConfig",
    "ToolPathsConfig",
    # Loader
    "EnvReader",
    "ensure_data_dirs",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "build_logging_config",
    "load_toml_file",
    "TomlParseError",
    # Persisted store
    "LibraryConfig",
    "LibraryConfigStore",
]

"""CLI module for FLAC Health."""

import logging
from pathlib import Path

import click

from flac_health.cli.menu import run_menu
from flac_health.cli.output import error_exit
from flac_health.cli.session import CliSession
from flac_health.config.loader import display_path, ensure_data_dirs, get_config
from flac_health.config.models import AppConfig
from flac_health.config.store import LibraryConfigStore
from flac_health.config.toml_parser import TomlParseError
from flac_health.logging import configure_logging

logger = logging.getLogger(__name__)


def _load_config(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> AppConfig:
    """Load settings once for the whole run, applying CLI overrides."""
    try:
        return get_config(
            log_level=log_level,
            log_file=log_file,
            log_format="json" if log_json else None,
            strict=True,
        )
    except (TomlParseError, ValueError) as e:
        error_exit(f"Invalid configuration: {e}")


def _log_startup_settings(config: AppConfig) -> None:
    """Log the effective settings at startup."""
    log_file = str(config.logging.file) if config.logging.file else "stderr"
    logger.info(
        "FLAC Health starting: data_dir=%s, log_level=%s, log_file=%s, flac=%s",
        display_path(config.data_dir),
        config.logging.level,
        display_path(log_file),
        config.tools.flac or "PATH",
    )


@click.command()
@click.version_option(package_name="flac-health")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
def main(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """FLAC Health - scan a FLAC library for decode errors and reencode
    damaged files, keeping the originals as local backups."""
    config = _load_config(log_level, log_file, log_json)
    configure_logging(config.logging)
    _log_startup_settings(config)

    try:
        ensure_data_dirs(config)
    except OSError as e:
        error_exit(f"Cannot create data directory {config.data_dir}: {e}")

    session = CliSession(config=config, store=LibraryConfigStore(config.library_file))
    run_menu(session)

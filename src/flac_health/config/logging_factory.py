"""Layering of logging overrides onto a LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from flac_health.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> LoggingConfig:
    """Return base with every non-None override applied.

    Used once for environment variables and once for command-line flags,
    so a flag beats the environment and the environment beats the file.
    The result is validated again; a bad level or format raises ValueError.
    """
    overrides = {
        name: value
        for name, value in (("level", level), ("file", file), ("format", format))
        if value is not None
    }
    return replace(base, **overrides) if overrides else base

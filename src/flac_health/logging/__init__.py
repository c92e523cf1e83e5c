"""Logging setup for FLAC Health.

Provides configurable logging with JSON format support and file rotation.
"""

from flac_health.logging.config import configure_logging
from flac_health.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]

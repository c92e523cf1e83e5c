"""Load and save scan metadata."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from flac_health.config.store import write_json_atomic
from flac_health.exceptions import ConfigStoreError
from flac_health.scanner.models import ScanMetadata

logger = logging.getLogger(__name__)


class ScanMetadataStore:
    """JSON-backed storage for ScanMetadata.

    A missing file means the library has never been scanned.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> ScanMetadata:
        """Return stored metadata, or an empty record if none exists.

        An unreadable or invalid file is logged and treated as absent so
        the next scan falls back to scanning everything.
        """
        if not self.path.exists():
            return ScanMetadata()
        try:
            return ScanMetadata.model_validate_json(
                self.path.read_text(encoding="utf-8")
            )
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable scan metadata %s: %s", self.path, e)
            return ScanMetadata()

    def save(self, metadata: ScanMetadata) -> None:
        """Overwrite the stored metadata.

        Raises:
            ConfigStoreError: If the file cannot be written.
        """
        try:
            write_json_atomic(self.path, metadata.model_dump_json(indent=4))
        except OSError as e:
            raise ConfigStoreError(
                f"Cannot write scan metadata {self.path}: {e}"
            ) from e
        logger.debug("Saved scan metadata to %s", self.path)

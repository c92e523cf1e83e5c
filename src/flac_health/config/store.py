"""Persisted library configuration.

The library root chosen by the user is stored as a small JSON document in
the data directory so it survives between runs. The document is created
with an empty path on first load and rewritten whenever the user sets a
new path. Fields this version does not know about are kept on save.

There is no locking: the store assumes one user running one process.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from flac_health import __version__
from flac_health.exceptions import ConfigStoreError

logger = logging.getLogger(__name__)


class LibraryConfig(BaseModel):
    """Persisted library configuration record."""

    model_config = ConfigDict(extra="allow")

    library_path: str = ""
    version: str = __version__

    @property
    def is_set(self) -> bool:
        """True when a library path has been configured."""
        return bool(self.library_path.strip())


def write_json_atomic(path: Path, payload: str) -> None:
    """Write text to path via a sibling temp file and os.replace().

    Raises:
        OSError: If the directory or file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(payload)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


class LibraryConfigStore:
    """Load and save the library configuration file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> LibraryConfig:
        """Return the persisted configuration, creating a default if absent.

        Raises:
            ConfigStoreError: If the file cannot be read, parsed or created.
        """
        if not self.path.exists():
            config = LibraryConfig()
            self._write(config)
            logger.info("Created default library configuration at %s", self.path)
            return config

        try:
            raw = self.path.read_text(encoding="utf-8")
            return LibraryConfig.model_validate_json(raw)
        except OSError as e:
            raise ConfigStoreError(
                f"Cannot read configuration file {self.path}: {e}"
            ) from e
        except ValidationError as e:
            raise ConfigStoreError(
                f"Configuration file {self.path} is invalid: {e}"
            ) from e

    def save(self, library_path: str | Path) -> LibraryConfig:
        """Overwrite the persisted library path, preserving other fields.

        Returns:
            The configuration as written.

        Raises:
            ConfigStoreError: If the file cannot be written.
        """
        current = self.load()
        updated = current.model_copy(update={"library_path": str(library_path)})
        self._write(updated)
        logger.info(
            "Library path updated",
            extra={"library_path": updated.library_path},
        )
        return updated

    def _write(self, config: LibraryConfig) -> None:
        payload = json.dumps(config.model_dump(), indent=4)
        try:
            write_json_atomic(self.path, payload)
        except OSError as e:
            raise ConfigStoreError(
                f"Cannot write configuration file {self.path}: {e}"
            ) from e

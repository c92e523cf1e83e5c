"""Access to FLAC_HEALTH_* environment variables.

Settings code reads the environment only through EnvReader so tests can
hand it a plain dict instead of patching os.environ.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path


class EnvReader:
    """Read settings overrides from an environment mapping.

    Example:
        reader = EnvReader(env={"FLAC_HEALTH_LOG_LEVEL": "debug"})
        reader.get_str("FLAC_HEALTH_LOG_LEVEL")  # "debug"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def get_str(self, var: str) -> str | None:
        """Value of var, or None when it is unset or empty."""
        return self._env.get(var) or None

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Value of var as a tilde-expanded Path, or default when unset."""
        value = self.get_str(var)
        return Path(value).expanduser() if value is not None else default

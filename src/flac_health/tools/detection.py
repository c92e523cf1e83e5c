"""External tool detection and version parsing."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess  # nosec B404 - subprocess is required for tool detection
from dataclasses import dataclass
from pathlib import Path

from flac_health.core.subprocess_utils import run_command
from flac_health.exceptions import ToolNotAvailableError

logger = logging.getLogger(__name__)

# Timeout for version detection commands (seconds)
DETECTION_TIMEOUT = 10

FLAC_INSTALL_HINT = (
    "Please install it (e.g., sudo apt-get install flac) and try again."
)


@dataclass(frozen=True)
class ToolInfo:
    """A located external tool."""

    name: str
    path: Path
    version: str | None = None
    version_tuple: tuple[int, ...] | None = None


def parse_version_string(version_str: str) -> tuple[int, ...] | None:
    """Parse a version string into a comparable tuple.

    - "1.4.3" -> (1, 4, 3)
    - "v1.3" -> (1, 3)

    Returns:
        Tuple of version components, or None if parsing fails.
    """
    if not version_str:
        return None

    version_str = version_str.lstrip("nv")

    match = re.match(r"(\d+(?:\.\d+)*)", version_str)
    if not match:
        return None

    return tuple(int(p) for p in match.group(1).split("."))


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "flac").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def detect_flac_version(flac_path: Path) -> str | None:
    """Return the version reported by ``flac --version`` (e.g. "1.4.3")."""
    try:
        stdout, _stderr, returncode = run_command(
            [flac_path, "--version"], timeout=DETECTION_TIMEOUT
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.warning("Could not query flac version: %s", e)
        return None

    if returncode != 0:
        return None

    # Output looks like "flac 1.4.3"
    match = re.search(r"flac\s+(\S+)", stdout)
    return match.group(1) if match else None


def require_flac(configured_path: Path | None = None) -> ToolInfo:
    """Locate the flac executable or fail.

    Raises:
        ToolNotAvailableError: If flac cannot be found.
    """
    path = find_tool("flac", configured_path)
    if path is None:
        raise ToolNotAvailableError("flac", FLAC_INSTALL_HINT)

    version = detect_flac_version(path)
    info = ToolInfo(
        name="flac",
        path=path,
        version=version,
        version_tuple=parse_version_string(version) if version else None,
    )
    logger.info("Using flac %s at %s", version or "(unknown version)", path)
    return info

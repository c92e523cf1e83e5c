"""External codec integration.

FlacTool implements the FileTester and FileEncoder protocols on top of
the flac command line tool; require_flac() locates the executable.
"""

from flac_health.tools.detection import (
    ToolInfo,
    find_tool,
    parse_version_string,
    require_flac,
)
from flac_health.tools.flac import FlacTool
from flac_health.tools.interface import (
    EncodeOptions,
    EncodeResult,
    FileEncoder,
    FileTester,
)

__all__ = [
    "EncodeOptions",
    "EncodeResult",
    "FileEncoder",
    "FileTester",
    "FlacTool",
    "ToolInfo",
    "find_tool",
    "parse_version_string",
    "require_flac",
]

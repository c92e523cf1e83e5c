"""Tests for flac detection."""

from pathlib import Path
from unittest.mock import patch

import pytest

from flac_health.exceptions import ToolNotAvailableError
from flac_health.tools.detection import (
    detect_flac_version,
    find_tool,
    parse_version_string,
    require_flac,
)


class TestParseVersionString:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1.4.3", (1, 4, 3)),
            ("v1.3", (1, 3)),
            ("1.3.2-git", (1, 3, 2)),
            ("", None),
            ("unknown", None),
        ],
    )
    def test_parse(self, value, expected) -> None:
        assert parse_version_string(value) == expected


class TestFindTool:
    def test_configured_path_wins(self, temp_dir: Path) -> None:
        flac = temp_dir / "flac"
        flac.write_text("#!/bin/sh\n")

        assert find_tool("flac", flac) == flac

    @patch("flac_health.tools.detection.shutil.which", return_value=None)
    def test_bad_configured_path_falls_back(self, _which, temp_dir: Path) -> None:
        assert find_tool("flac", temp_dir / "missing") is None

    @patch("flac_health.tools.detection.shutil.which", return_value="/usr/bin/flac")
    def test_uses_path_lookup(self, _which) -> None:
        assert find_tool("flac") == Path("/usr/bin/flac")


class TestRequireFlac:
    @patch("flac_health.tools.detection.shutil.which", return_value=None)
    def test_missing_raises(self, _which) -> None:
        with pytest.raises(ToolNotAvailableError, match="'flac' command is not"):
            require_flac()

    @patch("flac_health.tools.detection.run_command")
    @patch("flac_health.tools.detection.shutil.which", return_value="/usr/bin/flac")
    def test_found(self, _which, mock_run) -> None:
        mock_run.return_value = ("flac 1.4.3\n", "", 0)

        info = require_flac()

        assert info.path == Path("/usr/bin/flac")
        assert info.version == "1.4.3"
        assert info.version_tuple == (1, 4, 3)


class TestDetectFlacVersion:
    @patch("flac_health.tools.detection.run_command")
    def test_failure_returns_none(self, mock_run) -> None:
        mock_run.side_effect = OSError("exec format error")

        assert detect_flac_version(Path("/usr/bin/flac")) is None

    @patch("flac_health.tools.detection.run_command")
    def test_nonzero_returns_none(self, mock_run) -> None:
        mock_run.return_value = ("", "", 1)

        assert detect_flac_version(Path("/usr/bin/flac")) is None

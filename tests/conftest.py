"""Shared test fixtures for FLAC Health."""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import patch

import pytest

from flac_health.config.models import AppConfig
from flac_health.tools.interface import EncodeOptions, EncodeResult

# Files whose content starts with this marker fail FakeFlac.test_file
CORRUPT_MARKER = b"CORRUPT"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def data_dir(temp_dir: Path):
    """Point FLAC_HEALTH_DATA_DIR at a temporary directory for every test."""
    path = temp_dir / ".flac-health"
    path.mkdir(parents=True, exist_ok=True)
    env = {"FLAC_HEALTH_DATA_DIR": str(path)}
    with patch.dict(os.environ, env):
        os.environ.pop("FLAC_HEALTH_CONFIG_PATH", None)
        os.environ.pop("FLAC_HEALTH_FLAC_PATH", None)
        os.environ.pop("FLAC_HEALTH_LOG_LEVEL", None)
        os.environ.pop("FLAC_HEALTH_LOG_FILE", None)
        yield path


@pytest.fixture
def app_config(data_dir: Path) -> AppConfig:
    """Default settings rooted at the temporary data directory."""
    return AppConfig(data_dir=data_dir)


@dataclass
class FakeFlac:
    """In-process stand-in for the flac executable.

    test_file fails for files whose content starts with CORRUPT_MARKER.
    encode_file writes the source content minus the marker, keeping the
    source mtime, unless the source is listed in fail_encode.
    """

    fail_encode: set[Path] = field(default_factory=set)
    tested: list[Path] = field(default_factory=list)
    encoded: list[tuple[Path, Path, EncodeOptions]] = field(default_factory=list)

    def test_file(self, path: Path) -> bool:
        self.tested.append(path)
        return not path.read_bytes().startswith(CORRUPT_MARKER)

    def encode_file(
        self, source: Path, output: Path, options: EncodeOptions
    ) -> EncodeResult:
        self.encoded.append((source, output, options))
        if source in self.fail_encode:
            output.write_bytes(b"partial")
            return EncodeResult(success=False, message="decode error")
        data = source.read_bytes()
        if data.startswith(CORRUPT_MARKER):
            data = data[len(CORRUPT_MARKER) :]
        output.write_bytes(b"REENCODED" + data)
        if options.preserve_modtime:
            st = source.stat()
            os.utime(output, ns=(st.st_atime_ns, st.st_mtime_ns))
        return EncodeResult(success=True)


@pytest.fixture
def fake_flac() -> FakeFlac:
    """Fake tester/encoder."""
    return FakeFlac()


def write_flac(path: Path, corrupt: bool = False, content: bytes = b"fLaC") -> Path:
    """Create a fake FLAC file, optionally marked as corrupt."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes((CORRUPT_MARKER if corrupt else b"") + content)
    return path


@pytest.fixture
def library(temp_dir: Path) -> Path:
    """A library of 10 files, 2 of them corrupt, plus a non-FLAC file."""
    root = temp_dir / "music"
    for i in range(4):
        write_flac(root / "Artist A" / "Album 1" / f"{i:02d} Track.flac")
    for i in range(4):
        write_flac(root / "Artist B" / "Album 2" / f"{i:02d} Song.FLAC")
    write_flac(root / "Artist A" / "Album 1" / "04 Broken.flac", corrupt=True)
    write_flac(root / "Artist B" / "Album 2" / "04 Bad, \"Quoted\".flac", corrupt=True)
    (root / "Artist A" / "Album 1" / "cover.jpg").write_bytes(b"jpeg")
    return root


@pytest.fixture
def make_flac():
    """Factory fixture wrapping write_flac."""
    return write_flac


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by configure_logging during a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)

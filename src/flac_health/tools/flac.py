"""Integrity testing and repair encoding with the flac command line tool."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for flac invocation
from pathlib import Path

from flac_health.core.subprocess_utils import run_command
from flac_health.tools.interface import EncodeOptions, EncodeResult

logger = logging.getLogger(__name__)


def build_test_command(flac_path: Path, path: Path) -> list[str | Path]:
    """Build the ``flac -t`` command for an integrity test."""
    return [flac_path, "--test", "--silent", path]


def build_encode_command(
    flac_path: Path, source: Path, output: Path, options: EncodeOptions
) -> list[str | Path]:
    """Build the ``flac`` command for a repair encode.

    The caller always passes an output path that does not exist yet, so
    --force never clobbers a file it did not create.
    """
    args: list[str | Path] = [flac_path]
    if options.verify:
        args.append("--verify")
    args.append(f"--compression-level-{options.compression_level}")
    if options.decode_through_errors:
        args.append("--decode-through-errors")
    if options.preserve_modtime:
        args.append("--preserve-modtime")
    args.extend(["--silent", "--force", "-o", output, source])
    return args


class FlacTool:
    """FileTester and FileEncoder backed by the flac executable."""

    def __init__(
        self,
        flac_path: Path,
        *,
        test_timeout: float | None = None,
        encode_timeout: float | None = None,
    ) -> None:
        self.flac_path = flac_path
        self.test_timeout = test_timeout
        self.encode_timeout = encode_timeout

    def test_file(self, path: Path) -> bool:
        """Return True if ``flac -t`` decodes the file without error.

        A timeout counts as a failed test.
        """
        try:
            _stdout, stderr, returncode = run_command(
                build_test_command(self.flac_path, path),
                timeout=self.test_timeout,
            )
        except subprocess.TimeoutExpired:
            return False

        if returncode != 0:
            logger.debug(
                "Integrity test failed",
                extra={"file_path": str(path), "stderr": stderr.strip()},
            )
            return False
        return True

    def encode_file(
        self, source: Path, output: Path, options: EncodeOptions
    ) -> EncodeResult:
        """Re-encode source into output with the requested options."""
        try:
            _stdout, stderr, returncode = run_command(
                build_encode_command(self.flac_path, source, output, options),
                timeout=self.encode_timeout,
            )
        except subprocess.TimeoutExpired:
            return EncodeResult(
                success=False,
                message=f"flac timed out after {self.encode_timeout}s",
            )
        except OSError as e:
            return EncodeResult(success=False, message=f"Could not run flac: {e}")

        if returncode != 0:
            detail = stderr.strip() or f"flac exited with code {returncode}"
            return EncodeResult(success=False, message=detail)
        if not output.exists():
            return EncodeResult(
                success=False, message="flac reported success but wrote no output"
            )
        return EncodeResult(success=True)

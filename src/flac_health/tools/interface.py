"""Capability interfaces for the external audio codec.

The scanner only needs to ask "does this file decode cleanly?" and the
re-encoder only needs "write a repaired copy of this file there". Both are
expressed as small protocols so the flac binary can be swapped for a test
double, or for a concurrent implementation, without touching the callers.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class EncodeOptions:
    """Flags requested from the encoder for a repair encode."""

    verify: bool = True
    """Decode the output while encoding and compare against the input."""

    compression_level: int = 0
    """0 is the fastest setting."""

    decode_through_errors: bool = True
    """Keep decoding past damaged frames instead of aborting."""

    preserve_modtime: bool = True
    """Copy the source file's modification time onto the output."""

    def __post_init__(self) -> None:
        if not 0 <= self.compression_level <= 8:
            raise ValueError(
                f"compression_level must be 0-8, got {self.compression_level}"
            )


@dataclass(frozen=True)
class EncodeResult:
    """Result of an encoder invocation."""

    success: bool
    """True if the encoder exited cleanly and produced output."""

    message: str = ""
    """Human-readable detail, typically the tool's stderr on failure."""


class FileTester(Protocol):
    """Protocol for integrity testers."""

    def test_file(self, path: Path) -> bool:
        """Return True if the file decodes cleanly, False otherwise."""
        ...


class FileEncoder(Protocol):
    """Protocol for repair encoders."""

    def encode_file(
        self, source: Path, output: Path, options: EncodeOptions
    ) -> EncodeResult:
        """Encode source into output.

        On failure no usable output is expected; callers remove whatever
        partial file may exist at output.
        """
        ...

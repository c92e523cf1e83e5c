"""FLAC Health - scan a music library for decode errors and repair damaged files."""

__version__ = "0.1.0"

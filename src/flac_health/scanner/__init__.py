"""Library integrity scanning."""

from flac_health.scanner.discovery import discover_candidates, iter_audio_files
from flac_health.scanner.metadata import ScanMetadataStore
from flac_health.scanner.models import ScanMetadata, ScanMode, ScanResult
from flac_health.scanner.orchestrator import (
    ProgressThrottle,
    ScanProgressCallback,
    Scanner,
    validate_library_root,
)

__all__ = [
    "ProgressThrottle",
    "ScanMetadata",
    "ScanMetadataStore",
    "ScanMode",
    "ScanProgressCallback",
    "ScanResult",
    "Scanner",
    "discover_candidates",
    "iter_audio_files",
    "validate_library_root",
]

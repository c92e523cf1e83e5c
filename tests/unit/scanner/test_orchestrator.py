"""Tests for the scan orchestrator."""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from flac_health.config.models import AppConfig, ScanConfig
from flac_health.core.datetime_utils import EPOCH
from flac_health.exceptions import LibraryNotFoundError
from flac_health.reports.csv_report import read_report, read_report_header
from flac_health.scanner.metadata import ScanMetadataStore
from flac_health.scanner.models import ScanMetadata, ScanMode
from flac_health.scanner.orchestrator import ProgressThrottle, Scanner


def _set_mtime(path: Path, when: datetime) -> None:
    stamp = when.timestamp()
    os.utime(path, (stamp, stamp))


class RecordingProgress:
    def __init__(self) -> None:
        self.started: list[tuple[int, ScanMode]] = []
        self.updates: list[tuple[int, int, int]] = []
        self.errors: list[Path] = []

    def on_scan_start(self, total: int, mode: ScanMode) -> None:
        self.started.append((total, mode))

    def on_scan_progress(self, processed: int, total: int, errors: int) -> None:
        self.updates.append((processed, total, errors))

    def on_file_error(self, path: Path) -> None:
        self.errors.append(path)


class TestFullScan:
    """Tests for full scans."""

    def test_counts_and_report(self, app_config, fake_flac, library: Path) -> None:
        """10 files with 2 corrupt produce a report listing exactly those 2."""
        result = Scanner(app_config, fake_flac).scan(library)

        assert result.total == 10
        assert result.errors == 2
        assert result.report_path is not None
        assert result.report_path.parent == app_config.reports_dir

        listed = read_report(result.report_path)
        assert sorted(p.name for p in listed) == [
            '04 Bad, "Quoted".flac',
            "04 Broken.flac",
        ]
        assert all(p.is_absolute() for p in listed)

    def test_header_matches_records(self, app_config, fake_flac, library) -> None:
        result = Scanner(app_config, fake_flac).scan(library)

        header = read_report_header(result.report_path)
        assert header.error_count == 2
        assert header.error_count == len(read_report(result.report_path))
        assert header.total_files == 10
        assert header.scan_type == "full"

    def test_only_matching_extension_is_tested(
        self, app_config, fake_flac, library
    ) -> None:
        Scanner(app_config, fake_flac).scan(library)

        assert len(fake_flac.tested) == 10
        assert all(p.suffix.lower() == ".flac" for p in fake_flac.tested)

    def test_clean_library_writes_no_report(
        self, app_config, fake_flac, temp_dir, make_flac
    ) -> None:
        root = temp_dir / "clean"
        for i in range(3):
            make_flac(root / f"{i}.flac")

        result = Scanner(app_config, fake_flac).scan(root)

        assert result.total == 3
        assert result.errors == 0
        assert result.report_path is None
        assert not list(app_config.reports_dir.glob("*.csv"))

    def test_empty_library(self, app_config, fake_flac, temp_dir) -> None:
        root = temp_dir / "empty"
        root.mkdir()

        result = Scanner(app_config, fake_flac).scan(root)

        assert result.total == 0
        assert result.report_path is None

    def test_backup_dirs_are_skipped(
        self, app_config, fake_flac, library, make_flac
    ) -> None:
        make_flac(
            library / "Artist A" / "Album 1" / "backup_FLAC_originals" / "x.flac",
            corrupt=True,
        )

        result = Scanner(app_config, fake_flac).scan(library)

        assert result.total == 10
        assert result.errors == 2

    def test_missing_root(self, app_config, fake_flac, temp_dir) -> None:
        with pytest.raises(LibraryNotFoundError, match="does not exist"):
            Scanner(app_config, fake_flac).scan(temp_dir / "nope")

    def test_root_is_file(self, app_config, fake_flac, temp_dir, make_flac) -> None:
        target = make_flac(temp_dir / "a.flac")

        with pytest.raises(LibraryNotFoundError, match="not a directory"):
            Scanner(app_config, fake_flac).scan(target)

    def test_full_scan_records_both_timestamps(
        self, app_config, fake_flac, library
    ) -> None:
        result = Scanner(app_config, fake_flac).scan(library)

        metadata = ScanMetadataStore(app_config.metadata_file).load()
        assert metadata.last_full_scan == result.started_at
        assert metadata.last_incremental_scan == result.started_at

    def test_tester_error_propagates(self, app_config, library) -> None:
        """A tester that cannot run at all aborts the scan."""

        class BrokenTester:
            def test_file(self, path: Path) -> bool:
                raise OSError("flac vanished")

        with pytest.raises(OSError, match="flac vanished"):
            Scanner(app_config, BrokenTester()).scan(library)

        metadata = ScanMetadataStore(app_config.metadata_file).load()
        assert metadata.last_full_scan is None

    def test_progress_callbacks(self, data_dir, fake_flac, library) -> None:
        config = AppConfig(data_dir=data_dir, scan=ScanConfig(progress_every=4))
        progress = RecordingProgress()

        Scanner(config, fake_flac, progress=progress).scan(library)

        assert progress.started == [(10, ScanMode.FULL)]
        assert len(progress.errors) == 2
        assert progress.updates[-1] == (10, 10, 2)


class TestIncrementalScan:
    """Tests for incremental scans."""

    def test_only_files_modified_after_cutoff(
        self, app_config, fake_flac, library
    ) -> None:
        cutoff = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for path in library.rglob("*"):
            if path.is_file():
                _set_mtime(path, cutoff - timedelta(days=1))
        newer = library / "Artist A" / "Album 1" / "04 Broken.flac"
        _set_mtime(newer, cutoff + timedelta(seconds=1))

        result = Scanner(app_config, fake_flac).scan(
            library, ScanMode.INCREMENTAL, since=cutoff
        )

        assert result.total == 1
        assert result.errors == 1
        assert fake_flac.tested == [newer]
        assert read_report_header(result.report_path).scan_type == "incremental"

    def test_mtime_equal_to_cutoff_is_excluded(
        self, app_config, fake_flac, temp_dir, make_flac
    ) -> None:
        cutoff = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
        root = temp_dir / "lib"
        _set_mtime(make_flac(root / "same.flac"), cutoff)

        result = Scanner(app_config, fake_flac).scan(
            root, ScanMode.INCREMENTAL, since=cutoff
        )

        assert result.total == 0

    def test_since_defaults_to_latest_metadata(
        self, app_config, fake_flac, library
    ) -> None:
        full = datetime(2024, 1, 1, tzinfo=timezone.utc)
        incremental = datetime(2024, 2, 1, tzinfo=timezone.utc)
        ScanMetadataStore(app_config.metadata_file).save(
            ScanMetadata(
                library_root=str(library.resolve()),
                last_full_scan=full,
                last_incremental_scan=incremental,
            )
        )
        for path in library.rglob("*.*"):
            if path.is_file():
                _set_mtime(path, datetime(2024, 1, 15, tzinfo=timezone.utc))

        result = Scanner(app_config, fake_flac).scan(library, ScanMode.INCREMENTAL)

        assert result.since == incremental
        assert result.total == 0

    def test_never_scanned_uses_epoch(self, app_config, fake_flac, library) -> None:
        result = Scanner(app_config, fake_flac).scan(library, ScanMode.INCREMENTAL)

        assert result.since == EPOCH
        assert result.total == 10

    def test_incremental_keeps_full_timestamp(
        self, app_config, fake_flac, library
    ) -> None:
        full = datetime(2024, 1, 1, tzinfo=timezone.utc)
        store = ScanMetadataStore(app_config.metadata_file)
        store.save(
            ScanMetadata(library_root=str(library.resolve()), last_full_scan=full)
        )

        result = Scanner(app_config, fake_flac).scan(library, ScanMode.INCREMENTAL)

        metadata = store.load()
        assert metadata.last_full_scan == full
        assert metadata.last_incremental_scan == result.started_at

    def test_other_library_is_never_scanned(
        self, app_config, fake_flac, temp_dir, make_flac
    ) -> None:
        """A full scan of one library does not set the cutoff for another."""
        first = temp_dir / "libA"
        make_flac(first / "a.flac")
        Scanner(app_config, fake_flac).scan(first)

        second = temp_dir / "libB"
        old = make_flac(second / "old.flac", corrupt=True)
        _set_mtime(old, datetime(2020, 9, 13, tzinfo=timezone.utc))

        result = Scanner(app_config, fake_flac).scan(second, ScanMode.INCREMENTAL)

        assert result.since == EPOCH
        assert result.total == 1
        assert result.errors == 1

    def test_switching_library_replaces_metadata(
        self, app_config, fake_flac, temp_dir, make_flac
    ) -> None:
        first = temp_dir / "libA"
        second = temp_dir / "libB"
        make_flac(first / "a.flac")
        make_flac(second / "b.flac")
        store = ScanMetadataStore(app_config.metadata_file)

        Scanner(app_config, fake_flac).scan(first)
        result = Scanner(app_config, fake_flac).scan(second, ScanMode.INCREMENTAL)

        metadata = store.load()
        assert metadata.library_root == str(second.resolve())
        assert metadata.last_full_scan is None
        assert metadata.last_incremental_scan == result.started_at


class TestProgressThrottle:
    def test_due_every_n(self) -> None:
        throttle = ProgressThrottle(total=1000, every=100, percent_step=50.0)
        due = [n for n in range(1, 1001) if throttle.due(n)]
        assert due == list(range(100, 1001, 100))

    def test_due_on_percent_step(self) -> None:
        throttle = ProgressThrottle(total=20, every=100, percent_step=25.0)
        due = [n for n in range(1, 21) if throttle.due(n)]
        assert due == [5, 10, 15, 20]

    def test_last_item_always_due(self) -> None:
        throttle = ProgressThrottle(total=3, every=100, percent_step=100.0)
        assert [throttle.due(n) for n in (1, 2, 3)] == [False, False, True]

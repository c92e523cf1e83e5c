"""Tests for the interactive menu driven through the click entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from flac_health.cli import main
from flac_health.cli.session import CliSession
from flac_health.config.store import LibraryConfigStore
from flac_health.exceptions import ToolNotAvailableError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def use_fake_flac(fake_flac):
    """Make every session use the in-process fake instead of flac."""
    with patch.object(CliSession, "get_tool", return_value=fake_flac):
        yield fake_flac


@pytest.fixture
def saved_library(app_config, library: Path) -> Path:
    LibraryConfigStore(app_config.library_file).save(library)
    return library


class TestMenuNavigation:
    def test_quit(self, runner) -> None:
        result = runner.invoke(main, input="6\n")

        assert result.exit_code == 0
        assert "FLAC Health Check & Reencode" in result.output
        assert "Library: (not set)" in result.output
        assert "Exiting..." in result.output

    def test_invalid_selection(self, runner) -> None:
        result = runner.invoke(main, input="9\n")

        assert result.exit_code == 1
        assert "Invalid selection. Exiting." in result.output

    def test_end_of_input_is_an_interrupt(self, runner) -> None:
        result = runner.invoke(main, input="")

        assert result.exit_code == 2

    def test_invalid_config_file(self, runner, data_dir: Path) -> None:
        (data_dir / "config.toml").write_text("[scan\n")

        result = runner.invoke(main, input="6\n")

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestScanActions:
    """Menu options 1 and 2."""

    def test_full_scan_prompts_for_library(
        self, runner, use_fake_flac, app_config, library: Path
    ) -> None:
        result = runner.invoke(main, input=f"1\n{library}\n6\n")

        assert result.exit_code == 0, result.output
        assert f"Scanning FLAC files in: {library.resolve()}" in result.output
        assert "Total FLAC files scanned: 10. Errors found: 2." in result.output
        assert "CSV report generated:" in result.output
        stored = LibraryConfigStore(app_config.library_file).load()
        assert stored.library_path == str(library.resolve())

    def test_full_scan_uses_saved_library(
        self, runner, use_fake_flac, saved_library
    ) -> None:
        result = runner.invoke(main, input="1\n6\n")

        assert result.exit_code == 0, result.output
        assert f"Library: {saved_library}" in result.output
        assert "Errors found: 2." in result.output
        assert "Error detected in:" in result.output

    def test_incremental_after_full_finds_nothing(
        self, runner, use_fake_flac, saved_library
    ) -> None:
        result = runner.invoke(main, input="1\n2\n6\n")

        assert result.exit_code == 0, result.output
        assert "Total FLAC files scanned: 0. Errors found: 0." in result.output
        assert "No errors found; no report written." in result.output

    def test_missing_library_is_fatal(self, runner, use_fake_flac, temp_dir) -> None:
        result = runner.invoke(main, input=f"1\n{temp_dir / 'nope'}\n")

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_missing_flac_is_fatal(self, runner, saved_library) -> None:
        with patch(
            "flac_health.cli.session.require_flac",
            side_effect=ToolNotAvailableError("flac", "Please install it."),
        ):
            result = runner.invoke(main, input="1\n")

        assert result.exit_code == 1
        assert "Error: The 'flac' command is not installed." in result.output


class TestReencodeAction:
    """Menu option 3."""

    def test_without_report(self, runner, use_fake_flac) -> None:
        result = runner.invoke(main, input="3\n")

        assert result.exit_code == 1
        assert "No scan report found" in result.output

    def test_declined_confirmation(
        self, runner, use_fake_flac, saved_library
    ) -> None:
        result = runner.invoke(main, input="1\n3\nn\n")

        assert result.exit_code == 1
        assert "User did not confirm. Aborting reencoding process." in result.output
        assert not list(saved_library.rglob("backup_FLAC_originals"))

    def test_confirmed_run(self, runner, use_fake_flac, saved_library) -> None:
        result = runner.invoke(main, input="1\n3\ny\n6\n")

        assert result.exit_code == 0, result.output
        assert "Latest scan report found:" in result.output
        assert "Total files processed: 2" in result.output
        assert "Successful reencodes: 2" in result.output
        assert "Failed reencodes: 0" in result.output
        assert "Detailed log saved as:" in result.output
        assert len(list(saved_library.rglob("backup_FLAC_originals"))) == 2


class TestLibraryAction:
    """Menu option 4."""

    def test_set_path(self, runner, app_config, temp_dir: Path) -> None:
        new_root = temp_dir / "new library"
        new_root.mkdir()

        result = runner.invoke(main, input=f"4\n{new_root}\n6\n")

        assert result.exit_code == 0, result.output
        assert f"Library path set to: {new_root.resolve()}" in result.output
        stored = LibraryConfigStore(app_config.library_file).load()
        assert stored.library_path == str(new_root.resolve())

    def test_keep_current_path(self, runner, saved_library) -> None:
        result = runner.invoke(main, input="4\n\n6\n")

        assert result.exit_code == 0, result.output
        assert f"Current library path: {saved_library}" in result.output

    def test_rejects_missing_directory(self, runner, temp_dir) -> None:
        result = runner.invoke(main, input=f"4\n{temp_dir / 'missing'}\n")

        assert result.exit_code == 1
        assert "does not exist" in result.output


class TestCleanupAction:
    """Menu option 5."""

    def test_nothing_to_remove(self, runner, saved_library) -> None:
        result = runner.invoke(main, input="5\n6\n")

        assert result.exit_code == 0, result.output
        assert "No 'backup_FLAC_originals' folders found" in result.output

    def test_remove_after_confirmation(self, runner, saved_library) -> None:
        backup = saved_library / "Artist A" / "Album 1" / "backup_FLAC_originals"
        backup.mkdir()
        (backup / "01.flac").write_bytes(b"x" * 2048)

        result = runner.invoke(main, input="5\ny\n6\n")

        assert result.exit_code == 0, result.output
        assert "Found 1 backup folder(s) using 2.0 KB" in result.output
        assert "Removed 1 backup folder(s), freed 2.0 KB." in result.output
        assert not backup.exists()

    def test_declined(self, runner, saved_library) -> None:
        backup = saved_library / "Artist A" / "Album 1" / "backup_FLAC_originals"
        backup.mkdir()

        result = runner.invoke(main, input="5\nn\n")

        assert result.exit_code == 1
        assert backup.exists()

"""State shared by menu actions for one CLI run."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import click

from flac_health.config.models import AppConfig
from flac_health.config.store import LibraryConfigStore
from flac_health.scanner.orchestrator import validate_library_root
from flac_health.tools.detection import require_flac
from flac_health.tools.flac import FlacTool
from flac_health.tools.interface import FileEncoder, FileTester

logger = logging.getLogger(__name__)

LIBRARY_PROMPT = "Enter the full path to your music library directory"


@dataclass
class CliSession:
    """Configuration loaded once at startup and handed to every action.

    ``tool`` may be preset (tests inject a fake); otherwise the flac
    executable is located the first time an action needs it.
    """

    config: AppConfig
    store: LibraryConfigStore
    tool: FileTester | FileEncoder | None = None

    def get_tool(self) -> FlacTool:
        """Return the codec tool, locating flac on first use.

        Raises:
            ToolNotAvailableError: If flac is not installed.
        """
        if self.tool is None:
            info = require_flac(self.config.tools.flac)
            self.tool = FlacTool(
                info.path,
                test_timeout=self.config.scan.test_timeout,
                encode_timeout=self.config.reencode.encode_timeout,
            )
        return self.tool

    def resolve_library(self) -> Path:
        """Return the configured library root, asking for one if unset.

        A path entered here is validated and then persisted.

        Raises:
            LibraryNotFoundError: If the path is missing or not a directory.
            ConfigStoreError: If the configuration cannot be read or saved.
        """
        library = self.store.load()
        if library.is_set:
            return validate_library_root(Path(library.library_path))

        entered = click.prompt(LIBRARY_PROMPT)
        root = validate_library_root(Path(entered.strip()).expanduser())
        self.store.save(root.resolve())
        click.echo(f"Library path saved: {root.resolve()}")
        return root.resolve()

"""Interactive numbered menu."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass

import click

from flac_health.cli.cleanup import run_cleanup
from flac_health.cli.exit_codes import ExitCode
from flac_health.cli.library import set_library_path
from flac_health.cli.output import banner, error_exit
from flac_health.cli.reencode import run_reencode
from flac_health.cli.scan import run_scan
from flac_health.cli.session import CliSession
from flac_health.exceptions import FlacHealthError
from flac_health.scanner.models import ScanMode

logger = logging.getLogger(__name__)

MENU_TITLE = "FLAC Health Check & Reencode"


@dataclass(frozen=True)
class MenuOption:
    """One numbered menu entry. A None action quits."""

    key: str
    label: str
    action: Callable[[CliSession], object] | None


MENU_OPTIONS: tuple[MenuOption, ...] = (
    MenuOption("1", "Full scan of music library", lambda s: run_scan(s, ScanMode.FULL)),
    MenuOption(
        "2",
        "Incremental scan (files changed since last scan)",
        lambda s: run_scan(s, ScanMode.INCREMENTAL),
    ),
    MenuOption(
        "3", "Reencode problematic FLAC files (with local backups)", run_reencode
    ),
    MenuOption("4", "Set/update music library path", set_library_path),
    MenuOption("5", "Remove backup folders", run_cleanup),
    MenuOption("6", "Quit", None),
)


def show_menu(session: CliSession) -> str:
    """Print the menu and return the user's selection."""
    banner(MENU_TITLE)
    library = session.store.load()
    if library.is_set:
        click.echo(f"Library: {library.library_path}")
    else:
        click.echo("Library: (not set)")
    for option in MENU_OPTIONS:
        click.echo(f"{option.key}) {option.label}")
    click.echo("=" * 38)
    keys = ", ".join(o.key for o in MENU_OPTIONS)
    return click.prompt(f"Enter your selection ({keys})").strip()


def _interrupted() -> None:
    click.echo("\nAborted by user.", err=True)
    sys.exit(ExitCode.INTERRUPTED)


def run_menu(session: CliSession) -> None:
    """Show the menu until the user quits.

    Fatal errors end the process with exit code 1; an invalid selection is
    treated the same way. Ctrl+C at any point exits with code 2.
    """
    options = {o.key: o for o in MENU_OPTIONS}
    while True:
        try:
            selection = show_menu(session)
        except FlacHealthError as e:
            error_exit(str(e))
        except (KeyboardInterrupt, click.Abort):
            _interrupted()

        option = options.get(selection)
        if option is None:
            error_exit("Invalid selection. Exiting.")
        if option.action is None:
            click.echo("Exiting...")
            return

        logger.debug("Menu selection %s: %s", option.key, option.label)
        try:
            option.action(session)
        except FlacHealthError as e:
            logger.debug("Action failed", exc_info=True)
            error_exit(str(e))
        except (KeyboardInterrupt, click.Abort):
            _interrupted()
        click.echo("")

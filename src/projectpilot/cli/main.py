"""ProjectPilot CLI — find local projects and open them in your editor.

Entry point for the ``projectpilot`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    open      — Open a local project (cached scan, favorites or history).
    list      — List projects without opening anything.
    refresh   — Discard the cached scan and rescan.
    favorite  — Add or remove favorite projects.
    history   — Forget or clear recently opened projects.
    clone     — Clone a git repository and open it.
    new       — Scaffold a new project and open it.
    ssh       — Open remote-SSH sessions and manage saved hosts.

Usage::

    projectpilot open api                 # Open the project matching "api"
    projectpilot open --section favorites
    projectpilot list --format json
    projectpilot clone https://github.com/pallets/click
    projectpilot new scratchpad
    projectpilot ssh connect deploy@build-box:2222
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from projectpilot import __version__
from projectpilot.cli.clone_cmd import clone_command
from projectpilot.cli.context import AppContext
from projectpilot.cli.new_cmd import new_command
from projectpilot.cli.open_cmd import (
    favorite_group,
    history_group,
    list_command,
    open_command,
    refresh_command,
)
from projectpilot.cli.output import fail
from projectpilot.cli.ssh_cmd import ssh_group
from projectpilot.exceptions import ProjectPilotError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


class _ProjectPilotGroup(click.Group):
    """Click group that turns ``ProjectPilotError`` into ``Error: ...`` + exit 1."""

    def invoke(self, ctx: click.Context):  # type: ignore[override]
        try:
            return super().invoke(ctx)
        except ProjectPilotError as exc:
            fail(str(exc))


@click.group(cls=_ProjectPilotGroup)
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    envvar="PROJECTPILOT_CONFIG",
    help="Path to config.yaml (default: ~/.config/projectpilot/config.yaml).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log scanner and launcher details.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """ProjectPilot: find local projects and open them in your editor.

    Scans the configured directories for project roots (git checkouts and
    language manifests), remembers what you open and favorite, and can
    clone or scaffold new projects straight into the editor.
    """
    _configure_logging(verbose)
    if ctx.obj is None:
        ctx.obj = AppContext(config_path=config_path)


# Register all subcommands
cli.add_command(open_command)
cli.add_command(list_command)
cli.add_command(refresh_command)
cli.add_command(favorite_group)
cli.add_command(history_group)
cli.add_command(clone_command)
cli.add_command(new_command)
cli.add_command(ssh_group)

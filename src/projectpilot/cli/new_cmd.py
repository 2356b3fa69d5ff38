"""``projectpilot new <name>`` — Scaffold a project and open it."""

from __future__ import annotations

from pathlib import Path

import click

from projectpilot.cli.context import AppContext
from projectpilot.cli.open_cmd import open_entry, pass_app
from projectpilot.creator import create_project, validate_project_name
from projectpilot.discovery.models import ProjectEntry


@click.command("new")
@click.argument("name")
@click.option(
    "--dest",
    type=click.Path(file_okay=False),
    default=None,
    help="Parent directory (default: clone_directory setting).",
)
@click.option("--no-open", is_flag=True, default=False, help="Create without launching the editor.")
@click.option(
    "--new-window/--reuse-window",
    default=None,
    help="Override the configured window behaviour.",
)
@pass_app
def new_command(
    app: AppContext,
    name: str,
    dest: str | None,
    no_open: bool,
    new_window: bool | None,
) -> None:
    """Create a new project called NAME with git, README and .gitignore."""
    validate_project_name(name)
    parent = Path(dest).expanduser() if dest else app.settings.clone_path
    path = create_project(name, parent, runner=app.runner)
    click.echo(f"Created {path}")
    app.catalog.cache.invalidate()

    if not no_open:
        open_entry(app, ProjectEntry.for_path(str(path.resolve())), new_window)

"""``projectpilot open|list|refresh|favorite|history`` — local projects.

``open`` picks one project and launches the editor on it; ``list`` shows
what would be picked from. Both read the cached scan unless ``--refresh``
is given.

Exit Codes (open):
    0 — Editor launched.
    1 — Launch failed, or QUERY matched several projects.
    2 — No project matched QUERY.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from projectpilot.catalog import SECTIONS, search
from projectpilot.cli.context import AppContext
from projectpilot.cli.output import fail, print_json, print_projects
from projectpilot.discovery.models import ProjectEntry
from projectpilot.exceptions import ProjectPilotError

pass_app = click.make_pass_decorator(AppContext)

_section_option = click.option(
    "--section",
    type=click.Choice(SECTIONS),
    default="all",
    help="Which list to pick from: all scanned projects, favorites or history.",
)
_refresh_option = click.option(
    "--refresh",
    is_flag=True,
    default=False,
    help="Ignore the cached scan and walk the filesystem again.",
)


def _pick(projects: list[ProjectEntry], query: str | None) -> list[ProjectEntry]:
    """Return candidate projects for ``query``, narrowing to an exact name match."""
    matches = search(projects, query)
    if query and len(matches) > 1:
        exact = [p for p in matches if p.name.casefold() == query.casefold()]
        if len(exact) == 1:
            return exact
    return matches


def _entry_for_directory(app: AppContext, query: str | None) -> ProjectEntry | None:
    """Treat QUERY as a path when it is absolute or starts with ``~``.

    Bare names are always searched in the catalog, even when a directory
    of that name exists in the current working directory.
    """
    if not query or not (os.path.isabs(query) or query.startswith("~")):
        return None
    if not os.path.isdir(os.path.expanduser(query)):
        return None
    path = str(Path(query).expanduser().resolve())
    for entry in app.catalog.favorites.list() + app.catalog.history.list():
        if entry.id == path:
            return entry
    return ProjectEntry.for_path(path)


def open_entry(app: AppContext, entry: ProjectEntry, new_window: bool | None) -> None:
    """Launch the editor on ``entry`` and record it in the history.

    History is only written once the launch succeeded.
    """
    window = app.settings.open_in_new_window if new_window is None else new_window
    try:
        app.launcher.open_path(entry.path, new_window=window)
    except ProjectPilotError as exc:
        fail(f"Failed to open {entry.name}: {exc}")
    app.catalog.record_open(entry)
    click.echo(f"Opening {entry.name} ({entry.path})")


@click.command("open")
@click.argument("query", required=False, default=None)
@_section_option
@_refresh_option
@click.option("--first", is_flag=True, default=False, help="Open the first match when several match.")
@click.option(
    "--new-window/--reuse-window",
    default=None,
    help="Override the configured window behaviour.",
)
@pass_app
def open_command(
    app: AppContext,
    query: str | None,
    section: str,
    refresh: bool,
    first: bool,
    new_window: bool | None,
) -> None:
    """Open a local project in the editor.

    QUERY is matched case-insensitively against project names and paths.
    An absolute QUERY (or one starting with ~) naming an existing
    directory opens that directory directly.
    """
    direct = _entry_for_directory(app, query)
    if direct is not None:
        open_entry(app, direct, new_window)
        return

    projects = app.catalog.section(section, refresh=refresh)
    matches = _pick(projects, query)
    if not matches:
        click.echo(f"No projects match {query!r}." if query else "No projects found.")
        sys.exit(2)
    if len(matches) > 1 and not first:
        print_projects(matches, title=f"{len(matches)} matching projects")
        click.echo("Several projects match; refine QUERY or pass --first.")
        sys.exit(1)

    open_entry(app, matches[0], new_window)


@click.command("list")
@click.argument("query", required=False, default=None)
@_section_option
@_refresh_option
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@pass_app
def list_command(
    app: AppContext,
    query: str | None,
    section: str,
    refresh: bool,
    output_format: str,
) -> None:
    """List scanned projects, favorites or history."""
    projects = search(app.catalog.section(section, refresh=refresh), query)

    if output_format == "json":
        print_json([p.to_dict() for p in projects])
    else:
        print_projects(projects, title=f"Projects ({section})")


@click.command("refresh")
@pass_app
def refresh_command(app: AppContext) -> None:
    """Discard the cached scan and rescan all configured directories."""
    projects = app.catalog.scan(refresh=True)
    click.echo(f"Found {len(projects)} project(s).")


@click.group("favorite")
def favorite_group() -> None:
    """Manage favorite projects."""


@favorite_group.command("add")
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@pass_app
def favorite_add(app: AppContext, path: str) -> None:
    """Mark the project at PATH as a favorite."""
    entry = _entry_for_directory(app, path) or ProjectEntry.for_path(str(Path(path).resolve()))
    added = app.catalog.favorites.add(entry)
    click.echo(f"Added {entry.name} to favorites." if added else f"{entry.name} is already a favorite.")


@favorite_group.command("remove")
@click.argument("path")
@pass_app
def favorite_remove(app: AppContext, path: str) -> None:
    """Remove PATH from the favorites."""
    project_id = str(Path(path).expanduser().resolve())
    removed = app.catalog.favorites.remove(project_id)
    if not removed:
        fail(f"{project_id} is not a favorite.")
    click.echo(f"Removed {project_id} from favorites.")


@click.group("history")
def history_group() -> None:
    """Manage recently opened projects."""


@history_group.command("remove")
@click.argument("path")
@pass_app
def history_remove(app: AppContext, path: str) -> None:
    """Forget PATH in the history."""
    project_id = str(Path(path).expanduser().resolve())
    removed = app.catalog.history.remove(project_id)
    if not removed:
        fail(f"{project_id} is not in the history.")
    click.echo(f"Removed {project_id} from history.")


@history_group.command("clear")
@pass_app
def history_clear(app: AppContext) -> None:
    """Clear the project history."""
    app.catalog.history.clear()
    click.echo("History cleared.")

"""``projectpilot clone <url>`` — Clone a repository and open it.

A repository that already has a checkout in the destination is opened
as-is instead of being cloned again. A failed clone leaves no history
entry behind.

Exit Codes:
    0 — Repository cloned (or found) and opened.
    1 — Invalid URL, clone failure or launch failure.
"""

from __future__ import annotations

from pathlib import Path

import click

from projectpilot.cli.context import AppContext
from projectpilot.cli.open_cmd import open_entry, pass_app
from projectpilot.cli.output import fail
from projectpilot.discovery.models import ProjectEntry, ProjectKind
from projectpilot.remote.git import clone_repository, parse_git_url, repository_path


@click.command("clone")
@click.argument("url")
@click.option("--branch", "-b", default=None, help="Branch to check out.")
@click.option(
    "--dest",
    type=click.Path(file_okay=False),
    default=None,
    help="Parent directory for the clone (default: clone_directory setting).",
)
@click.option("--no-open", is_flag=True, default=False, help="Clone without launching the editor.")
@click.option(
    "--new-window/--reuse-window",
    default=None,
    help="Override the configured window behaviour.",
)
@pass_app
def clone_command(
    app: AppContext,
    url: str,
    branch: str | None,
    dest: str | None,
    no_open: bool,
    new_window: bool | None,
) -> None:
    """Clone the repository at URL and open it in the editor.

    GitHub, GitLab and Bitbucket URLs use the matching token from the
    config file (or GITHUB_TOKEN, GITLAB_TOKEN, BITBUCKET_TOKEN).
    """
    repo = parse_git_url(url)
    if repo is None:
        fail(f"Invalid Git URL: {url}")

    launcher = app.launcher
    if not no_open and not launcher.can_launch():
        fail(f"Editor command {app.settings.editor!r} not found. Install it or add it to your PATH.")

    parent = Path(dest).expanduser() if dest else app.settings.clone_path
    existing = repository_path(parent, repo.name)
    if existing is not None:
        click.echo(f"Already cloned at {existing}")
        path = existing
        cloned_at = None
    else:
        click.echo(f"Cloning {url} ...")
        path = clone_repository(
            url, parent, branch=branch,
            token=app.settings.token_for(repo.provider),
            runner=app.runner,
        )
        cloned_at = app.clock()
        click.echo(f"Cloned to {path}")
        app.catalog.cache.invalidate()

    entry = ProjectEntry.for_path(
        str(path.resolve()),
        kind=ProjectKind.REMOTE,
        git_remote_url=repo.url,
        cloned_at=cloned_at,
    )
    if not no_open:
        open_entry(app, entry, new_window)

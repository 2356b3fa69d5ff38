"""``projectpilot ssh ...`` — Remote-SSH editor sessions.

SSH hosts keep their own history and favorites, separate from local
projects. TARGET is ``[user@]host[:port]`` or the alias of a favorite.
"""

from __future__ import annotations

import click

from projectpilot.cli.context import AppContext
from projectpilot.cli.open_cmd import pass_app
from projectpilot.cli.output import fail, print_json, print_ssh_hosts
from projectpilot.exceptions import ProjectPilotError
from projectpilot.remote.ssh import SSHHost, parse_ssh_string


def _resolve_target(app: AppContext, target: str, alias: str | None = None) -> SSHHost:
    """Match TARGET against favorite aliases first, then parse it."""
    for host in app.ssh_favorites.list():
        if host.alias and host.alias == target:
            return host
    return parse_ssh_string(target, alias=alias)


@click.group("ssh")
def ssh_group() -> None:
    """Connect the editor to remote hosts over SSH."""


@ssh_group.command("connect")
@click.argument("target")
@click.option("--alias", default=None, help="Display name stored with the host.")
@pass_app
def ssh_connect(app: AppContext, target: str, alias: str | None) -> None:
    """Open a remote-SSH editor window on TARGET."""
    host = _resolve_target(app, target, alias)
    try:
        uri = app.launcher.open_remote(host)
    except ProjectPilotError as exc:
        fail(f"Failed to connect to {host.connection_string}: {exc}")
    app.ssh_history.add(host)
    click.echo(f"Connecting to {host.connection_string} ({uri})")


@ssh_group.command("list")
@click.option(
    "--section",
    type=click.Choice(["all", "favorites", "history"]),
    default="all",
    help="Favorites, history, or both (favorites first).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@pass_app
def ssh_list(app: AppContext, section: str, output_format: str) -> None:
    """List saved SSH hosts."""
    favorites = app.ssh_favorites.list()
    history = app.ssh_history.list()
    favorite_ids = {h.id for h in favorites}

    hosts: list[SSHHost] = []
    if section in ("all", "favorites"):
        hosts.extend(favorites)
    if section in ("all", "history"):
        hosts.extend(
            h for h in history
            if section == "history" or h.id not in favorite_ids
        )

    if output_format == "json":
        print_json([h.to_dict() for h in hosts])
    else:
        print_ssh_hosts(hosts)


@ssh_group.group("favorite")
def ssh_favorite_group() -> None:
    """Manage favorite SSH hosts."""


@ssh_favorite_group.command("add")
@click.argument("target")
@click.option("--alias", default=None, help="Display name stored with the host.")
@pass_app
def ssh_favorite_add(app: AppContext, target: str, alias: str | None) -> None:
    """Save TARGET as a favorite host."""
    host = parse_ssh_string(target, alias=alias)
    if app.ssh_favorites.add(host):
        click.echo(f"Added {host.label} to SSH favorites.")
    else:
        click.echo(f"{host.label} is already a favorite.")


@ssh_favorite_group.command("remove")
@click.argument("target")
@pass_app
def ssh_favorite_remove(app: AppContext, target: str) -> None:
    """Remove TARGET (connection string or alias) from the favorites."""
    host = _resolve_target(app, target)
    if not app.ssh_favorites.remove(host.id):
        fail(f"{target} is not a favorite.")
    click.echo(f"Removed {host.label} from SSH favorites.")


@ssh_favorite_group.command("rename")
@click.argument("target")
@click.argument("new_target")
@click.option("--alias", default=None, help="New display name.")
@pass_app
def ssh_favorite_rename(app: AppContext, target: str, new_target: str, alias: str | None) -> None:
    """Edit a favorite host in place, keeping its position."""
    old = _resolve_target(app, target)
    updated = parse_ssh_string(new_target, alias=alias or old.alias)
    if not app.ssh_favorites.replace(old.id, updated):
        fail(f"{target} is not a favorite.")
    app.ssh_history.replace(old.id, updated)
    click.echo(f"Updated {old.connection_string} -> {updated.connection_string}")


@ssh_group.group("history")
def ssh_history_group() -> None:
    """Manage recently connected SSH hosts."""


@ssh_history_group.command("clear")
@pass_app
def ssh_history_clear(app: AppContext) -> None:
    """Clear the SSH connection history."""
    app.ssh_history.clear()
    click.echo("SSH history cleared.")

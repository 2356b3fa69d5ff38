"""Rich output formatting helpers for the ProjectPilot CLI.

Provides the project and SSH host tables, JSON serialization for
``--format json`` and the shared error exit used by every command.
"""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from projectpilot.discovery.models import ProjectEntry
from projectpilot.remote.ssh import SSHHost

console = Console()


def fail(message: str, code: int = 1) -> NoReturn:
    """Print ``Error: <message>`` to stderr and exit with ``code``."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def humanize_age(moment: datetime | None, now: datetime | None = None) -> str:
    """Render a timestamp as a coarse relative age ("3h ago")."""
    if moment is None:
        return "-"
    now = now or datetime.now(moment.tzinfo)
    seconds = (now - moment).total_seconds()
    if seconds < 60:
        return "just now"
    for unit, size in (("d", 86400), ("h", 3600), ("m", 60)):
        if seconds >= size:
            return f"{int(seconds // size)}{unit} ago"
    return "just now"


def _short_path(path: str) -> str:
    home = str(Path.home())
    return "~" + path[len(home):] if path.startswith(home + os.sep) else path


def print_projects(projects: list[ProjectEntry], title: str = "Projects") -> None:
    """Print a table of projects, favorites marked with a star."""
    if not projects:
        console.print("[dim]No projects found.[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("", width=1)
    table.add_column("Name", style="bold")
    table.add_column("Path", style="dim")
    table.add_column("Modified", justify="right")
    table.add_column("Opened", justify="right")

    for p in projects:
        star = Text("*", style="yellow") if p.is_favorite else Text("")
        name = Text(p.name)
        if p.kind.value == "remote":
            name.append(" (cloned)", style="cyan")
        table.add_row(
            star, name, _short_path(p.path),
            humanize_age(p.last_modified), humanize_age(p.last_accessed),
        )
    console.print(table)


def print_ssh_hosts(hosts: list[SSHHost], title: str = "SSH Hosts") -> None:
    if not hosts:
        console.print("[dim]No SSH hosts saved.[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("", width=1)
    table.add_column("Host", style="bold")
    table.add_column("Alias")
    table.add_column("Connected", justify="right")
    for h in hosts:
        star = Text("*", style="yellow") if h.is_favorite else Text("")
        table.add_row(star, h.connection_string, h.alias or "-", humanize_age(h.last_accessed))
    console.print(table)


def print_json(data: Any) -> None:
    """Print data as indented JSON on stdout (plain, for piping)."""
    click.echo(json.dumps(data, indent=2, default=str))

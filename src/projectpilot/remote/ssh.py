"""SSH host strings for remote-development sessions.

Accepted forms::

    host
    host:port
    user@host
    user@host:port

The canonical connection string doubles as the host's id in the SSH
history and favorites lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from projectpilot.exceptions import ValidationError


@dataclass
class SSHHost:
    """A remote host the editor can connect to over SSH.

    Attributes:
        id: Canonical ``[user@]host[:port]`` string.
        host: Hostname or address.
        user: Login name, if given.
        port: TCP port, if not the default.
        alias: Optional display name chosen by the user.
        last_accessed: Derived from the SSH history list.
        is_favorite: Derived from the SSH favorites list.
    """

    id: str
    host: str
    user: str | None = None
    port: int | None = None
    alias: str | None = None
    last_accessed: datetime | None = None
    is_favorite: bool = False

    @property
    def connection_string(self) -> str:
        return format_ssh_string(self)

    @property
    def label(self) -> str:
        return self.alias or self.connection_string

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "host": self.host,
            "user": self.user,
            "port": self.port,
            "alias": self.alias,
            "lastAccessed": self.last_accessed.isoformat() if self.last_accessed else None,
            "isFavorite": self.is_favorite,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SSHHost:
        accessed = data.get("lastAccessed")
        port = data.get("port")
        return cls(
            id=str(data["id"]),
            host=str(data["host"]),
            user=data.get("user") or None,
            port=int(port) if port else None,
            alias=data.get("alias") or None,
            last_accessed=datetime.fromisoformat(accessed) if accessed else None,
            is_favorite=bool(data.get("isFavorite", False)),
        )


def _parse_port(raw: str, original: str) -> int:
    if not raw.isdigit():
        raise ValidationError(f"Invalid port in SSH host {original!r}: {raw!r}")
    port = int(raw)
    if not 0 < port < 65536:
        raise ValidationError(f"Port out of range in SSH host {original!r}: {port}")
    return port


def parse_ssh_string(value: str, alias: str | None = None) -> SSHHost:
    """Parse ``[user@]host[:port]`` into an ``SSHHost``.

    Raises:
        ValidationError: If the string is empty, the host part is empty,
            or the port is not a number in 1-65535.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        raise ValidationError("SSH host must not be empty")

    user: str | None = None
    rest = trimmed
    if "@" in trimmed:
        user_part, rest = trimmed.split("@", 1)
        user = user_part or None

    port: int | None = None
    if ":" in rest:
        host, port_part = rest.split(":", 1)
        port = _parse_port(port_part, trimmed)
    else:
        host = rest

    if not host:
        raise ValidationError(f"SSH host is missing a hostname: {trimmed!r}")

    ssh_host = SSHHost(id="", host=host, user=user, port=port, alias=alias or None)
    ssh_host.id = format_ssh_string(ssh_host)
    return ssh_host


def format_ssh_string(host: SSHHost) -> str:
    """Render ``host`` as ``[user@]host[:port]``."""
    user_part = f"{host.user}@" if host.user else ""
    port_part = f":{host.port}" if host.port else ""
    return f"{user_part}{host.host}{port_part}"


def remote_uri(host: SSHHost) -> str:
    """Return the editor's remote authority, e.g. ``ssh-remote+me@box:2222``."""
    return f"ssh-remote+{format_ssh_string(host)}"


def is_valid_ssh_host(value: str) -> bool:
    try:
        parse_ssh_string(value)
    except ValidationError:
        return False
    return True

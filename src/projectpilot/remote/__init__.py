"""Remote sources: git repositories to clone and SSH hosts to connect to."""

from __future__ import annotations

from projectpilot.remote.git import (
    GitRepository,
    build_authenticated_url,
    clone_repository,
    parse_git_url,
    repository_path,
)
from projectpilot.remote.ssh import (
    SSHHost,
    format_ssh_string,
    is_valid_ssh_host,
    parse_ssh_string,
    remote_uri,
)

__all__ = [
    "GitRepository",
    "SSHHost",
    "build_authenticated_url",
    "clone_repository",
    "format_ssh_string",
    "is_valid_ssh_host",
    "parse_git_url",
    "parse_ssh_string",
    "remote_uri",
    "repository_path",
]

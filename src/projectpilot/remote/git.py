"""Repository URL parsing and ``git clone`` delegation.

Three hosting providers are recognised by domain (GitHub, GitLab,
Bitbucket). Any other ``scheme://`` URL or scp-style ``user@host:path``
is accepted as a custom remote. Cloning itself is delegated to the
``git`` executable; nothing here speaks the git protocol.

Access tokens are embedded in the authority of ``https://`` URLs using
each provider's convention::

    github     https://<token>@github.com/...
    gitlab     https://oauth2:<token>@gitlab.com/...
    bitbucket  https://x-token-auth:<token>@bitbucket.org/...
    custom     https://<token>@host/...
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from projectpilot.exceptions import CloneError

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

_PROVIDER_PATTERNS: dict[str, re.Pattern[str]] = {
    "github": re.compile(r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$"),
    "gitlab": re.compile(r"gitlab\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$"),
    "bitbucket": re.compile(r"bitbucket\.org[/:]([^/]+)/([^/]+?)(?:\.git)?/?$"),
}

_GENERIC_SCHEMES = ("http://", "https://", "git://", "ssh://")
_TRAILING_NAME = re.compile(r"([^/:]+?)(?:\.git)?/?$")

_TOKEN_PREFIXES: dict[str, str] = {
    "github": "{token}@",
    "gitlab": "oauth2:{token}@",
    "bitbucket": "x-token-auth:{token}@",
}


@dataclass(frozen=True)
class GitRepository:
    """A parsed remote repository.

    Attributes:
        url: Clone URL, always ending in ``.git``.
        name: Repository name (the directory ``git clone`` creates).
        provider: ``github``, ``gitlab``, ``bitbucket`` or ``custom``.
        owner: Account or group owning the repository, when known.
    """

    url: str
    name: str
    provider: str
    owner: str | None = None


def _with_git_suffix(url: str) -> str:
    url = url.rstrip("/")
    return url if url.endswith(".git") else f"{url}.git"


def parse_git_url(url: str) -> GitRepository | None:
    """Parse a repository URL, or return None if it is not recognised."""
    url = (url or "").strip()
    if not url:
        return None

    for provider, pattern in _PROVIDER_PATTERNS.items():
        match = pattern.search(url)
        if match:
            return GitRepository(
                url=_with_git_suffix(url),
                name=match.group(2),
                provider=provider,
                owner=match.group(1),
            )

    if "@" in url or url.startswith(_GENERIC_SCHEMES):
        match = _TRAILING_NAME.search(url)
        name = match.group(1) if match else "repository"
        return GitRepository(url=_with_git_suffix(url), name=name, provider="custom")

    return None


def build_authenticated_url(url: str, token: str | None, provider: str | None = None) -> str:
    """Embed ``token`` in an ``https://`` URL. Other schemes are unchanged."""
    if not token or not url.startswith("https://"):
        return url
    prefix = _TOKEN_PREFIXES.get(provider or "custom", "{token}@").format(token=token)
    return "https://" + prefix + url[len("https://"):]


def _scrub(text: str, token: str | None) -> str:
    return text.replace(token, "***") if token else text


def repository_path(destination: str | Path, name: str) -> Path | None:
    """Return ``destination/name`` if it already holds a git checkout."""
    candidate = Path(destination).expanduser() / name
    try:
        if (candidate / ".git").exists():
            return candidate
    except OSError:
        logger.debug("Cannot inspect %s", candidate, exc_info=True)
    return None


def clone_repository(
    url: str,
    destination: str | Path,
    branch: str | None = None,
    token: str | None = None,
    runner: Runner = subprocess.run,
) -> Path:
    """Clone ``url`` into ``destination`` and return the checkout path.

    Args:
        url: Repository URL as typed by the user.
        destination: Parent directory; created if missing.
        branch: Branch to check out instead of the remote default.
        token: Access token embedded in HTTPS URLs.
        runner: ``subprocess.run`` compatible callable.

    Raises:
        CloneError: If git is missing or exits non-zero. The message
            carries git's stderr with the token masked.
    """
    repo = parse_git_url(url)
    name = repo.name if repo else "repository"
    auth_url = build_authenticated_url(url, token, repo.provider if repo else None)

    parent = Path(destination).expanduser()
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CloneError(f"Cannot create clone directory {parent}: {exc}") from exc

    cmd = ["git", "clone"]
    if branch:
        cmd += ["--branch", branch]
    cmd += [auth_url, name]

    logger.info("Cloning %s into %s", url, parent / name)
    try:
        proc = runner(cmd, cwd=str(parent), capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        raise CloneError("git is not installed or not on PATH") from exc
    except OSError as exc:
        raise CloneError(_scrub(str(exc), token)) from exc

    if proc.returncode != 0:
        message = (proc.stderr or proc.stdout or "").strip() or f"git exited with {proc.returncode}"
        raise CloneError(_scrub(message, token))
    return parent / name

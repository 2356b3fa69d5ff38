"""User settings loaded from a YAML file.

Lookup order for the file:
    1. An explicit path (``--config``).
    2. ``$PROJECTPILOT_CONFIG``.
    3. ``$XDG_CONFIG_HOME/projectpilot/config.yaml`` (``~/.config`` default).

A missing file yields the defaults. Validation is deliberately lenient:
list fields accept either a YAML list or a comma-separated string, and an
unparsable scan depth falls back to 3.

Example ``config.yaml``::

    scan_directories: ~/src, ~/work
    scan_depth: 3
    excluded_folders: [node_modules, vendor, .cache]
    clone_directory: ~/src
    open_in_new_window: true
    editor: cursor
    github_token: ghp_...
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from projectpilot.discovery.markers import normalize_patterns
from projectpilot.discovery.models import ScanConfig
from projectpilot.exceptions import ConfigError
from projectpilot.launcher import DEFAULT_EDITOR

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PROJECTPILOT_CONFIG"
DEFAULT_SCAN_DEPTH = 3
DEFAULT_EXCLUDED_FOLDERS: tuple[str, ...] = ("node_modules", ".git", "vendor")
DEFAULT_CLONE_DIRECTORY = "~/Projects"

# Environment variables consulted when a token is not set in the file.
_TOKEN_ENV_VARS: dict[str, str] = {
    "github": "GITHUB_TOKEN",
    "gitlab": "GITLAB_TOKEN",
    "bitbucket": "BITBUCKET_TOKEN",
}


def _xdg_dir(env_var: str, fallback: str) -> Path:
    value = os.environ.get(env_var)
    return Path(value) if value else Path.home() / fallback


def default_config_path() -> Path:
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / "projectpilot" / "config.yaml"


def default_state_file() -> Path:
    return _xdg_dir("XDG_STATE_HOME", ".local/state") / "projectpilot" / "state.json"


def default_scan_directories(system: str | None = None) -> tuple[str, ...]:
    """Directories scanned when none are configured."""
    if (system or os.name) == "nt":
        base = os.environ.get("USERPROFILE", str(Path.home()))
        return tuple(os.path.join(base, d) for d in ("Documents", "Desktop", "Projects"))
    home = str(Path.home())
    return tuple(os.path.join(home, d) for d in ("Documents", "Desktop", "Projects", "projects"))


def expand_path(path: str) -> str:
    """Expand a leading ``~`` and return an absolute path."""
    return os.path.abspath(os.path.expanduser(path.strip()))


def parse_scan_depth(raw: Any) -> int:
    """Return ``raw`` as a non-negative int, or the default if unparsable."""
    if isinstance(raw, bool):
        return DEFAULT_SCAN_DEPTH
    try:
        depth = int(str(raw).strip())
    except (TypeError, ValueError):
        return DEFAULT_SCAN_DEPTH
    return depth if depth >= 0 else DEFAULT_SCAN_DEPTH


def _parse_bool(raw: Any, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Resolved user settings.

    Attributes:
        scan_directories: Roots to scan, ``~`` already expanded.
        scan_depth: Maximum walk depth below each root.
        excluded_folders: Exclusion substrings.
        clone_directory: Parent directory for new clones and projects.
        github_token: Token for github.com HTTPS clones.
        gitlab_token: Token for gitlab.com HTTPS clones.
        bitbucket_token: Token for bitbucket.org HTTPS clones.
        open_in_new_window: Pass ``--new-window`` to the editor.
        editor: Editor command name or path.
        state_file: JSON file holding history, favorites and the cache.
    """

    scan_directories: tuple[str, ...] = field(default_factory=default_scan_directories)
    scan_depth: int = DEFAULT_SCAN_DEPTH
    excluded_folders: tuple[str, ...] = DEFAULT_EXCLUDED_FOLDERS
    clone_directory: str = DEFAULT_CLONE_DIRECTORY
    github_token: str | None = None
    gitlab_token: str | None = None
    bitbucket_token: str | None = None
    open_in_new_window: bool = True
    editor: str = DEFAULT_EDITOR
    state_file: Path = field(default_factory=default_state_file)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from a parsed YAML mapping."""
        dirs = _split(data.get("scan_directories"))
        excluded = data.get("excluded_folders")
        state_file = data.get("state_file")

        tokens: dict[str, str | None] = {}
        for provider, env_var in _TOKEN_ENV_VARS.items():
            value = data.get(f"{provider}_token") or os.environ.get(env_var)
            tokens[f"{provider}_token"] = str(value).strip() if value else None

        return cls(
            scan_directories=tuple(expand_path(d) for d in dirs) or default_scan_directories(),
            scan_depth=parse_scan_depth(data.get("scan_depth", DEFAULT_SCAN_DEPTH)),
            excluded_folders=(
                normalize_patterns(excluded) if excluded is not None else DEFAULT_EXCLUDED_FOLDERS
            ),
            clone_directory=str(data.get("clone_directory") or DEFAULT_CLONE_DIRECTORY),
            open_in_new_window=_parse_bool(data.get("open_in_new_window"), True),
            editor=str(data.get("editor") or DEFAULT_EDITOR),
            state_file=Path(state_file).expanduser() if state_file else default_state_file(),
            **tokens,
        )

    def scan_config(self) -> ScanConfig:
        return ScanConfig(
            roots=self.scan_directories,
            max_depth=self.scan_depth,
            exclusion_patterns=self.excluded_folders,
        )

    def token_for(self, provider: str | None) -> str | None:
        """Return the configured token for a hosting provider, if any."""
        return {
            "github": self.github_token,
            "gitlab": self.gitlab_token,
            "bitbucket": self.bitbucket_token,
        }.get(provider or "")

    @property
    def clone_path(self) -> Path:
        return Path(self.clone_directory).expanduser()


def _split(raw: Any) -> list[str]:
    if raw is None:
        return []
    items: Iterable[Any] = raw.split(",") if isinstance(raw, str) else raw
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from ``path`` or the default location.

    Raises:
        ConfigError: If the file exists but is not valid YAML, or its top
            level is not a mapping.
    """
    config_path = Path(path).expanduser() if path else default_config_path()
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No config file at %s; using defaults", config_path)
        return Settings.from_dict({})
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return Settings.from_dict(data)

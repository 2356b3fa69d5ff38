"""Project markers and folder exclusion rules.

A directory is a project root when it directly contains at least one of
``PROJECT_MARKERS``: version-control metadata or a manifest from a common
language ecosystem. IDE settings folders (``.vscode``, ``.idea``) are left
out on purpose. They show up in home directories, scratch folders and
dotfile repos far too often to signal a project on their own.

Exclusion patterns are case-insensitive substrings rather than exact
names, so a single ``node_modules`` entry also prunes vendored copies
such as ``old_node_modules``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

logger = logging.getLogger(__name__)

PROJECT_MARKERS: tuple[str, ...] = (
    # -- Version control --
    ".git",
    # -- JavaScript / TypeScript --
    "package.json",
    "tsconfig.json",
    "angular.json",
    "vue.config.js",
    "vite.config.js",
    "webpack.config.js",
    # -- Rust, JVM, Go --
    "Cargo.toml",
    "pom.xml",
    "build.gradle",
    "go.mod",
    # -- Python --
    "requirements.txt",
    "setup.py",
    "pyproject.toml",
    # -- PHP, Ruby, Elixir, Clojure --
    "composer.json",
    "Gemfile",
    "mix.exs",
    "project.clj",
    "deps.edn",
)


def is_project(path: str | os.PathLike[str], markers: Iterable[str] = PROJECT_MARKERS) -> bool:
    """Return True if any marker exists directly inside ``path``.

    ``lexists`` is used so that a marker which is itself a dangling
    symlink still counts. Permission and other OS errors on a single
    check count as "marker absent".
    """
    base = os.fspath(path)
    for marker in markers:
        try:
            if os.path.lexists(os.path.join(base, marker)):
                return True
        except OSError:
            logger.debug("Marker check failed: %s/%s", base, marker, exc_info=True)
    return False


def normalize_patterns(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Parse exclusion patterns into a tuple of trimmed, non-empty strings.

    Accepts a comma-separated string (as typed into a config field) or
    any iterable of strings (as written in a YAML list).
    """
    if raw is None:
        return ()
    items = raw.split(",") if isinstance(raw, str) else raw
    return tuple(p.strip() for p in items if p and p.strip())


def is_excluded(folder_name: str, patterns: Iterable[str]) -> bool:
    """Return True if ``folder_name`` contains any exclusion pattern.

    Comparison is case-insensitive; patterns are trimmed and empty
    patterns never match (an empty substring would exclude everything).
    """
    name = folder_name.casefold()
    for pattern in patterns:
        needle = pattern.strip().casefold()
        if needle and needle in name:
            return True
    return False

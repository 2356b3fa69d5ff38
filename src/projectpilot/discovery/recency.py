"""Most-recent-modification lookup for a project subtree.

The value is display metadata only ("edited 3 hours ago"). It never
influences whether a directory is classified as a project, so every
error is swallowed and the walk is kept shallow.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from datetime import datetime

from projectpilot.discovery.markers import is_excluded

logger = logging.getLogger(__name__)

DEFAULT_RECENCY_DEPTH = 2


def latest_modification(
    root: str | os.PathLike[str],
    patterns: Iterable[str] = (),
    max_depth: int = DEFAULT_RECENCY_DEPTH,
) -> datetime | None:
    """Return the newest mtime among entries below ``root``.

    Files and directories up to ``max_depth`` levels below ``root`` are
    visited; ``root`` itself is not recorded. Entries whose name matches
    an exclusion pattern are neither recorded nor descended into.
    Symlinks are not followed.

    Args:
        root: Directory to inspect.
        patterns: Exclusion substrings, as for the directory walker.
        max_depth: Levels to descend. ``1`` looks at direct children only.

    Returns:
        The newest modification time seen, or None if the subtree is
        empty or unreadable.
    """
    patterns = tuple(patterns)
    newest: float | None = None
    pending: list[tuple[str, int]] = [(os.fspath(root), 1)]

    while pending:
        directory, depth = pending.pop()
        if depth > max_depth:
            continue
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError:
            logger.debug("Cannot list %s", directory, exc_info=True)
            continue

        for entry in entries:
            if is_excluded(entry.name, patterns):
                continue
            try:
                st = entry.stat(follow_symlinks=False)
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                logger.debug("Cannot stat %s", entry.path, exc_info=True)
                continue
            if newest is None or st.st_mtime > newest:
                newest = st.st_mtime
            if is_dir and depth < max_depth:
                pending.append((entry.path, depth + 1))

    return datetime.fromtimestamp(newest) if newest is not None else None

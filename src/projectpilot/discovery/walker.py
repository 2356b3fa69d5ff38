"""Bounded-depth project discovery over a set of root directories.

Walk Algorithm:
    For each pending directory ``d`` at depth ``k`` (roots start at 0):

    1. Stop if ``k > max_depth``.
    2. Stop if ``basename(d)`` matches an exclusion pattern.
    3. ``d`` is a *container* if any non-excluded child directory is a
       project. Containers are never emitted, even when ``d`` carries a
       marker of its own, so monorepo and workspace roots yield their
       members instead of a single entry.
    4. A non-container with a marker is emitted and not descended into.
    5. Anything else queues its non-excluded child directories at
       ``k + 1`` while ``k < max_depth``.

Pending directories live in a FIFO work queue instead of the call stack.
Each directory is keyed by its canonical path, so a symlink cycle or two
roots that overlap on disk are walked once.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from datetime import datetime

from projectpilot.discovery.markers import PROJECT_MARKERS, is_excluded, is_project
from projectpilot.discovery.models import ProjectEntry, ProjectKind, ScanConfig
from projectpilot.discovery.recency import DEFAULT_RECENCY_DEPTH, latest_modification

logger = logging.getLogger(__name__)


class ProjectWalker:
    """Discovers project directories below the configured roots.

    Usage::

        walker = ProjectWalker()
        config = ScanConfig(roots=("/home/me/src",), max_depth=3,
                            exclusion_patterns=("node_modules",))
        for entry in walker.scan(config):
            print(entry.name, entry.path)
    """

    def __init__(
        self,
        markers: tuple[str, ...] = PROJECT_MARKERS,
        recency_depth: int = DEFAULT_RECENCY_DEPTH,
    ) -> None:
        self.markers = markers
        self.recency_depth = recency_depth

    def scan(self, config: ScanConfig) -> list[ProjectEntry]:
        """Walk every root in ``config`` and return the projects found.

        Roots are processed in order. Missing or unreadable roots are
        skipped. Every qualifying directory appears exactly once.
        """
        found: list[ProjectEntry] = []
        visited: set[str] = set()
        for root in config.roots:
            found.extend(self._walk(root, config, visited))
        logger.debug("Scan found %d project(s) under %d root(s)", len(found), len(config.roots))
        return found

    def scan_root(self, root: str, config: ScanConfig) -> list[ProjectEntry]:
        """Walk a single root using the depth and exclusions of ``config``."""
        return self._walk(root, config, set())

    def _walk(self, root: str, config: ScanConfig, visited: set[str]) -> list[ProjectEntry]:
        found: list[ProjectEntry] = []
        start = os.path.abspath(os.path.expanduser(root))
        if not os.path.isdir(start):
            logger.debug("Skipping missing root: %s", start)
            return found

        pending: deque[tuple[str, int]] = deque([(start, 0)])
        while pending:
            directory, depth = pending.popleft()
            if depth > config.max_depth:
                continue
            if is_excluded(os.path.basename(directory) or directory, config.exclusion_patterns):
                continue

            canonical = os.path.realpath(directory)
            if canonical in visited:
                logger.debug("Already visited %s (via %s)", canonical, directory)
                continue
            visited.add(canonical)

            children = self._child_dirs(directory, config.exclusion_patterns)
            if children is None:
                continue

            if self._is_container(children):
                logger.debug("Container: %s", directory)
            elif is_project(directory, self.markers):
                entry = self._make_entry(directory, config)
                if entry is not None:
                    found.append(entry)
                continue

            if depth < config.max_depth:
                pending.extend((child, depth + 1) for child in children)
        return found

    def _child_dirs(self, directory: str, patterns: tuple[str, ...]) -> list[str] | None:
        """List non-excluded child directories, or None if unreadable.

        Symlinks to directories are included; the visited set keeps them
        from looping.
        """
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            logger.debug("Cannot list %s", directory, exc_info=True)
            return None

        children: list[str] = []
        for entry in entries:
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                logger.debug("Cannot stat %s", entry.path, exc_info=True)
                continue
            if is_excluded(entry.name, patterns):
                continue
            children.append(entry.path)
        return children

    def _is_container(self, children: list[str]) -> bool:
        return any(is_project(child, self.markers) for child in children)

    def _make_entry(self, directory: str, config: ScanConfig) -> ProjectEntry | None:
        try:
            st = os.stat(directory)
        except OSError:
            logger.debug("Cannot stat project %s", directory, exc_info=True)
            return None
        modified = latest_modification(
            directory, config.exclusion_patterns, self.recency_depth,
        )
        return ProjectEntry.for_path(
            directory,
            kind=ProjectKind.LOCAL,
            size_bytes=st.st_size,
            last_modified=modified or datetime.fromtimestamp(st.st_mtime),
        )

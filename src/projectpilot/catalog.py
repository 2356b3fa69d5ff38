"""Project catalog: the scan cache, walker, history and favorites together.

This is what the ``open`` and ``list`` commands consume. A load consults
the cache first and only walks the filesystem on a miss or an explicit
refresh; the result is then annotated with favorite and last-access
metadata from the stores.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from projectpilot.config import Settings
from projectpilot.discovery.models import ProjectEntry
from projectpilot.discovery.walker import ProjectWalker
from projectpilot.storage.cache import ResultCache
from projectpilot.storage.history import FavoritesStore, HistoryStore
from projectpilot.storage.kv import FAVORITES_KEY, HISTORY_KEY, KeyValueStore

logger = logging.getLogger(__name__)

SECTIONS = ("all", "favorites", "history")


class ProjectCatalog:
    """Loads, annotates and filters known projects.

    Args:
        settings: Resolved user settings (roots, depth, exclusions).
        store: Backend for the cache, history and favorites slots.
        walker: Directory walker; a default ``ProjectWalker`` if omitted.
        cache: Result cache; built on ``store`` if omitted.
        clock: Access-time source for history entries.
    """

    def __init__(
        self,
        settings: Settings,
        store: KeyValueStore,
        walker: ProjectWalker | None = None,
        cache: ResultCache | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings
        self.walker = walker or ProjectWalker()
        self.cache = cache or ResultCache(store)
        self.history: HistoryStore[ProjectEntry] = HistoryStore(
            store, HISTORY_KEY, ProjectEntry, clock=clock,
        )
        self.favorites: FavoritesStore[ProjectEntry] = FavoritesStore(
            store, FAVORITES_KEY, ProjectEntry,
        )

    def scan(self, refresh: bool = False) -> list[ProjectEntry]:
        """Return scanned projects, from the cache unless ``refresh``."""
        config = self.settings.scan_config()
        if refresh:
            self.cache.invalidate()
        else:
            cached = self.cache.get(config)
            if cached is not None:
                logger.debug("Using %d cached project(s)", len(cached))
                return cached

        projects = self.walker.scan(config)
        self.cache.set(config, projects)
        return projects

    def load(self, refresh: bool = False) -> list[ProjectEntry]:
        """Return scanned projects annotated with favorite/history state."""
        return self.annotate(self.scan(refresh=refresh))

    def annotate(self, projects: list[ProjectEntry]) -> list[ProjectEntry]:
        favorite_ids = set(self.favorites.ids())
        accessed = {e.id: e.last_accessed for e in self.history.list()}
        return [
            p.copy(is_favorite=p.id in favorite_ids, last_accessed=accessed.get(p.id))
            for p in projects
        ]

    def section(self, name: str, refresh: bool = False) -> list[ProjectEntry]:
        """Return the projects shown under ``all``, ``favorites`` or ``history``."""
        if name == "favorites":
            return self.favorites.list()
        if name == "history":
            favorite_ids = set(self.favorites.ids())
            return [e.copy(is_favorite=e.id in favorite_ids) for e in self.history.list()]
        if name == "all":
            return self.load(refresh=refresh)
        raise ValueError(f"Unknown section: {name!r}")

    def record_open(self, entry: ProjectEntry) -> ProjectEntry:
        """Add ``entry`` to the front of the history."""
        return self.history.add(entry.copy(is_favorite=False))

    def toggle_favorite(self, entry: ProjectEntry) -> bool:
        """Flip favorite membership; returns True if now a favorite."""
        if self.favorites.is_favorite(entry.id):
            self.favorites.remove(entry.id)
            return False
        self.favorites.add(entry.copy(last_accessed=None))
        return True


def search(projects: list[ProjectEntry], query: str | None) -> list[ProjectEntry]:
    """Filter by case-insensitive substring match on name or path."""
    if not query:
        return list(projects)
    needle = query.casefold()
    return [p for p in projects if needle in p.name.casefold() or needle in p.path.casefold()]

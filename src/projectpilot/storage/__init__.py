"""Persisted state: key-value backends, scan cache, history and favorites."""

from __future__ import annotations

from projectpilot.storage.cache import DEFAULT_TTL, ResultCache
from projectpilot.storage.history import MAX_HISTORY_ITEMS, FavoritesStore, HistoryStore
from projectpilot.storage.kv import (
    CACHE_KEY,
    FAVORITES_KEY,
    HISTORY_KEY,
    SSH_FAVORITES_KEY,
    SSH_HISTORY_KEY,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)

__all__ = [
    "CACHE_KEY",
    "DEFAULT_TTL",
    "FAVORITES_KEY",
    "FavoritesStore",
    "HISTORY_KEY",
    "HistoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "MAX_HISTORY_ITEMS",
    "MemoryStore",
    "ResultCache",
    "SSH_FAVORITES_KEY",
    "SSH_HISTORY_KEY",
]

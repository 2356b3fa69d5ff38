"""History and favorites lists persisted in a key-value slot.

Both lists hold denormalized copies of the entity at the time of the
action; later changes on disk do not update stored copies. Entities are
any dataclass with an ``id`` field, a ``to_dict`` method and a
``from_dict`` classmethod (``ProjectEntry`` and ``SSHHost``).

Every mutation is a plain read-modify-write of one slot. Two overlapping
invocations (for example two quick "open" actions from separate
processes) can drop one of the updates. This is accepted for a
single-user tool and not papered over.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar

from projectpilot.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 50


class StoredEntity(Protocol):
    id: str

    def to_dict(self) -> dict[str, Any]: ...


E = TypeVar("E", bound=StoredEntity)


class _SlotList(Generic[E]):
    """Ordered list of entities in one JSON slot."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        entity_type: Any,
    ) -> None:
        self.store = store
        self.key = key
        self.entity_type = entity_type

    def list(self) -> list[E]:
        """Return the stored entities. A corrupt slot reads as empty."""
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Slot %r is corrupt; treating it as empty", self.key)
            return []
        if not isinstance(items, list):
            logger.warning("Slot %r is not a list; treating it as empty", self.key)
            return []

        entities: list[E] = []
        for item in items:
            try:
                entities.append(self.entity_type.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Dropping malformed record in %r: %r", self.key, item)
        return entities

    def _write(self, entities: list[E]) -> None:
        self.store.set(self.key, json.dumps([e.to_dict() for e in entities]))

    def ids(self) -> list[str]:
        return [e.id for e in self.list()]

    def get(self, entity_id: str) -> E | None:
        for entity in self.list():
            if entity.id == entity_id:
                return entity
        return None

    def remove(self, entity_id: str) -> bool:
        """Remove the entity with ``entity_id``. Returns True if present."""
        entities = self.list()
        kept = [e for e in entities if e.id != entity_id]
        if len(kept) == len(entities):
            return False
        self._write(kept)
        return True

    def clear(self) -> None:
        self.store.delete(self.key)

    def replace(self, old_id: str, entity: E) -> bool:
        """Swap the entity stored under ``old_id`` for ``entity`` in place.

        Used when a saved SSH host is edited and its id changes. Any other
        entry already stored under ``entity.id`` is dropped so ids stay
        unique. Returns False (and writes nothing) if ``old_id`` is not
        stored.
        """
        entities = self.list()
        for index, existing in enumerate(entities):
            if existing.id == old_id:
                entities[index] = self._prepare(entity)
                self._write([
                    e for i, e in enumerate(entities)
                    if i == index or e.id != entity.id
                ])
                return True
        return False

    def _prepare(self, entity: E) -> E:
        return entity


class HistoryStore(_SlotList[E]):
    """Most-recent-first access history, capped at ``limit`` entries.

    Args:
        store: Backend holding the slot.
        key: Slot name.
        entity_type: Class used to deserialize records.
        limit: Maximum number of entries kept.
        clock: Returns the access time to stamp on new entries.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        entity_type: Any,
        limit: int = MAX_HISTORY_ITEMS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(store, key, entity_type)
        self.limit = limit
        self.clock = clock

    def add(self, entity: E) -> E:
        """Move ``entity`` to the front, stamped with the current time.

        Any existing entry with the same id is removed first, so repeat
        access never produces duplicates. The oldest entries beyond
        ``limit`` are dropped.

        Returns:
            The stored copy.
        """
        stamped = dataclasses.replace(entity, last_accessed=self.clock())
        history = [e for e in self.list() if e.id != entity.id]
        history.insert(0, stamped)
        self._write(history[: self.limit])
        return stamped


class FavoritesStore(_SlotList[E]):
    """Favorites in insertion order, no cap."""

    def add(self, entity: E) -> bool:
        """Append ``entity`` unless its id is already a favorite.

        Returns:
            True if the entity was added, False if it was already present.
        """
        favorites = self.list()
        if any(e.id == entity.id for e in favorites):
            return False
        favorites.append(self._prepare(entity))
        self._write(favorites)
        return True

    def is_favorite(self, entity_id: str) -> bool:
        return entity_id in self.ids()

    def _prepare(self, entity: E) -> E:
        return dataclasses.replace(entity, is_favorite=True)

"""Time-boxed cache of walker results.

Records are keyed by ``ScanConfig.fingerprint()``, so editing the roots,
depth or exclusions takes effect on the next lookup without a manual
refresh. A record older than the TTL (24 hours by default) reads as
absent. ``invalidate()`` drops records explicitly and backs the
user-facing refresh action.

Slot layout (JSON)::

    {
      "<fingerprint>": {"written_at": 1760000000.0, "projects": [ ... ]},
      ...
    }
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from projectpilot.discovery.models import ProjectEntry, ScanConfig
from projectpilot.storage.kv import CACHE_KEY, KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)


class ResultCache:
    """Memoizes scan results per configuration.

    Args:
        store: Backend holding the cache slot.
        ttl: Maximum record age before it reads as absent.
        clock: Returns the current time as epoch seconds.
        key: Slot name inside ``store``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
        key: str = CACHE_KEY,
    ) -> None:
        self.store = store
        self.ttl = ttl
        self.clock = clock
        self.key = key

    def _records(self) -> dict[str, Any]:
        raw = self.store.get(self.key)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Project cache is corrupt; ignoring it")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, config: ScanConfig) -> list[ProjectEntry] | None:
        """Return the cached projects for ``config``, or None on a miss.

        A hit returns the stored list as-is; nothing is checked against
        the filesystem.
        """
        record = self._records().get(config.fingerprint())
        if not isinstance(record, dict):
            return None
        written_at = record.get("written_at")
        if not isinstance(written_at, (int, float)):
            return None
        if self.clock() - written_at > self.ttl.total_seconds():
            logger.debug("Project cache expired (written %.0fs ago)", self.clock() - written_at)
            return None
        try:
            return [ProjectEntry.from_dict(item) for item in record.get("projects", [])]
        except (KeyError, TypeError, ValueError):
            logger.warning("Project cache record is malformed; ignoring it")
            return None

    def set(self, config: ScanConfig, projects: list[ProjectEntry]) -> None:
        """Store ``projects`` for ``config``, stamped with the current time."""
        records = self._records()
        now = self.clock()
        # Drop expired records so the slot does not grow without bound.
        records = {
            fp: rec for fp, rec in records.items()
            if isinstance(rec, dict)
            and isinstance(rec.get("written_at"), (int, float))
            and now - rec["written_at"] <= self.ttl.total_seconds()
        }
        records[config.fingerprint()] = {
            "written_at": now,
            "projects": [p.to_dict() for p in projects],
        }
        self.store.set(self.key, json.dumps(records))

    def invalidate(self, config: ScanConfig | None = None) -> None:
        """Drop the record for ``config``, or every record when None."""
        if config is None:
            self.store.delete(self.key)
            return
        records = self._records()
        if records.pop(config.fingerprint(), None) is not None:
            self.store.set(self.key, json.dumps(records))

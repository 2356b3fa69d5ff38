"""Key-value storage backends for persisted state.

History, favorites and the scan cache each occupy one named slot holding
a JSON-encoded string. They only talk to the ``KeyValueStore`` interface,
so the backend can change without touching their logic.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from projectpilot.exceptions import StorageError

logger = logging.getLogger(__name__)

# Slot names, shared by every backend.
FAVORITES_KEY = "favorites"
HISTORY_KEY = "history"
CACHE_KEY = "project-cache"
SSH_FAVORITES_KEY = "ssh-favorites"
SSH_HISTORY_KEY = "ssh-history"


class KeyValueStore(ABC):
    """Minimal string-to-string storage capability."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""


class MemoryStore(KeyValueStore):
    """In-process store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore(KeyValueStore):
    """All slots in a single JSON object on disk.

    Every call re-reads the file so separate invocations see each other's
    writes. Writes go to a temporary file that replaces the original, so a
    crash mid-write leaves the previous state intact. There is no locking:
    two processes doing read-modify-write at the same time can lose one
    update.

    A missing file reads as empty. A file that cannot be parsed also reads
    as empty (with a warning) and is overwritten on the next write.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Cannot read state file %s: %s", self.path, exc)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("State file %s is corrupt; treating it as empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("State file %s is not a JSON object; treating it as empty", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent,
            )
        except OSError as exc:
            raise StorageError(f"Cannot write state file {self.path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp)
            if isinstance(exc, OSError):
                raise StorageError(f"Cannot write state file {self.path}: {exc}") from exc
            raise

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

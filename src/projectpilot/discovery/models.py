"""Data models for the discovery module.

Contains the scan configuration consumed by ``ProjectWalker`` and the
``ProjectEntry`` records it produces. Entries double as the persisted
payload of the history, favorites and cache slots, so they carry their
own ``to_dict``/``from_dict`` serialization.
"""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


class ProjectKind(str, Enum):
    """Where a project lives."""

    LOCAL = "local"
    REMOTE = "remote"


def _dt_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dt_from_str(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value)
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


@dataclass(frozen=True)
class ScanConfig:
    """Immutable configuration for one scan invocation.

    Attributes:
        roots: Absolute root directories, scanned in order.
        max_depth: Levels below each root the walker may descend.
            ``0`` evaluates the roots themselves only.
        exclusion_patterns: Case-insensitive substrings; any folder whose
            name contains one is pruned.
    """

    roots: tuple[str, ...]
    max_depth: int = 3
    exclusion_patterns: tuple[str, ...] = ()

    def fingerprint(self) -> str:
        """Return a stable hash identifying this configuration.

        Pattern order, case and blank patterns do not matter. Root order
        does, because a project reachable from two roots is reported under
        the first one.
        """
        payload = json.dumps(
            {
                "roots": list(self.roots),
                "max_depth": self.max_depth,
                "exclusions": sorted(
                    {p.strip().casefold() for p in self.exclusion_patterns if p.strip()}
                ),
            },
            sort_keys=True,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass
class ProjectEntry:
    """A single project directory, local or freshly cloned.

    The path doubles as the primary key: ``id`` always equals ``path``
    and two entries with equal paths are the same logical project.

    Attributes:
        id: Identical to ``path``.
        name: Final path segment.
        path: Absolute directory path.
        kind: ``local`` for scanned directories, ``remote`` for clones.
        size_bytes: Directory size as reported by ``stat``.
        last_modified: Newest modification time seen near the project root.
        git_remote_url: Origin URL for cloned repositories.
        cloned_at: When the repository was cloned.
        is_favorite: Derived from the favorites store, never authoritative
            on a scanned entry.
        last_accessed: Derived from the history store.
    """

    id: str
    name: str
    path: str
    kind: ProjectKind = ProjectKind.LOCAL
    size_bytes: int | None = None
    last_modified: datetime | None = None
    git_remote_url: str | None = None
    cloned_at: datetime | None = None
    is_favorite: bool = False
    last_accessed: datetime | None = None
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.id != self.path:
            raise ValueError(f"Project id must equal its path: {self.id!r} != {self.path!r}")
        if not isinstance(self.kind, ProjectKind):
            self.kind = ProjectKind(self.kind)

    @classmethod
    def for_path(cls, path: str, **kwargs: Any) -> ProjectEntry:
        """Build an entry whose id and name are derived from ``path``."""
        name = kwargs.pop("name", None) or _basename(path)
        return cls(id=path, name=name, path=path, **kwargs)

    def copy(self, **changes: Any) -> ProjectEntry:
        """Return a shallow copy with ``changes`` applied."""
        changes.setdefault("tags", list(self.tags))
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "type": self.kind.value,
            "size": self.size_bytes,
            "lastModified": _dt_to_str(self.last_modified),
            "gitRemote": self.git_remote_url,
            "clonedAt": _dt_to_str(self.cloned_at),
            "isFavorite": self.is_favorite,
            "lastAccessed": _dt_to_str(self.last_accessed),
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectEntry:
        """Deserialize an entry written by ``to_dict``.

        Missing fields fall back to defaults. ``id`` is recomputed from
        ``path`` when absent so older records still load.
        """
        path = str(data["path"])
        return cls(
            id=str(data.get("id") or path),
            name=str(data.get("name") or _basename(path)),
            path=path,
            kind=ProjectKind(data.get("type", ProjectKind.LOCAL.value)),
            size_bytes=data.get("size"),
            last_modified=_dt_from_str(data.get("lastModified")),
            git_remote_url=data.get("gitRemote"),
            cloned_at=_dt_from_str(data.get("clonedAt")),
            is_favorite=bool(data.get("isFavorite", False)),
            last_accessed=_dt_from_str(data.get("lastAccessed")),
            tags=list(data.get("tags") or []),
        )


def _basename(path: str) -> str:
    return os.path.basename(path.rstrip("/\\")) or path

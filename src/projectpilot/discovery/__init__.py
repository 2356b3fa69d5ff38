"""Local project discovery.

Provides a bounded-depth walker that classifies directories as projects
or containers, plus the marker and exclusion rules it applies.

Public API::

    from projectpilot.discovery import ProjectWalker, ScanConfig

    walker = ProjectWalker()
    for entry in walker.scan(ScanConfig(roots=("~/src",), max_depth=3)):
        print(f"{entry.name}: {entry.path}")
"""

from __future__ import annotations

from projectpilot.discovery.markers import (
    PROJECT_MARKERS,
    is_excluded,
    is_project,
    normalize_patterns,
)
from projectpilot.discovery.models import ProjectEntry, ProjectKind, ScanConfig
from projectpilot.discovery.recency import latest_modification
from projectpilot.discovery.walker import ProjectWalker

__all__ = [
    "PROJECT_MARKERS",
    "ProjectEntry",
    "ProjectKind",
    "ProjectWalker",
    "ScanConfig",
    "is_excluded",
    "is_project",
    "latest_modification",
    "normalize_patterns",
]

"""Shared test helpers for building fake workspace trees.

Each helper creates a minimal but realistic directory layout for the
walker tests: plain projects, containers holding projects, and excluded
dependency folders.
"""

from __future__ import annotations

import os
from pathlib import Path


def make_project(path: Path, marker: str = ".git") -> Path:
    """Create ``path`` and drop a project marker into it.

    ``.git`` is created as a directory; any other marker as a file.
    """
    path.mkdir(parents=True, exist_ok=True)
    if marker == ".git":
        (path / ".git").mkdir(exist_ok=True)
    else:
        (path / marker).write_text("{}\n")
    return path


def make_plain_dir(path: Path) -> Path:
    """Create a directory with a non-marker file in it."""
    path.mkdir(parents=True, exist_ok=True)
    (path / "notes.txt").write_text("not a project\n")
    return path


def build_workspace(root: Path) -> Path:
    """Build the reference layout::

        root/
          a/            .git
          b/            (no markers)
            c/          package.json
    """
    make_project(root / "a")
    make_plain_dir(root / "b")
    make_project(root / "b" / "c", "package.json")
    return root


def set_mtime(path: Path, timestamp: float) -> None:
    os.utime(path, (timestamp, timestamp))


def paths_of(entries) -> set[str]:
    return {e.path for e in entries}

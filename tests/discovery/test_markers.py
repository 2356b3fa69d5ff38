"""Tests for project marker detection and folder exclusion rules."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from projectpilot.discovery.markers import (
    PROJECT_MARKERS,
    is_excluded,
    is_project,
    normalize_patterns,
)

from tests.discovery.helpers import make_plain_dir, make_project


# ---------------------------------------------------------------------------
# is_project()
# ---------------------------------------------------------------------------


class TestIsProject:
    """Marker detection directly inside a directory."""

    def test_empty_dir_is_not_project(self, tmp_path: Path) -> None:
        assert is_project(tmp_path) is False

    def test_plain_files_are_not_project(self, tmp_path: Path) -> None:
        make_plain_dir(tmp_path)
        assert is_project(tmp_path) is False

    def test_git_dir_is_project(self, tmp_path: Path) -> None:
        make_project(tmp_path, ".git")
        assert is_project(tmp_path) is True

    def test_git_file_counts_too(self, tmp_path: Path) -> None:
        """Worktrees and submodules use a .git *file*."""
        (tmp_path / ".git").write_text("gitdir: ../.git/worktrees/x\n")
        assert is_project(tmp_path) is True

    @pytest.mark.parametrize("marker", ["package.json", "Cargo.toml", "pyproject.toml", "go.mod"])
    def test_manifest_markers(self, tmp_path: Path, marker: str) -> None:
        make_project(tmp_path, marker)
        assert is_project(tmp_path) is True

    @pytest.mark.parametrize("folder", [".vscode", ".idea"])
    def test_ide_folders_are_not_markers(self, tmp_path: Path, folder: str) -> None:
        (tmp_path / folder).mkdir()
        assert folder not in PROJECT_MARKERS
        assert is_project(tmp_path) is False

    def test_marker_in_grandchild_does_not_count(self, tmp_path: Path) -> None:
        make_project(tmp_path / "sub" / "deeper")
        assert is_project(tmp_path) is False

    def test_missing_directory_is_not_project(self, tmp_path: Path) -> None:
        assert is_project(tmp_path / "does-not-exist") is False

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_dangling_marker_symlink_counts(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").symlink_to(tmp_path / "gone.json")
        assert is_project(tmp_path) is True

    def test_custom_marker_set(self, tmp_path: Path) -> None:
        (tmp_path / "Makefile").write_text("all:\n")
        assert is_project(tmp_path) is False
        assert is_project(tmp_path, markers=("Makefile",)) is True


# ---------------------------------------------------------------------------
# is_excluded() / normalize_patterns()
# ---------------------------------------------------------------------------


class TestIsExcluded:
    """Case-insensitive substring exclusion."""

    def test_exact_name(self) -> None:
        assert is_excluded("node_modules", ["node_modules"]) is True

    def test_substring_matches_vendored_copies(self) -> None:
        assert is_excluded("old_node_modules_backup", ["node_modules"]) is True

    def test_case_insensitive(self) -> None:
        assert is_excluded("Node_Modules", ["NODE_MODULES"]) is True

    def test_pattern_is_trimmed(self) -> None:
        assert is_excluded("vendor", ["  vendor  "]) is True

    def test_no_match(self) -> None:
        assert is_excluded("src", ["node_modules", "vendor"]) is False

    def test_empty_pattern_never_matches(self) -> None:
        assert is_excluded("anything", ["", "   "]) is False

    def test_no_patterns(self) -> None:
        assert is_excluded("node_modules", []) is False


class TestNormalizePatterns:
    def test_comma_separated_string(self) -> None:
        assert normalize_patterns("node_modules, .git ,,vendor") == ("node_modules", ".git", "vendor")

    def test_list(self) -> None:
        assert normalize_patterns(["a", " b ", ""]) == ("a", "b")

    def test_none(self) -> None:
        assert normalize_patterns(None) == ()

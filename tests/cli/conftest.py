"""Shared fixtures for CLI tests.

Every command runs against an ``AppContext`` with in-memory storage, a
fake process runner and a fake ``which``, so no real editor or git is
ever started. The scanned workspace is the reference layout from
``tests.discovery.helpers``: ``w/a`` (.git) and ``w/b/c`` (package.json).
"""

from __future__ import annotations

import subprocess
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from projectpilot.cli.context import AppContext
from projectpilot.config import Settings
from projectpilot.storage.kv import MemoryStore

from tests.discovery.helpers import build_workspace


class FakeRunner:
    """``subprocess.run`` stand-in for git and the editor.

    ``git clone`` and ``git init`` create the ``.git`` directory they
    would have, so the rest of the command sees a real checkout.
    """

    def __init__(self) -> None:
        self.commands: list[list[str]] = []
        self.git_returncode = 0
        self.editor_returncode = 0
        self.stderr = ""

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.commands.append(list(cmd))
        if cmd[0] == "git":
            code = self.git_returncode
            if code == 0 and cmd[1] == "clone":
                (Path(kwargs["cwd"]) / cmd[-1] / ".git").mkdir(parents=True)
            elif code == 0 and cmd[1] == "init":
                (Path(kwargs["cwd"]) / ".git").mkdir()
        else:
            code = self.editor_returncode
        return subprocess.CompletedProcess(cmd, code, stdout="", stderr=self.stderr if code else "")

    @property
    def editor_calls(self) -> list[list[str]]:
        return [c for c in self.commands if c[0] != "git"]

    @property
    def git_calls(self) -> list[list[str]]:
        return [c for c in self.commands if c[0] == "git"]


class StepClock:
    """Deterministic access times, one minute apart."""

    def __init__(self) -> None:
        self.now = datetime(2026, 6, 1, 9, 0)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "w"
    root.mkdir()
    return build_workspace(root)


@pytest.fixture
def fake_run() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def settings(tmp_path: Path, workspace: Path) -> Settings:
    return Settings(
        scan_directories=(str(workspace),),
        scan_depth=2,
        excluded_folders=("node_modules",),
        clone_directory=str(tmp_path / "clones"),
        open_in_new_window=True,
        editor="cursor",
        state_file=tmp_path / "state.json",
    )


@pytest.fixture
def app(settings: Settings, fake_run: FakeRunner) -> AppContext:
    return AppContext(
        settings=settings,
        store=MemoryStore(),
        runner=fake_run,
        which=lambda name: f"/usr/bin/{name}",
        clock=StepClock(),
    )


@pytest.fixture
def app_without_editor(settings: Settings, fake_run: FakeRunner) -> AppContext:
    return AppContext(
        settings=settings,
        store=MemoryStore(),
        runner=fake_run,
        which=lambda name: None,
        clock=StepClock(),
    )

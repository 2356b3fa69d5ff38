"""Tests for ``projectpilot clone``."""

from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from projectpilot.cli.context import AppContext
from projectpilot.cli.main import cli

URL = "https://github.com/octo/widget"


def _history(runner: CliRunner, app: AppContext) -> list[dict]:
    result = runner.invoke(cli, ["list", "--section", "history", "--format", "json"], obj=app)
    return json.loads(result.output)


class TestClone:

    def test_clone_and_open(self, runner: CliRunner, app: AppContext, fake_run, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["clone", URL], obj=app)
        assert result.exit_code == 0, result.output
        clones = tmp_path / "clones"
        assert fake_run.git_calls == [["git", "clone", URL, "widget"]]
        assert fake_run.editor_calls == [
            ["/usr/bin/cursor", str((clones / "widget").resolve()), "--new-window"],
        ]
        assert "Cloned to" in result.output

        history = _history(runner, app)
        assert history[0]["name"] == "widget"
        assert history[0]["type"] == "remote"
        assert history[0]["gitRemote"] == URL + ".git"
        assert history[0]["clonedAt"] is not None

    def test_branch_and_dest(self, runner: CliRunner, app: AppContext, fake_run, tmp_path: Path) -> None:
        dest = tmp_path / "elsewhere"
        result = runner.invoke(
            cli, ["clone", URL, "--branch", "dev", "--dest", str(dest), "--no-open"], obj=app,
        )
        assert result.exit_code == 0, result.output
        assert fake_run.git_calls == [["git", "clone", "--branch", "dev", URL, "widget"]]
        assert (dest / "widget" / ".git").is_dir()
        assert fake_run.editor_calls == []

    def test_token_is_used_for_matching_provider(self, runner: CliRunner, app: AppContext, fake_run) -> None:
        app._settings = dataclasses.replace(app.settings, github_token="ghp_secret")
        result = runner.invoke(cli, ["clone", URL, "--no-open"], obj=app)
        assert result.exit_code == 0, result.output
        assert fake_run.git_calls[0][2] == "https://ghp_secret@github.com/octo/widget"
        assert "ghp_secret" not in result.output

    def test_existing_checkout_is_opened_not_recloned(
        self, runner: CliRunner, app: AppContext, fake_run, tmp_path: Path,
    ) -> None:
        (tmp_path / "clones" / "widget" / ".git").mkdir(parents=True)
        result = runner.invoke(cli, ["clone", URL], obj=app)
        assert result.exit_code == 0, result.output
        assert "Already cloned at" in result.output
        assert fake_run.git_calls == []
        assert len(fake_run.editor_calls) == 1

    def test_invalid_url(self, runner: CliRunner, app: AppContext, fake_run) -> None:
        result = runner.invoke(cli, ["clone", "not a repository"], obj=app)
        assert result.exit_code == 1
        assert "Invalid Git URL" in result.output
        assert fake_run.commands == []

    def test_clone_failure(self, runner: CliRunner, app: AppContext, fake_run) -> None:
        fake_run.git_returncode = 128
        fake_run.stderr = "fatal: repository not found"
        result = runner.invoke(cli, ["clone", URL], obj=app)
        assert result.exit_code == 1
        assert "Error: fatal: repository not found" in result.output
        assert fake_run.editor_calls == []
        assert _history(runner, app) == []

    @pytest.mark.skipif(sys.platform == "darwin", reason="macOS falls back to the app bundle")
    def test_missing_editor_fails_before_cloning(
        self, runner: CliRunner, app_without_editor: AppContext, fake_run,
    ) -> None:
        result = runner.invoke(cli, ["clone", URL], obj=app_without_editor)
        assert result.exit_code == 1
        assert "not found" in result.output
        assert fake_run.commands == []

    def test_missing_editor_is_fine_with_no_open(
        self, runner: CliRunner, app_without_editor: AppContext, fake_run,
    ) -> None:
        result = runner.invoke(cli, ["clone", URL, "--no-open"], obj=app_without_editor)
        assert result.exit_code == 0, result.output
        assert len(fake_run.git_calls) == 1

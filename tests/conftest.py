"""Shared fixtures for projectpilot tests."""

import pathlib

import pytest


@pytest.fixture(autouse=True)
def isolated_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch,
) -> pathlib.Path:
    """Point HOME and the XDG directories at a throwaway tree.

    Keeps tests away from the real config file, state file and tokens.
    The tree lives outside ``tmp_path`` so scans of ``tmp_path`` do not
    see it.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    for var in ("PROJECTPILOT_CONFIG", "GITHUB_TOKEN", "GITLAB_TOKEN", "BITBUCKET_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    return home

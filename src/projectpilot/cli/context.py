"""Per-invocation state shared by CLI commands.

Settings, storage and the launcher are built lazily so that commands
which do not need them (``--help``, ``--version``) never touch the
config file or state file. Tests pass a pre-built ``AppContext`` as the
Click ``obj`` to swap in memory storage and fake process runners.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from projectpilot.catalog import ProjectCatalog
from projectpilot.config import Settings, load_settings
from projectpilot.launcher import EditorLauncher, Runner
from projectpilot.remote.ssh import SSHHost
from projectpilot.storage.history import FavoritesStore, HistoryStore
from projectpilot.storage.kv import (
    SSH_FAVORITES_KEY,
    SSH_HISTORY_KEY,
    JsonFileStore,
    KeyValueStore,
)


class AppContext:
    """Lazily-built collaborators for one CLI invocation."""

    def __init__(
        self,
        config_path: str | Path | None = None,
        settings: Settings | None = None,
        store: KeyValueStore | None = None,
        runner: Runner = subprocess.run,
        which: Callable[[str], str | None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config_path = config_path
        self.runner = runner
        self.which = which
        self.clock = clock
        self._settings = settings
        self._store = store
        self._catalog: ProjectCatalog | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    @property
    def store(self) -> KeyValueStore:
        if self._store is None:
            self._store = JsonFileStore(self.settings.state_file)
        return self._store

    @property
    def catalog(self) -> ProjectCatalog:
        if self._catalog is None:
            self._catalog = ProjectCatalog(self.settings, self.store, clock=self.clock)
        return self._catalog

    @property
    def launcher(self) -> EditorLauncher:
        if self.which is None:
            return EditorLauncher(self.settings.editor, runner=self.runner)
        return EditorLauncher(self.settings.editor, runner=self.runner, which=self.which)

    @property
    def ssh_history(self) -> HistoryStore[SSHHost]:
        return HistoryStore(self.store, SSH_HISTORY_KEY, SSHHost, clock=self.clock)

    @property
    def ssh_favorites(self) -> FavoritesStore[SSHHost]:
        return FavoritesStore(self.store, SSH_FAVORITES_KEY, SSHHost)

"""Launching the external editor.

The editor is any executable that accepts a directory argument, an
optional ``--new-window`` flag and ``--remote ssh-remote+<authority>``
for remote sessions. Cursor is the default; VS Code's ``code`` accepts
the same arguments.

On macOS, when the command-line shim is missing from PATH, the launch
falls back to ``open -a <App>`` with the same arguments.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from projectpilot.exceptions import LaunchError
from projectpilot.remote.ssh import SSHHost, remote_uri

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

DEFAULT_EDITOR = "cursor"

# macOS application bundle names for known editor commands.
_MAC_APP_NAMES: dict[str, str] = {
    "cursor": "Cursor",
    "code": "Visual Studio Code",
}


class EditorLauncher:
    """Opens directories and SSH hosts in an external editor.

    Usage::

        launcher = EditorLauncher("cursor")
        if launcher.is_installed():
            launcher.open_path("~/src/api", new_window=True)
    """

    def __init__(
        self,
        command: str = DEFAULT_EDITOR,
        runner: Runner = subprocess.run,
        which: Callable[[str], str | None] = shutil.which,
        system: str | None = None,
    ) -> None:
        self.command = command
        self.runner = runner
        self.which = which
        self.system = (system or platform.system()).lower()

    def executable(self) -> str | None:
        """Return the resolved editor executable, or None if not on PATH."""
        return self.which(self.command)

    def is_installed(self) -> bool:
        return self.executable() is not None

    def can_launch(self) -> bool:
        """True if either the command or the macOS app fallback is usable."""
        return self.is_installed() or self._mac_app() is not None

    def _mac_app(self) -> str | None:
        if self.system != "darwin":
            return None
        return _MAC_APP_NAMES.get(Path(self.command).name.lower())

    def open_path(self, path: str | Path, new_window: bool = True) -> Path:
        """Open ``path`` in the editor and return the absolute path opened.

        Raises:
            LaunchError: If the editor cannot be started or exits non-zero.
        """
        target = Path(path).expanduser().resolve()
        args = [str(target)]
        if new_window:
            args.append("--new-window")
        self._launch(args)
        logger.info("Opened %s in %s", target, self.command)
        return target

    def open_remote(self, host: SSHHost) -> str:
        """Start a remote-SSH session on ``host``; returns the remote URI."""
        uri = remote_uri(host)
        self._launch(["--remote", uri])
        logger.info("Connecting %s to %s", self.command, host.connection_string)
        return uri

    def _launch(self, args: Sequence[str]) -> None:
        exe = self.executable()
        if exe is not None:
            self._run([exe, *args])
            return

        app = self._mac_app()
        if app is not None:
            logger.debug("%s not on PATH; falling back to open -a %s", self.command, app)
            self._run(["open", "-a", app, "--args", *args])
            return

        raise LaunchError(
            f"Editor command {self.command!r} not found. "
            "Install it or add it to your PATH."
        )

    def _run(self, cmd: list[str]) -> None:
        logger.debug("Running %s", cmd)
        try:
            proc = self.runner(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise LaunchError(f"Failed to start {cmd[0]}: {exc}") from exc
        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise LaunchError(detail or f"{cmd[0]} exited with status {proc.returncode}")

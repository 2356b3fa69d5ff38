"""ProjectPilot exception hierarchy.

All public exceptions inherit from ProjectPilotError, giving callers a single
base class to catch when they want to handle any ProjectPilot-specific failure
without swallowing unrelated errors.

Filesystem errors raised while scanning never surface as exceptions; the
scanner recovers from them locally. Everything below is meant to reach the
user as a message.
"""


class ProjectPilotError(Exception):
    """Base exception for all ProjectPilot errors."""


class ConfigError(ProjectPilotError):
    """Raised when the configuration file cannot be read or parsed."""


class ValidationError(ProjectPilotError):
    """Raised when user input is rejected before any I/O is attempted.

    Covers empty project names, unparsable SSH host strings, and
    unrecognised repository URLs.
    """


class ProjectExistsError(ValidationError):
    """Raised when a new project would overwrite an existing directory."""


class LaunchError(ProjectPilotError):
    """Raised when the external editor cannot be started.

    Covers a missing executable and a non-zero exit status from the
    launch command.
    """


class CloneError(ProjectPilotError):
    """Raised when ``git clone`` fails or git is not installed."""


class StorageError(ProjectPilotError):
    """Raised when persisted state cannot be written back to disk."""

"""Scaffolding for brand-new projects.

A new project is an empty directory with ``git init`` run in it, a
README skeleton and a general-purpose ``.gitignore``. When git is not
installed the directory is still created, just without a repository.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from projectpilot.exceptions import ProjectExistsError, ValidationError

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

README_TEMPLATE = """\
# {name}

## Description

## Getting Started

## Installation

## Usage
"""

GITIGNORE_TEMPLATE = """\
# Dependencies
node_modules/
vendor/
venv/
env/
.venv/

# Build outputs
build/
dist/
*.egg-info/
*.pyc
__pycache__/
.next/
out/
.cache/

# Environment variables
.env
.env.local
.env.*.local

# IDE
.vscode/
.idea/
*.swp
*.swo
*~

# OS
.DS_Store
Thumbs.db

# Logs
logs/
*.log
npm-debug.log*
yarn-debug.log*
yarn-error.log*

# Temporary files
tmp/
temp/
*.tmp
"""


def validate_project_name(name: str) -> str:
    """Return the trimmed project name, or raise ``ValidationError``."""
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError("Project name must not be empty")
    if trimmed in {".", ".."} or "/" in trimmed or "\\" in trimmed:
        raise ValidationError(f"Invalid project name: {trimmed!r}")
    return trimmed


def create_project(
    name: str,
    destination: str | Path,
    runner: Runner = subprocess.run,
) -> Path:
    """Create ``destination/name`` with a README, .gitignore and git repo.

    Args:
        name: Directory name for the project.
        destination: Parent directory; created if missing.
        runner: ``subprocess.run`` compatible callable for ``git init``.

    Returns:
        The new project directory.

    Raises:
        ValidationError: If ``name`` is empty or contains a separator.
        ProjectExistsError: If the target directory already exists.
    """
    project_name = validate_project_name(name)
    project_path = Path(destination).expanduser() / project_name
    if project_path.exists():
        raise ProjectExistsError(f"Directory already exists: {project_path}")

    project_path.mkdir(parents=True)

    try:
        proc = runner(
            ["git", "init"], cwd=str(project_path),
            capture_output=True, text=True, check=False,
        )
        if proc.returncode != 0:
            logger.warning("git init failed in %s: %s", project_path, (proc.stderr or "").strip())
    except OSError:
        logger.warning("git not available; %s created without a repository", project_path)

    (project_path / "README.md").write_text(
        README_TEMPLATE.format(name=project_name), encoding="utf-8",
    )
    (project_path / ".gitignore").write_text(GITIGNORE_TEMPLATE, encoding="utf-8")
    logger.info("Created project %s", project_path)
    return project_path

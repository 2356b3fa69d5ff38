"""ProjectPilot: find local development projects and open them in an editor."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

"""Command-line interface for ProjectPilot."""

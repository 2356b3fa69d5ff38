"""Allow ``python -m projectpilot``."""

from projectpilot.cli.main import cli

if __name__ == "__main__":
    cli()

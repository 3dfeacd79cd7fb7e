"""Allow running as ``python -m bibsync``."""

from bibsync.cli.main import cli

if __name__ == "__main__":
    cli()

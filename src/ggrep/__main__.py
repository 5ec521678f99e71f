"""Allow ``python -m ggrep``."""

from ggrep import cli

if __name__ == "__main__":
    cli.app()

"""Allow ``python -m pixelboard``."""

from pixelboard.cli.main import cli

if __name__ == "__main__":
    cli()

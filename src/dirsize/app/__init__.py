"""Command-line front end."""

from dirsize.app.cli import cli

__all__ = ["cli"]

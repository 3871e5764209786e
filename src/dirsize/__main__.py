"""Application entry point for dirsize."""

from __future__ import annotations

from dirsize.app.cli import PROG_NAME, cli

__all__ = ["main"]


def main() -> None:
    """Run the dirsize command-line interface."""
    cli(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()

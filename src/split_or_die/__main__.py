"""Entry point for ``python -m split_or_die``."""

from __future__ import annotations

from split_or_die.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Run the command-line interface."""
    cli(prog_name="split-or-die")


if __name__ == "__main__":
    main()

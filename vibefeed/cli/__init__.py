"""Command line interface."""

from vibefeed.cli.main import cli, main


__all__ = ["cli", "main"]

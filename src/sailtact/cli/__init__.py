"""Command line utilities for SailTact."""

from sailtact.cli.app import main, run_cli

__all__ = ["main", "run_cli"]

"""CLI commands for fragstats.

This package provides the command-line interface for logging games,
browsing history and viewing ratings.
"""

from fragstats.cli.main import cli, main

__all__ = ["cli", "main"]

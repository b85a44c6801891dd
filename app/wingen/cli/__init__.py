"""CLI package for wingen.

This package contains the Typer application and all subcommands.
"""

from wingen.cli.main import app

__all__ = ["app"]

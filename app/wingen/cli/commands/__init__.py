"""CLI commands for wingen.

This package contains all subcommand implementations.
"""

from wingen.cli.commands import catalog, config, generate, plan, share

__all__ = ["catalog", "config", "generate", "plan", "share"]

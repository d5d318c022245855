"""CLI commands for aq.

This package contains all subcommand implementations.
"""

from antiquarantine.cli.commands import config, scan, single

__all__ = ["config", "scan", "single"]

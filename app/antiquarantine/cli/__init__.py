"""CLI package for aq.

This package contains the Typer application and all subcommands.
"""

from antiquarantine.cli.main import app

__all__ = ["app"]

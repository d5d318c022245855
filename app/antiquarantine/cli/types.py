"""Shared types and helpers for CLI commands.

This module provides the exit code convention, the resolved run
settings, and the probe lookup used across command modules.
"""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

import typer
from rich.markup import escape

from antiquarantine.attributes.errors import ProbeUnavailableError
from antiquarantine.attributes.probe import AttributeProbe, get_default_probe
from antiquarantine.core.config import AqConfig, ConfigError, load_config_or_default
from antiquarantine.utils.formatting import print_error


class ExitCode(IntEnum):
    """Process exit codes.

    Attributes:
        OK: Clean success (including "nothing found").
        FAILURE: Something failed, or aq could not run at all.
        NOT_FOUND: The path given on the command line does not exist.
    """

    OK = 0
    FAILURE = 1
    NOT_FOUND = 2


@dataclass(frozen=True, slots=True)
class Settings:
    """Effective settings for one invocation.

    Command-line options override the configuration file, which
    overrides the built-in defaults.

    Attributes:
        attribute: Attribute name to detect or remove.
        config: The loaded configuration.
        verbose: Verbose output requested.
        quiet: Non-essential output suppressed.
    """

    attribute: str
    config: AqConfig
    verbose: bool = False
    quiet: bool = False


def get_settings(ctx: typer.Context) -> Settings:
    """Resolve settings from the global options stored on the context.

    Args:
        ctx: Typer context populated by the main callback.

    Returns:
        Effective Settings.

    Raises:
        typer.Exit: If the configuration file is invalid.
    """
    obj = ctx.find_root().obj or {}
    config_path: Path | None = obj.get("config_path")

    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=ExitCode.FAILURE) from e

    return Settings(
        attribute=obj.get("attribute") or config.attribute,
        config=config,
        verbose=bool(obj.get("verbose", False)),
        quiet=bool(obj.get("quiet", False)),
    )


def get_probe() -> AttributeProbe:
    """Return the host attribute probe.

    Raises:
        typer.Exit: If the host has no way to access extended attributes.
    """
    try:
        return get_default_probe()
    except ProbeUnavailableError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=ExitCode.FAILURE) from e

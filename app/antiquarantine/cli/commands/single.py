"""Single-path check and remove commands.

``aq check PATH`` reports whether one path carries the attribute;
``aq remove PATH`` removes it. Errors end the run immediately.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from antiquarantine.attributes.errors import AttributeProbeError, PathNotFoundError
from antiquarantine.attributes.models import AttributeState, RemovalOutcome
from antiquarantine.attributes.single import check_path, ensure_exists, remove_from_path
from antiquarantine.cli.types import ExitCode, get_probe, get_settings
from antiquarantine.utils.formatting import print_error, print_info, print_path, styled


def check(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="File or directory to check.", show_default=False),
    ],
) -> None:
    """Print whether a file has the attribute."""
    settings = get_settings(ctx)
    target = str(path)
    _require_existing(target)
    probe = get_probe()

    try:
        state = check_path(target, settings.attribute, probe)
    except PathNotFoundError as e:
        print_error(f"File not found: {escape(target)}")
        raise typer.Exit(code=ExitCode.NOT_FOUND) from e
    except AttributeProbeError as e:
        print_error(f"Error checking attribute: {escape(str(e))}")
        raise typer.Exit(code=ExitCode.FAILURE) from e

    if state is AttributeState.PRESENT:
        print_path(f"{target} || {styled('HAS', 'present')} {settings.attribute}")
    else:
        print_path(f"{target} || {styled('does NOT have', 'absent')} {settings.attribute}")


def remove(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="File or directory to remove the attribute from.", show_default=False),
    ],
) -> None:
    """Remove the attribute from a file (no-op if it is not there)."""
    settings = get_settings(ctx)
    target = str(path)
    _require_existing(target)
    probe = get_probe()

    try:
        outcome = remove_from_path(target, settings.attribute, probe)
    except PathNotFoundError as e:
        print_error(f"File not found: {escape(target)}")
        raise typer.Exit(code=ExitCode.NOT_FOUND) from e
    except AttributeProbeError as e:
        print_error(f"Failed to remove {escape(settings.attribute)}: {escape(str(e))}")
        raise typer.Exit(code=ExitCode.FAILURE) from e

    if outcome is RemovalOutcome.REMOVED:
        print_path(f"{styled('Removed', 'removed')} {settings.attribute} from: {target}")
    elif not settings.quiet:
        print_info(
            f"Nothing to remove: {escape(target)} does NOT have {escape(settings.attribute)}"
        )


def _require_existing(target: str) -> None:
    """Exit with NOT_FOUND before anything else runs if target is missing."""
    try:
        ensure_exists(target)
    except PathNotFoundError as e:
        print_error(f"File not found: {escape(target)}")
        raise typer.Exit(code=ExitCode.NOT_FOUND) from e

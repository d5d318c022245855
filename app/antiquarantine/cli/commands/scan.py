"""Folder scan command.

Lists (or, with --remove, clears) the attribute on every path under a
directory, using the concurrent sweep. Subtrees on other filesystems
are never entered.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from antiquarantine.attributes.errors import PathNotFoundError
from antiquarantine.attributes.single import ensure_exists
from antiquarantine.cli.types import ExitCode, Settings, get_probe, get_settings
from antiquarantine.sweep.errors import TraversalError
from antiquarantine.sweep.models import EventKind, RunResult, SweepEvent
from antiquarantine.sweep.runner import run_sweep
from antiquarantine.utils.formatting import (
    console,
    err_console,
    print_error,
    print_path,
    print_success,
    print_warning,
    styled,
)


class OutputFormat(str, Enum):
    """Output format options for folder scans."""

    TEXT = "text"
    JSON = "json"


def scan(
    ctx: typer.Context,
    directory: Annotated[
        Path,
        typer.Argument(help="Directory to scan recursively.", show_default=False),
    ],
    remove: Annotated[
        bool,
        typer.Option(
            "--remove",
            "-r",
            help="Remove the attribute from every path that has it.",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=256,
            help="Number of worker threads (default: config, else CPU count).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
) -> None:
    """List paths under a directory that have the attribute, or remove it (-r)."""
    settings = get_settings(ctx)
    root = str(directory)

    try:
        ensure_exists(root)
    except PathNotFoundError as e:
        print_error(f"Directory not found: {escape(root)}")
        raise typer.Exit(code=ExitCode.NOT_FOUND) from e

    probe = get_probe()
    events: list[SweepEvent] = []

    def _emit(event: SweepEvent) -> None:
        if output_format == OutputFormat.JSON:
            events.append(event)
        else:
            _print_event(event, settings)

    try:
        result = run_sweep(
            root,
            settings.attribute,
            remove=remove,
            probe=probe,
            workers=workers or settings.config.workers,
            queue_capacity=settings.config.queue_capacity,
            emit=_emit,
        )
    except TraversalError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=ExitCode.FAILURE) from e

    if output_format == OutputFormat.JSON:
        _print_json(root, settings, remove, events, result)
    else:
        _print_summary(root, settings, remove, result)

    if not result.ok:
        raise typer.Exit(code=ExitCode.FAILURE)


# === Private helper functions ===


def _print_event(event: SweepEvent, settings: Settings) -> None:
    """Print one found or removed path."""
    if event.kind == EventKind.FOUND:
        print_path(event.path)
    else:
        print_path(f"{styled('Removed', 'removed')} {settings.attribute} from: {event.path}")


def _print_summary(root: str, settings: Settings, remove: bool, result: RunResult) -> None:
    """Report failures and totals on stderr, keeping stdout to one line per path."""
    if result.walk_error is not None:
        print_error(escape(str(result.walk_error)), soft_wrap=True)

    for record in result.errors:
        print_error(escape(str(record)), soft_wrap=True)

    if result.errors:
        print_warning(f"{len(result.errors)} path(s) failed; see errors above.")

    if settings.quiet:
        return

    stats = result.stats
    if remove and stats.removed:
        print_success(
            f"Removed {escape(settings.attribute)} from {stats.removed} path(s).",
            err=True,
        )
    elif not stats.present and result.ok:
        err_console.print(
            f"[dim]No paths with {escape(settings.attribute)} found under {escape(root)}.[/dim]",
            soft_wrap=True,
            emoji=False,
        )

    if settings.verbose:
        err_console.print(
            f"[dim]{stats.probed} checked, {stats.present} with attribute, "
            f"{stats.failed} failed, {result.skipped} skipped[/dim]"
        )


def _print_json(
    root: str,
    settings: Settings,
    remove: bool,
    events: list[SweepEvent],
    result: RunResult,
) -> None:
    """Print the whole scan as one JSON document."""
    data = {
        "root": root,
        "attribute": settings.attribute,
        "mode": "remove" if remove else "list",
        "paths": sorted(event.path for event in events),
        "errors": [{"path": r.path, "message": r.message} for r in result.errors],
        "walk_error": str(result.walk_error) if result.walk_error is not None else None,
        "stats": {
            "probed": result.stats.probed,
            "present": result.stats.present,
            "removed": result.stats.removed,
            "failed": result.stats.failed,
            "skipped": result.skipped,
        },
    }
    console.print_json(json.dumps(data))

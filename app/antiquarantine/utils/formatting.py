"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.

Lines that carry a filesystem path are written with ``typer.echo``
instead of the Rich consoles: Rich expands tabs and replaces ``:name:``
shortcodes, either of which would print a path that is not on disk.
"""

import sys

import typer
from rich.console import Console

from antiquarantine.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def styled(text: str, style: str) -> str:
    """Wrap text in the terminal codes of a theme style.

    The codes are stripped again by ``typer.echo`` when the output is
    not a terminal.
    """
    theme_style = get_theme().styles[style]
    triplet = theme_style.color.triplet if theme_style.color is not None else None
    return typer.style(
        text,
        fg=tuple(triplet) if triplet is not None else None,
        bold=theme_style.bold or None,
    )


def print_path(path: str) -> None:
    """Print a path, or a line built around paths, exactly as given."""
    typer.echo(path)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]", emoji=False)


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}", emoji=False)


def print_error(message: str, *, soft_wrap: bool = False) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}", soft_wrap=soft_wrap, emoji=False)


def print_success(message: str, *, err: bool = False) -> None:
    """Print a success message, on stderr when err is set."""
    target = err_console if err else console
    target.print(f"[success]{message}[/]", emoji=False)

"""Configuration commands.

Show the effective configuration, print where it lives, and write a
starter config file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from antiquarantine.cli.types import ExitCode, get_settings
from antiquarantine.core.config import AqConfig, ConfigError, config_to_dict, save_config
from antiquarantine.core.paths import get_config_path
from antiquarantine.sweep.pool import default_worker_count
from antiquarantine.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize the aq configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration as TOML."""
    settings = get_settings(ctx)
    data = config_to_dict(settings.config)
    data["attribute"] = settings.attribute

    console.print(
        tomli_w.dumps(data), markup=False, highlight=False, emoji=False, soft_wrap=True, end=""
    )
    if settings.config.workers is None and not settings.quiet:
        console.print(f"[dim]# workers: CPU count ({default_worker_count()})[/dim]")


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the configuration file path."""
    config_path = ctx.find_root().obj.get("config_path") or get_config_path()
    typer.echo(str(config_path))


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file with the default settings."""
    config_path = ctx.find_root().obj.get("config_path") or get_config_path()

    if config_path.exists() and not force:
        print_info(f"Config already exists: {escape(str(config_path))} (use --force to overwrite)")
        raise typer.Exit(code=ExitCode.OK)

    try:
        saved = save_config(AqConfig(), config_path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=ExitCode.FAILURE) from e

    print_success(f"Config written to {escape(str(saved))}")

"""Settings commands.

Shows the effective settings and writes a default settings file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from apfscopy.cli.types import get_settings
from apfscopy.core.paths import get_settings_path
from apfscopy.core.settings import Settings, SettingsError, save_settings
from apfscopy.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize settings.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings."""
    settings = get_settings(ctx)
    path = _settings_path(ctx)

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")

    for name, value in settings.model_dump().items():
        if isinstance(value, list):
            value = " ".join(value) or "-"
        table.add_row(name, str(value))

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not present, using defaults)"
    print_info(f"Settings file: {source}")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = _settings_path(ctx)

    if path.exists() and not force:
        print_error(f"Settings file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")


def _settings_path(ctx: typer.Context) -> Path:
    obj = ctx.obj or {}
    return obj.get("config_path") or get_settings_path()

"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from apfscopy import __version__
from apfscopy.cli.commands import config, copy, sanitize, volume
from apfscopy.core.paths import get_run_log_path
from apfscopy.core.settings import SettingsError, load_settings_or_default
from apfscopy.utils.formatting import print_error
from apfscopy.utils.log import setup_logging

# Create main Typer app
app = typer.Typer(
    name="apfscopy",
    help="Copy a directory tree off a flaky apfs-fuse mount.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"apfscopy version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (default: ~/.config/apfscopy/config.toml).",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Run log file (default: ~/.local/state/apfscopy/run.log).",
        ),
    ] = None,
    no_log_file: Annotated[
        bool,
        typer.Option(
            "--no-log-file",
            help="Do not write a run log file.",
        ),
    ] = False,
) -> None:
    """apfscopy - Fault-tolerant tree copy from APFS volumes.

    Mounts the source volume with apfs-fuse, copies the tree to a
    destination with exFAT-safe names, and remounts whenever the
    driver drops the connection.
    """
    setup_logging(
        verbose=verbose,
        quiet=quiet,
        log_file=None if no_log_file else (log_file or get_run_log_path()),
    )

    try:
        settings = load_settings_or_default(config_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path
    ctx.obj["settings"] = settings


# Register commands
app.command(name="copy")(copy.copy_tree)
app.command(name="sanitize")(sanitize.sanitize_names)
app.add_typer(volume.app, name="volume")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

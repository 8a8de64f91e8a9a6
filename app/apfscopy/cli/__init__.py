"""Command-line interface: the Typer app and its commands."""

from apfscopy.cli.main import app

__all__ = ["app"]

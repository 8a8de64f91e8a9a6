"""Shared helpers for CLI commands."""

import typer

from apfscopy.core.settings import Settings


def get_settings(ctx: typer.Context) -> Settings:
    """Get the settings loaded by the main callback.

    Falls back to defaults when a command runs without the callback
    (e.g. a command app invoked on its own in tests).
    """
    obj = ctx.obj or {}
    settings = obj.get("settings")
    if isinstance(settings, Settings):
        return settings
    return Settings()

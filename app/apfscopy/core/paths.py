"""Where apfscopy keeps its files.

Settings go under $XDG_CONFIG_HOME/apfscopy (~/.config/apfscopy) and the
run log under $XDG_STATE_HOME/apfscopy (~/.local/state/apfscopy). An empty
XDG variable is treated as unset.
"""

import os
from pathlib import Path

APP_NAME = "apfscopy"

SETTINGS_FILENAME = "config.toml"
RUN_LOG_FILENAME = "run.log"


def _xdg_base(env_var: str, fallback: str) -> Path:
    value = os.environ.get(env_var)
    return Path(value) if value else Path.home() / fallback


def get_config_dir() -> Path:
    """Return the directory holding the settings file."""
    return _xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_state_dir() -> Path:
    """Return the directory holding run logs of past copy sessions."""
    return _xdg_base("XDG_STATE_HOME", ".local/state") / APP_NAME


def get_settings_path() -> Path:
    """Return the default settings file path."""
    return get_config_dir() / SETTINGS_FILENAME


def get_run_log_path() -> Path:
    """Return the default run log path.

    The log is appended to, so consecutive runs against the same volume
    end up in one file.
    """
    return get_state_dir() / RUN_LOG_FILENAME

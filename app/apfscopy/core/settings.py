"""Tool settings and their TOML persistence.

Settings tune how the source volume is mounted: which user-space driver
runs, whether it runs under sudo, and how long to let the driver settle
after each mount or unmount call.

Settings are stored in ~/.config/apfscopy/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from apfscopy.core.paths import get_settings_path

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY_SECONDS = 10.0


class Settings(BaseModel):
    """Mount and recovery settings.

    Attributes:
        settle_delay_seconds: Wait after every mount/unmount call.
        mount_program: User-space driver used to mount the source volume.
        mount_options: Extra arguments placed before the device argument.
        unmount_program: Program used to unmount the mount point.
        use_sudo: Run mount and unmount through sudo.
        command_timeout_seconds: Upper bound for a single mount/unmount call.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    settle_delay_seconds: Annotated[
        float,
        Field(ge=0, description="Seconds to wait after mount and unmount"),
    ] = DEFAULT_SETTLE_DELAY_SECONDS
    mount_program: Annotated[
        str,
        Field(min_length=1, description="Mount driver executable"),
    ] = "apfs-fuse"
    mount_options: Annotated[
        list[str],
        Field(description="Extra mount driver arguments"),
    ] = []
    unmount_program: Annotated[
        str,
        Field(min_length=1, description="Unmount executable"),
    ] = "umount"
    use_sudo: Annotated[
        bool,
        Field(description="Escalate mount/unmount with sudo"),
    ] = True
    command_timeout_seconds: Annotated[
        float,
        Field(gt=0, description="Timeout for one mount/unmount call"),
    ] = 300.0


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no file exists.

    Parse and schema errors still propagate.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file at %s, using defaults", path or get_settings_path())
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path

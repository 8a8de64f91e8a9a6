"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from apfscopy.core.models import CopyConfig
from apfscopy.core.settings import Settings
from apfscopy.mount.base import MountController


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep settings and run logs out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))
    yield
    # Drop handlers installed by CLI invocations so log files get closed
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_apfscopy", False):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def fast_settings() -> Settings:
    """Settings without settle delay."""
    return Settings(settle_delay_seconds=0)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Source tree root/{A/x.txt, A/y.txt, B/z.txt}."""
    root = tmp_path / "root"
    (root / "A").mkdir(parents=True)
    (root / "B").mkdir()
    (root / "A" / "x.txt").write_bytes(b"x contents\n")
    (root / "A" / "y.txt").write_bytes(b"y contents\n" * 100)
    (root / "B" / "z.txt").write_bytes(b"\x00\x01\x02 binary z")
    return root


@pytest.fixture
def dest_root(tmp_path: Path) -> Path:
    """Empty destination directory (not created yet)."""
    return tmp_path / "dest"


@pytest.fixture
def copy_config(source_tree: Path, dest_root: Path) -> CopyConfig:
    """Copy configuration for the sample source tree."""
    return CopyConfig(
        device="/dev/sdz2",
        mount_point="/mnt/apfs",
        source_root=source_tree,
        dest_root=dest_root,
    )


@pytest.fixture
def mock_controller() -> MagicMock:
    """Mount controller double that records remounts."""
    controller = MagicMock(spec=MountController)
    controller.mount.return_value = 1
    controller.remount.return_value = 1
    return controller

"""Mount controllers for the source volume."""

from apfscopy.core.settings import Settings
from apfscopy.mount.apfs import ApfsFuseController
from apfscopy.mount.base import MountController


def get_controller(settings: Settings | None = None) -> MountController:
    """Get the mount controller for the configured driver."""
    return ApfsFuseController(settings)


__all__ = ["ApfsFuseController", "MountController", "get_controller"]

"""apfs-fuse mount controller implementation.

Mounts APFS volumes read-only through the apfs-fuse user-space driver.
"""

from apfscopy.mount.base import MountController
from apfscopy.utils.shell import command_exists


class ApfsFuseController(MountController):
    """Controller for APFS volumes mounted with apfs-fuse.

    The mount driver and unmount program are taken from the settings so
    that a compatible FUSE driver can be substituted.
    """

    def mount_command(self, device: str, mount_point: str) -> list[str]:
        """Build `[sudo] apfs-fuse [options] <device> <mount_point>`."""
        args = [
            self.settings.mount_program,
            *self.settings.mount_options,
            device,
            mount_point,
        ]
        return self._privileged(args)

    def unmount_command(self, mount_point: str) -> list[str]:
        """Build `[sudo] umount <mount_point>`."""
        return self._privileged([self.settings.unmount_program, mount_point])

    def is_available(self) -> bool:
        """Check if the configured mount driver is on PATH."""
        return command_exists(self.settings.mount_program)

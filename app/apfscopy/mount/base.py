"""Abstract base class for source volume mount controllers.

A mount controller knows how to mount and unmount the source volume with
one privileged user-space driver. The retry policy lives here and is the
same for every driver: a failed mount is followed by a best-effort unmount
and another attempt, forever, with a settle delay after every call.
"""

import logging
import subprocess
import time
from abc import ABC, abstractmethod

from apfscopy.core.errors import MountError
from apfscopy.core.models import CopyConfig
from apfscopy.core.settings import Settings
from apfscopy.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)


class MountController(ABC):
    """Mounts, unmounts and remounts the source volume.

    Attributes:
        settings: Driver, sudo and settle delay configuration.

    Example:
        >>> controller = ApfsFuseController()
        >>> controller.mount("/dev/sdb2", "/mnt/apfs")
        1
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the controller.

        Args:
            settings: Settings to use. Defaults to Settings().
        """
        self._settings = settings if settings is not None else Settings()

    @property
    def settings(self) -> Settings:
        """Return the controller settings."""
        return self._settings

    @abstractmethod
    def mount_command(self, device: str, mount_point: str) -> list[str]:
        """Build the argument vector that mounts device at mount_point."""

    @abstractmethod
    def unmount_command(self, mount_point: str) -> list[str]:
        """Build the argument vector that unmounts mount_point."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the mount driver is installed on this system."""

    def mount(self, device: str, mount_point: str) -> int:
        """Mount device at mount_point, retrying until it succeeds.

        There is no attempt limit and no backoff. Each failed attempt is
        followed by an unmount whose own failure is ignored.

        Args:
            device: Block device holding the source volume.
            mount_point: Directory to mount on.

        Returns:
            Number of attempts it took.

        Raises:
            MountError: If the mount or unmount program cannot be executed.
        """
        attempt = 0
        while True:
            attempt += 1
            logger.info("Mounting %s at %s (attempt %d)", device, mount_point, attempt)
            mounted = self._run("mount", self.mount_command(device, mount_point))
            self._settle()
            if mounted:
                logger.info("Mounted %s at %s", device, mount_point)
                return attempt
            self.unmount(mount_point)
            logger.warning("Failed to mount %s, retrying", device)

    def unmount(self, mount_point: str) -> bool:
        """Unmount mount_point once, best-effort.

        Args:
            mount_point: Directory to unmount.

        Returns:
            True if the unmount program reported success.

        Raises:
            MountError: If the unmount program cannot be executed.
        """
        logger.info("Unmounting %s", mount_point)
        unmounted = self._run("unmount", self.unmount_command(mount_point))
        if unmounted:
            logger.info("Unmounted %s", mount_point)
        else:
            logger.warning("Failed to unmount %s", mount_point)
        self._settle()
        return unmounted

    def remount(self, config: CopyConfig) -> int:
        """Unmount then mount the source volume of a copy run.

        Args:
            config: Copy configuration providing device and mount point.

        Returns:
            Number of mount attempts it took.
        """
        logger.info("Remounting %s at %s", config.device, config.mount_point)
        self.unmount(config.mount_point)
        return self.mount(config.device, config.mount_point)

    def _privileged(self, args: list[str]) -> list[str]:
        """Prefix a command with sudo when configured."""
        if self._settings.use_sudo:
            return ["sudo", *args]
        return args

    def _run(self, label: str, args: list[str]) -> bool:
        """Run one mount/unmount command and log its outcome.

        A command that times out counts as a failed attempt.
        """
        try:
            result = run_command(args, timeout=self._settings.command_timeout_seconds)
        except subprocess.TimeoutExpired:
            logger.warning(
                "%s timed out after %.0fs: %s",
                label,
                self._settings.command_timeout_seconds,
                " ".join(args),
            )
            return False
        except OSError as e:
            raise MountError(f"Failed to execute {label} ({args[0]}): {e}") from e

        self._log_result(label, result)
        return result.success

    @staticmethod
    def _log_result(label: str, result: CommandResult) -> None:
        logger.info(
            "%s status: %d after %.1fs: %s",
            label,
            result.returncode,
            result.elapsed,
            result.command_line,
        )
        if result.stdout.strip():
            logger.info("%s stdout: %s", label, result.stdout.strip())
        if result.stderr.strip():
            logger.info("%s stderr: %s", label, result.stderr.strip())

    def _settle(self) -> None:
        delay = self._settings.settle_delay_seconds
        if delay > 0:
            logger.debug("Waiting %.1fs for the driver to settle", delay)
        time.sleep(delay)

"""Copy run orchestration.

Probes the source root once, mounts the source volume when the FUSE
transport is not connected, then hands over to the tree copier.
"""

import logging
import os

from apfscopy.copier.tree import TreeCopier
from apfscopy.core.errors import ErrorClass, FatalCopyError, classify_os_error
from apfscopy.core.models import CopyConfig, CopyStats
from apfscopy.core.registry import FailureRegistry
from apfscopy.mount.base import MountController

logger = logging.getLogger(__name__)


def probe_source(config: CopyConfig, controller: MountController) -> bool:
    """Check that the source root can be listed, mounting it if needed.

    Args:
        config: Copy configuration.
        controller: Controller used for the initial mount.

    Returns:
        True if the source volume had to be mounted.

    Raises:
        FatalCopyError: If the source root fails for any other reason.
    """
    try:
        with os.scandir(config.source_root):
            pass
    except OSError as e:
        if classify_os_error(e) is not ErrorClass.TRANSPORT_NOT_CONNECTED:
            raise FatalCopyError(e, config.source_root, None) from e
        logger.warning("Transport endpoint is not connected, mounting at start")
        controller.mount(config.device, config.mount_point)
        return True

    logger.info("Source %s is reachable", config.source_root)
    return False


def run_copy(
    config: CopyConfig,
    controller: MountController,
    registry: FailureRegistry | None = None,
) -> CopyStats:
    """Run one complete copy of config.source_root to config.dest_root.

    Args:
        config: Copy configuration.
        controller: Mount controller for the initial mount and recovery.
        registry: Optional failure registry; a fresh one is used if omitted.

    Returns:
        Counters of the run.

    Raises:
        FatalCopyError: On any unrecoverable error.
        MountError: If the mount programs cannot be executed.
    """
    probe_source(config, controller)
    logger.info("Passed initial mount check")
    copier = TreeCopier(config, controller, registry)
    return copier.copy_tree()

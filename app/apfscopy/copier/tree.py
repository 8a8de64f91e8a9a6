"""Tree copier: traversal and remount recovery.

Walks the source tree with an explicit last-in-first-out frontier and
copies every file to its sanitized destination path. Connection aborts
raised by the FUSE driver are recovered from by remembering the failing
path and remounting the source volume; the traversal then carries on with
whatever is still on the frontier.

Sibling order is reversed relative to the directory listing and sibling
subtrees may interleave. The only ordering guarantee is that a directory
exists at the destination before any of its children are visited.
"""

import logging
import os
import shutil
from collections.abc import Iterator
from pathlib import Path

from apfscopy.core.errors import ErrorClass, FatalCopyError, classify_os_error
from apfscopy.core.models import CopyConfig, CopyStats
from apfscopy.core.registry import FailureRegistry
from apfscopy.core.sanitize import map_destination, repair_final_component
from apfscopy.mount.base import MountController

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class TreeCopier:
    """Copies one source tree to a destination tree.

    Args:
        config: Resolved copy configuration.
        controller: Mount controller used for remount recovery.
        registry: Failure registry for this run. A fresh one is created
            when omitted.
    """

    def __init__(
        self,
        config: CopyConfig,
        controller: MountController,
        registry: FailureRegistry | None = None,
    ) -> None:
        self._config = config
        self._controller = controller
        self._registry = registry if registry is not None else FailureRegistry()
        self._stats = CopyStats()

    @property
    def registry(self) -> FailureRegistry:
        """Return the failure registry of this run."""
        return self._registry

    @property
    def stats(self) -> CopyStats:
        """Return the counters collected so far."""
        return self._stats

    def destination_for(self, path: Path) -> Path:
        """Map a source path to its destination path."""
        return map_destination(path, self._config.source_root, self._config.dest_root)

    def copy_tree(self) -> CopyStats:
        """Copy the whole source tree.

        Returns:
            Counters of the run, including the paths abandoned after
            connection aborts.

        Raises:
            FatalCopyError: On any error that is not recoverable.
        """
        frontier: list[Path] = [self._config.source_root]

        while frontier:
            path = frontier.pop()
            if self._registry.is_known_failed(path):
                logger.debug("Skipping known failed path %s", path)
                continue

            destination = self.destination_for(path)

            if os.path.isdir(path):
                self._create_directory(path, destination)
                if self._enumerate(path, destination, frontier):
                    # Listing is not resumed; unread children are lost for this run
                    self._recover(path)
            else:
                self.copy_file(path, destination)

        self._stats.failed_paths = self._registry.paths()
        logger.info(
            "Tree copy finished: %d file(s) copied, %d already present, %d remount(s)",
            self._stats.files_copied,
            self._stats.files_present,
            self._stats.remounts,
        )
        return self._stats

    def copy_file(self, source: Path, destination: Path, *, repaired: bool = False) -> None:
        """Copy one file unless its destination already exists.

        Args:
            source: Source file path.
            destination: Destination file path.
            repaired: True when this is the retry after an invalid-argument
                rejection; a second rejection is fatal.

        Raises:
            FatalCopyError: On any error that is not recoverable.
        """
        if os.path.exists(destination):
            logger.debug("Already copied: %s", destination)
            self._stats.files_present += 1
            return

        try:
            size = self._copy_bytes(source, destination)
        except OSError as e:
            error_class = classify_os_error(e)
            if error_class is ErrorClass.IO_ERROR:
                logger.warning("Input/output error reading %s, skipping", source)
                self._stats.files_unreadable += 1
                return
            if error_class is ErrorClass.CONNECTION_ABORTED:
                self._recover(source)
                return
            if error_class is ErrorClass.INVALID_ARGUMENT and not repaired:
                repaired_destination = repair_final_component(destination)
                logger.warning(
                    "Destination rejected %s, retrying as %s", destination, repaired_destination
                )
                self._stats.repairs += 1
                self.copy_file(source, repaired_destination, repaired=True)
                return
            raise FatalCopyError(e, source, destination) from e

        logger.debug("Copied %s -> %s (%d bytes)", source, destination, size)
        self._stats.files_copied += 1
        self._stats.bytes_copied += size

    def _create_directory(self, source: Path, destination: Path) -> None:
        """Create a destination directory and its missing ancestors."""
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            if classify_os_error(e) is not ErrorClass.INVALID_ARGUMENT:
                raise FatalCopyError(e, source, destination) from e

            repaired = repair_final_component(destination)
            logger.warning("Destination rejected %s, retrying as %s", destination, repaired)
            self._stats.repairs += 1
            try:
                repaired.mkdir(parents=True, exist_ok=True)
            except OSError as retry_error:
                raise FatalCopyError(retry_error, source, repaired) from retry_error

        self._stats.directories_created += 1

    def _enumerate(self, path: Path, destination: Path, frontier: list[Path]) -> bool:
        """Push the children of a directory onto the frontier.

        Returns:
            True if the listing was cut short by a connection abort.

        Raises:
            FatalCopyError: If the listing fails for any other reason.
        """
        try:
            for child in self._iter_children(path):
                frontier.append(child)
        except OSError as e:
            if classify_os_error(e) is ErrorClass.CONNECTION_ABORTED:
                logger.warning("Connection aborted while listing %s", path)
                return True
            raise FatalCopyError(e, path, destination) from e
        return False

    def _iter_children(self, path: Path) -> Iterator[Path]:
        """Yield the immediate children of a directory in listing order."""
        # The handle must be closed before a remount or umount reports busy
        with os.scandir(path) as entries:
            for entry in entries:
                yield Path(entry.path)

    def _copy_bytes(self, source: Path, destination: Path) -> int:
        """Copy file contents through a temporary file in the destination directory.

        The destination name only appears once all bytes are written.

        Returns:
            Number of bytes copied.
        """
        partial = destination.parent / f".apfscopy-{os.getpid()}.part"
        try:
            with open(source, "rb") as src, open(partial, "wb") as dst:
                shutil.copyfileobj(src, dst, _CHUNK_SIZE)
                size = dst.tell()
            os.replace(partial, destination)
        except OSError:
            self._discard_partial(partial)
            raise
        return size

    @staticmethod
    def _discard_partial(partial: Path) -> None:
        try:
            partial.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial file %s: %s", partial, e)

    def _recover(self, path: Path) -> None:
        """Remember a path that caused a connection abort and remount."""
        logger.warning("Software caused connection abort, remounting and continuing: %s", path)
        self._registry.remember(path)
        self._controller.remount(self._config)
        self._stats.remounts += 1
        logger.info("Remounted, continuing")

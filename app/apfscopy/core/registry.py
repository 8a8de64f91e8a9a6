"""Failure registry for paths abandoned after a connection abort."""

import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


class FailureRegistry:
    """Set of source paths known to be unreachable for the current run.

    Membership is permanent: paths are never evicted, not even after a
    successful remount. Access is serialized by a lock because the set is
    written from the recovery path and read on every traversal step.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._paths: set[str] = set()

    def remember(self, path: Path | str) -> None:
        """Record a path as permanently failed for this run."""
        key = str(path)
        with self._lock:
            self._paths.add(key)
        logger.debug("Remembered failed path %s", key)

    def is_known_failed(self, path: Path | str) -> bool:
        """Check whether a path was recorded as failed."""
        with self._lock:
            return str(path) in self._paths

    def paths(self) -> list[str]:
        """Return all failed paths, sorted."""
        with self._lock:
            return sorted(self._paths)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

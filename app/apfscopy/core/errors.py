"""OS error classification and the engine's exception types.

The engine never looks at error messages. Every OSError is reduced to one
of a few classes by its errno, and this module is the only place that
knows which errno values mean what.
"""

import errno
from enum import Enum
from pathlib import Path


class ErrorClass(Enum):
    """Class of a filesystem error as seen by the copy engine.

    Attributes:
        TRANSPORT_NOT_CONNECTED: The FUSE mount is gone (ENOTCONN).
        CONNECTION_ABORTED: The driver dropped the transport mid-operation (ECONNABORTED).
        IO_ERROR: Data could not be read from the source (EIO).
        INVALID_ARGUMENT: The destination rejected a name (EINVAL).
        OTHER: Anything else; always fatal.
    """

    TRANSPORT_NOT_CONNECTED = "transport_not_connected"
    CONNECTION_ABORTED = "connection_aborted"
    IO_ERROR = "io_error"
    INVALID_ARGUMENT = "invalid_argument"
    OTHER = "other"


_ERRNO_CLASSES: dict[int, ErrorClass] = {
    errno.ENOTCONN: ErrorClass.TRANSPORT_NOT_CONNECTED,
    errno.ECONNABORTED: ErrorClass.CONNECTION_ABORTED,
    errno.EIO: ErrorClass.IO_ERROR,
    errno.EINVAL: ErrorClass.INVALID_ARGUMENT,
}


def classify_os_error(error: OSError) -> ErrorClass:
    """Map an OSError to its ErrorClass.

    Args:
        error: The error raised by a filesystem call.

    Returns:
        The matching ErrorClass, OTHER when errno is unset or unknown.
    """
    if error.errno is None:
        return ErrorClass.OTHER
    return _ERRNO_CLASSES.get(error.errno, ErrorClass.OTHER)


class CopyError(Exception):
    """Base exception for copy engine errors."""


class FatalCopyError(CopyError):
    """Raised when an unrecoverable error aborts the run.

    Attributes:
        source: Source path being processed.
        destination: Destination path being written.
        cause: The underlying OSError.
    """

    def __init__(self, cause: OSError, source: Path, destination: Path | None) -> None:
        self.cause = cause
        self.source = source
        self.destination = destination
        super().__init__(f"{cause} (from: '{source}' to: '{destination}')")


class MountError(Exception):
    """Raised when a mount or unmount program cannot be executed at all."""

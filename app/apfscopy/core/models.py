"""Data structures shared by the copy engine and the CLI."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CopyConfig:
    """Resolved invocation of one copy run.

    Attributes:
        device: Block device holding the source volume (e.g. /dev/sdb2).
        mount_point: Directory the source volume is mounted on.
        source_root: Directory tree to copy, normally below mount_point.
        dest_root: Destination directory on the target filesystem.
    """

    device: str
    mount_point: str
    source_root: Path
    dest_root: Path

    def __post_init__(self) -> None:
        """Validate configuration data after initialization."""
        if not self.device:
            msg = "Device cannot be empty"
            raise ValueError(msg)
        if not self.mount_point:
            msg = "Mount point cannot be empty"
            raise ValueError(msg)


@dataclass(slots=True)
class CopyStats:
    """Counters collected while a tree is copied.

    Attributes:
        directories_created: Destination directories created (or already present).
        files_copied: Files whose bytes were copied in this run.
        bytes_copied: Total bytes written by copied files.
        files_present: Files skipped because the destination already existed.
        files_unreadable: Files skipped after an input/output error on the source.
        repairs: Creations retried after an invalid-argument rejection.
        remounts: Remount cycles triggered by connection aborts.
        failed_paths: Source paths abandoned after a connection abort.
    """

    directories_created: int = 0
    files_copied: int = 0
    bytes_copied: int = 0
    files_present: int = 0
    files_unreadable: int = 0
    repairs: int = 0
    remounts: int = 0
    failed_paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Convert the stats to a JSON-serializable dictionary."""
        return {
            "directories_created": self.directories_created,
            "files_copied": self.files_copied,
            "bytes_copied": self.bytes_copied,
            "files_present": self.files_present,
            "files_unreadable": self.files_unreadable,
            "repairs": self.repairs,
            "remounts": self.remounts,
            "failed_paths": list(self.failed_paths),
        }

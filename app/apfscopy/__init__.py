"""apfscopy - Fault-tolerant tree copy from flaky APFS (apfs-fuse) mounts."""

__version__ = "0.1.0"

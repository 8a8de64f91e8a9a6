"""Subprocess helpers for the mount and unmount programs.

The FUSE driver is chatty and occasionally hangs, so every call captures
both output streams, decodes them leniently and runs under a timeout.
"""

import shlex
import shutil
import subprocess
import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one finished external command.

    Attributes:
        returncode: Exit status of the command.
        stdout: Captured standard output.
        stderr: Captured standard error.
        args: Argument vector that was executed.
        elapsed: Wall-clock seconds the command took.
    """

    returncode: int
    stdout: str = ""
    stderr: str = ""
    args: tuple[str, ...] = ()
    elapsed: float = 0.0

    @property
    def success(self) -> bool:
        """True for exit status 0."""
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        """Shell-quoted command line, for log messages."""
        return shlex.join(self.args)


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a command to completion and capture its output.

    A non-zero exit status is reported through the result, never raised.

    Raises:
        subprocess.TimeoutExpired: If the command outlives timeout.
        OSError: If the executable cannot be started at all.
    """
    started = time.monotonic()
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
        args=tuple(args),
        elapsed=time.monotonic() - started,
    )


def command_exists(name: str) -> bool:
    """Check whether name resolves to an executable on PATH."""
    return shutil.which(name) is not None

"""Logging setup for the apfscopy CLI.

Console records go through Rich on stderr so they interleave cleanly with
command output. A plain-text copy of every record is appended to a run log
under the state directory, which is where an operator looks after a long
unattended copy.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

from apfscopy.utils.formatting import err_console

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure the root logger for a CLI invocation.

    Args:
        verbose: Show DEBUG records on the console.
        quiet: Only show WARNING and above on the console.
        log_file: Optional file receiving all records at DEBUG level.
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.WARNING
    else:
        console_level = logging.INFO

    root = logging.getLogger()
    # Reconfiguring must not stack handlers (repeated CliRunner invocations)
    for handler in list(root.handlers):
        if getattr(handler, "_apfscopy", False):
            root.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(
        console=err_console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(console_level)
    console_handler._apfscopy = True  # type: ignore[attr-defined]
    root.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logging.getLogger(__name__).warning("Cannot open log file %s: %s", log_file, e)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            file_handler._apfscopy = True  # type: ignore[attr-defined]
            root.addHandler(file_handler)

    root.setLevel(logging.DEBUG)

"""Copy command implementation.

Copies a directory tree from an apfs-fuse mount to a destination
directory, remounting the source volume whenever the driver aborts.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from apfscopy.cli.display import print_copy_summary
from apfscopy.cli.types import get_settings
from apfscopy.copier import run_copy
from apfscopy.core.errors import FatalCopyError, MountError
from apfscopy.core.models import CopyConfig, CopyStats
from apfscopy.mount import get_controller
from apfscopy.utils.formatting import console, print_error, print_info, print_warning

logger = logging.getLogger(__name__)

COMPLETION_MARKER = "done!"


def copy_tree(
    ctx: typer.Context,
    device: Annotated[str, typer.Argument(help="Device holding the APFS volume.")],
    mount_point: Annotated[str, typer.Argument(help="Where the volume is mounted.")],
    source: Annotated[Path, typer.Argument(help="Directory tree to copy.")],
    dest: Annotated[Path, typer.Argument(help="Destination directory.")],
    report: Annotated[
        Path | None,
        typer.Option(
            "--report",
            "-r",
            help="Export run statistics and abandoned paths to a JSON file.",
        ),
    ] = None,
    settle_delay: Annotated[
        float | None,
        typer.Option(
            "--settle-delay",
            min=0,
            help="Seconds to wait after each mount/unmount (overrides settings).",
        ),
    ] = None,
) -> None:
    """Copy a directory tree from an APFS volume to a destination."""
    settings = get_settings(ctx)
    if settle_delay is not None:
        settings = settings.model_copy(update={"settle_delay_seconds": settle_delay})

    try:
        config = CopyConfig(
            device=device,
            mount_point=mount_point,
            source_root=source.absolute(),
            dest_root=dest.absolute(),
        )
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    controller = get_controller(settings)
    if not controller.is_available():
        print_warning(
            f"{settings.mount_program} not found on PATH; remounting will fail if needed."
        )

    logger.info("Copying %s to %s", config.source_root, config.dest_root)

    try:
        stats = run_copy(config, controller)
    except FatalCopyError as e:
        logger.error("Aborting: %s", e)
        print_error(
            f"{escape(str(e.cause))} From: '{escape(str(e.source))}' "
            f"To: '{escape(str(e.destination))}'"
        )
        raise typer.Exit(code=1) from e
    except MountError as e:
        logger.error("Aborting: %s", e)
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_copy_summary(stats)

    if report is not None:
        _export_report(config, stats, report)

    console.print(COMPLETION_MARKER)


# === Private helper functions ===


def _export_report(config: CopyConfig, stats: CopyStats, report_path: Path) -> None:
    """Export run statistics to a JSON file."""
    report_path = report_path.resolve()
    if report_path.is_dir():
        print_error(f"Report path is a directory: {report_path}")
        raise typer.Exit(code=1)

    data = {
        "device": config.device,
        "mount_point": config.mount_point,
        "source_root": str(config.source_root),
        "dest_root": str(config.dest_root),
        **stats.to_dict(),
    }
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(json.dumps(data, indent=2))
        print_info(f"Report written to {report_path}")
    except OSError as e:
        print_error(f"Failed to write report: {e}")
        raise typer.Exit(code=1) from e

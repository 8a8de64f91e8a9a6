"""Shared Rich display functions for copy results."""

from rich.markup import escape
from rich.table import Table

from apfscopy.core.models import CopyStats
from apfscopy.utils.formatting import console, format_size


def create_summary_table(stats: CopyStats) -> Table:
    """Create a Rich table summarizing a copy run.

    Args:
        stats: Counters of the finished run.

    Returns:
        Rich Table configured for summary display.
    """
    table = Table(
        title="Copy Summary",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Item")
    table.add_column("Count", justify="right")

    table.add_row("Directories", str(stats.directories_created))
    table.add_row("Files copied", f"[success]{stats.files_copied}[/success]")
    table.add_row("Bytes copied", format_size(stats.bytes_copied))
    table.add_row("Already present", f"[muted]{stats.files_present}[/muted]")
    table.add_row("Unreadable (skipped)", _highlight(stats.files_unreadable, "warning"))
    table.add_row("Name repairs", str(stats.repairs))
    table.add_row("Remounts", _highlight(stats.remounts, "warning"))
    table.add_row("Abandoned paths", _highlight(len(stats.failed_paths), "error"))

    return table


def print_copy_summary(stats: CopyStats) -> None:
    """Print the summary table and any abandoned paths."""
    console.print(create_summary_table(stats))

    if stats.failed_paths:
        console.print("\n[warning]Abandoned after connection aborts:[/warning]")
        for path in stats.failed_paths:
            console.print(f"  [muted]{escape(path)}[/muted]")


def _highlight(count: int, style: str) -> str:
    if count:
        return f"[{style}]{count}[/{style}]"
    return str(count)

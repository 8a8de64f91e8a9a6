"""Sanitize command: preview destination-safe names."""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from apfscopy.core.sanitize import sanitize_component
from apfscopy.utils.formatting import console


def sanitize_names(
    names: Annotated[list[str], typer.Argument(help="Path components to sanitize.")],
) -> None:
    """Show how path components are renamed at the destination."""
    table = Table(
        title="Sanitized Names",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Source", no_wrap=True)
    table.add_column("Destination", no_wrap=True)

    for name in names:
        sanitized = sanitize_component(name)
        style = "warning" if sanitized != name else "muted"
        table.add_row(escape(name), f"[{style}]{escape(sanitized)}[/{style}]")

    console.print(table)

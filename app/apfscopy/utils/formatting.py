"""Rich console output shared by all commands.

Command results go to stdout through ``console``; warnings and errors go to
stderr through ``err_console`` so that they stay visible when the summary
is piped somewhere else.
"""

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "muted": "#b2bec3",
        "border": "#29526d",
        "bold_header": "bold #69B9A1",
        "info": "#0ec1c8",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
    }
)

console = Console(theme=THEME)
err_console = Console(theme=THEME, stderr=True)

_SIZE_UNITS = ("KB", "MB", "GB", "TB")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]Error:[/] {message}")


def format_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable string (1024 based)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for unit in _SIZE_UNITS:
        size /= 1024
        if size < 1024 or unit == _SIZE_UNITS[-1]:
            break
    return f"{size:.1f} {unit}"

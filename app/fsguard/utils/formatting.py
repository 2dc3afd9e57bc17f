"""Rich console output for the fsguard CLI.

Holds the shared consoles, the theme their markup refers to, and small
helpers for messages, sizes and failure tables.
"""

import sys
from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from fsguard.models.results import DeletionResult, ProtectionResult

# Semantic styles used in Rich markup across the CLI
THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "dim": "#b2bec3",
        "header": "#69B9A1",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
    }
)


def _color_system() -> str | None:
    """Use truecolor on a terminal; let Rich decide when piped or captured."""
    return "truecolor" if sys.stdout.isatty() else None


# stdout for results, stderr for diagnostics
console = Console(theme=THEME, color_system=_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_color_system())


def create_table(title: str) -> Table:
    """Create a table with the themed header and border.

    Args:
        title: Table title.

    Returns:
        Empty Rich Table.
    """
    return Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )


def print_failures(
    title: str,
    failures: Iterable[ProtectionResult | DeletionResult],
) -> None:
    """Print failed items of a bulk operation as a path/error table."""
    table = create_table(title)
    table.add_column("Path", style="bold")
    table.add_column("Error", style="muted")
    for failure in failures:
        table.add_row(failure.path, failure.error or "Unknown error")
    console.print(table)


def format_size(size_bytes: int | None) -> str:
    """Format a byte count for display.

    Args:
        size_bytes: Size in bytes, or None for an absent entry.

    Returns:
        String like "1.5 KB", or "-" for None.
    """
    if size_bytes is None:
        return "-"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {message}")

"""Storage root commands.

Resolves every storage root and shows where it lives and how it is
protected.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from fsguard.cli.context import load_storage_context
from fsguard.models.storage import StorageRoot
from fsguard.storage.exceptions import StorageError
from fsguard.utils.formatting import console, create_table

app = typer.Typer(
    help="Resolve application storage roots.",
    invoke_without_command=True,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for storage roots."""

    TABLE = "table"
    JSON = "json"


@app.command()
def show(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Resolve all storage roots, creating missing ones."""
    storage = load_storage_context(ctx)

    rows: list[dict[str, str | None]] = []
    for root in StorageRoot:
        try:
            path = storage.resolver.resolve(root)
            protection = storage.protection.get_protection(path)
        except StorageError as e:
            rows.append({"root": root.value, "path": None, "protection": None, "error": str(e)})
            continue
        rows.append(
            {
                "root": root.value,
                "path": path,
                "protection": protection.value if protection else None,
                "error": None,
            }
        )

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(rows))
        return

    table = create_table("Storage Roots")
    table.add_column("Root", style="bold")
    table.add_column("Path")
    table.add_column("Protection", style="info")

    for row in rows:
        if row["error"]:
            table.add_row(row["root"], f"[warning]unavailable[/] [muted]{row['error']}[/]", "-")
        else:
            table.add_row(row["root"], row["path"], row["protection"] or "-")

    console.print(table)

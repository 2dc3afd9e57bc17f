"""File operation commands.

Exposes the fail-safe file operations: moves, random-extension renames,
size queries and creation of protected files and directories.
"""

from pathlib import Path
from typing import Annotated

import typer

from fsguard.cli.context import load_storage_context
from fsguard.models.storage import ProtectionClass
from fsguard.storage.exceptions import CrossVolumeMoveFailedError, StorageError
from fsguard.utils.formatting import (
    console,
    format_size,
    print_error,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Move, retire, measure and create files safely.",
    invoke_without_command=True,
    no_args_is_help=True,
)

ProtectionOption = Annotated[
    ProtectionClass | None,
    typer.Option(
        "--class",
        help="Protection class (default: configured default).",
        case_sensitive=False,
    ),
]


@app.command()
def move(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="Existing file or directory.")],
    destination: Annotated[Path, typer.Argument(help="Destination path (must not exist).")],
) -> None:
    """Move a file or directory, falling back to copy-then-delete across volumes."""
    storage = load_storage_context(ctx)

    try:
        storage.file_ops.move_file_path(source, destination)
    except CrossVolumeMoveFailedError as e:
        print_error(str(e))
        if e.copied:
            print_warning(f"Data now exists at both {source} and {destination}")
        raise typer.Exit(code=1) from e
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Moved {source} to {destination}")


@app.command()
def retire(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory to rename aside.")],
) -> None:
    """Rename a path aside by appending a random extension."""
    storage = load_storage_context(ctx)

    try:
        new_path = storage.file_ops.rename_file_path_using_random_extension(path)
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Renamed {path} to {new_path}")


@app.command()
def size(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Path or file:// URL to measure.")],
    raw: Annotated[
        bool,
        typer.Option("--bytes", "-b", help="Print the exact byte count."),
    ] = False,
) -> None:
    """Show the size of a file or directory entry.

    Exits with code 1 if the entry does not exist.
    """
    storage = load_storage_context(ctx)

    try:
        if target.startswith("file:"):
            size_bytes = storage.file_ops.file_size_of_url(target)
        else:
            size_bytes = storage.file_ops.file_size_of_path(target)
    except (StorageError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if size_bytes is None:
        console.print(f"{target}: [warning]absent[/]")
        raise typer.Exit(code=1)

    console.print(f"{target}: {size_bytes if raw else format_size(size_bytes)}")


@app.command("ensure-dir")
def ensure_dir(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Directory to create.")],
    protection_class: ProtectionOption = None,
) -> None:
    """Create a directory (and parents) if missing, then protect it."""
    storage = load_storage_context(ctx)

    if not storage.file_ops.ensure_directory_exists(path, protection_class):
        print_error(f"Could not create directory: {path}")
        raise typer.Exit(code=1)

    print_success(f"Directory ready: {path}")


@app.command("ensure-file")
def ensure_file(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File to create.")],
    protection_class: ProtectionOption = None,
) -> None:
    """Create an empty file if missing, then protect it."""
    storage = load_storage_context(ctx)

    if not storage.file_ops.ensure_file_exists(path, protection_class):
        print_error(f"Could not create file: {path}")
        raise typer.Exit(code=1)

    print_success(f"File ready: {path}")

"""Data-protection commands.

Applies protection classes to files and directory trees and shows the
class recorded on an entry.
"""

from pathlib import Path
from typing import Annotated

import typer

from fsguard.cli.context import load_storage_context
from fsguard.models.results import ProtectionReport
from fsguard.models.storage import ProtectionClass
from fsguard.storage.exceptions import StorageError
from fsguard.utils.formatting import (
    console,
    print_error,
    print_failures,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Apply and inspect data-protection classes.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def apply(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory to protect.")],
    protection_class: Annotated[
        ProtectionClass | None,
        typer.Option(
            "--class",
            help="Protection class (default: configured default).",
            case_sensitive=False,
        ),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Also protect everything below PATH."),
    ] = False,
) -> None:
    """Apply a protection class to a file or directory."""
    storage = load_storage_context(ctx)
    target_class = protection_class or storage.protection.default_protection

    if not storage.protection.is_available():
        print_warning("Protection is not supported on this platform; nothing will change.")

    if recursive:
        report = storage.protection.protect_recursive(path, target_class)
        _print_report(report, target_class)
        if not report.fully_succeeded:
            raise typer.Exit(code=1)
        return

    try:
        storage.protection.protect(path, target_class)
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Protected {path} as {target_class.value}")


@app.command()
def show(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory to inspect.")],
) -> None:
    """Show the protection class recorded on a file or directory."""
    storage = load_storage_context(ctx)

    try:
        protection = storage.protection.get_protection(path)
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if protection is None:
        print_info(f"{path}: no protection class recorded")
    else:
        console.print(f"{path}: [info]{protection.value}[/]")


def _print_report(report: ProtectionReport, protection_class: ProtectionClass) -> None:
    """Display the outcome of a recursive protection pass."""
    if report.fully_succeeded:
        print_success(
            f"Protected {report.success_count} entries under {report.path} "
            f"as {protection_class.value}"
        )
        return

    print_failures("Protection Failures", report.failures)
    print_warning(f"{report.success_count} protected, {report.failure_count} failed")

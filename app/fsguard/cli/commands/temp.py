"""Temporary storage cleanup commands.

Purges temporary directories left by previous runs and empties
arbitrary directories.
"""

from pathlib import Path
from typing import Annotated

import typer

from fsguard.cli.context import load_storage_context
from fsguard.models.results import CleanupReport
from fsguard.utils.formatting import (
    print_failures,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Clean up temporary and unwanted data.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("clear-stale")
def clear_stale(ctx: typer.Context) -> None:
    """Purge temporary directories left behind by previous runs."""
    storage = load_storage_context(ctx)

    report = storage.janitor.clear_old_temporary_directories()
    _print_report(report)

    if not report.fully_succeeded:
        raise typer.Exit(code=1)


@app.command("clear-dir")
def clear_dir(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Directory to empty (kept itself).")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete everything inside a directory."""
    storage = load_storage_context(ctx)

    if not yes:
        confirmed = typer.confirm(f"Delete all contents of {path}?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    report = storage.janitor.delete_contents_of_directory(path)
    _print_report(report)

    if not report.fully_succeeded:
        raise typer.Exit(code=1)


def _print_report(report: CleanupReport) -> None:
    """Display the outcome of a cleanup pass."""
    if not report.results:
        print_info(f"Nothing to clean in {report.path or 'temporary storage'}")
        return

    if report.failures:
        print_failures("Cleanup Failures", report.failures)
        print_warning(f"{report.success_count} deleted, {report.failure_count} failed")
        return

    print_success(f"Deleted {report.success_count} entries from {report.path}")

"""fsguard command-line entry point.

Wires the command groups into one Typer app and handles the global
options every command shares.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from fsguard import __version__
from fsguard.cli.commands import config, files, paths, protect, temp
from fsguard.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="fsguard",
    help="Safe storage roots, data protection and file operations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print the fsguard version and stop processing."""
    if value:
        typer.echo(f"fsguard version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route library logging to stderr through Rich.

    Args:
        verbose: Log everything down to DEBUG.
        quiet: Only log errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug details to stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml (default: ~/.config/fsguard/config.toml).",
        ),
    ] = None,
) -> None:
    """fsguard - Safe storage roots, data protection and file operations.

    Resolve application storage roots, apply protection classes,
    move and retire files safely, and clean up stale temporary data.
    """
    configure_logging(verbose, quiet)

    # Subcommands read these through fsguard.cli.context
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(paths.app, name="paths")
app.add_typer(protect.app, name="protect")
app.add_typer(files.app, name="files")
app.add_typer(temp.app, name="temp")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

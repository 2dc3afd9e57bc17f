"""Configuration commands.

Shows the effective storage configuration and writes a new config file.
"""

from typing import Annotated

import typer

from fsguard.cli.context import get_config_path
from fsguard.core.config import (
    ConfigError,
    StorageConfig,
    load_config_or_default,
    save_config,
)
from fsguard.core.paths import APP_NAME
from fsguard.core.paths import get_config_path as get_default_config_path
from fsguard.models.storage import ProtectionClass
from fsguard.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Show and initialize the storage configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config_path = get_config_path(ctx) or get_default_config_path()

    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = create_table("Storage Configuration")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("app_name", config.app_name)
    table.add_row("group_identifier", config.group_identifier or "[muted]not set[/]")
    table.add_row("default_protection", config.default_protection.value)
    table.add_row("protection_backend", config.protection_backend)
    table.add_row("rename_max_attempts", str(config.rename_max_attempts))
    table.add_row("purge_unmarked_temp_files", str(config.purge_unmarked_temp_files).lower())
    table.add_row(
        "temp_base_dir",
        str(config.temp_base_dir) if config.temp_base_dir else "[muted]system default[/]",
    )

    console.print(table)
    if not config_path.exists():
        console.print(f"[dim]No config file at {config_path}, showing defaults[/dim]")


@app.command()
def init(
    ctx: typer.Context,
    app_name: Annotated[
        str,
        typer.Option("--app-name", help="Directory name for application storage roots."),
    ] = APP_NAME,
    group_id: Annotated[
        str | None,
        typer.Option("--group-id", help="Shared-data group identifier."),
    ] = None,
    default_protection: Annotated[
        ProtectionClass,
        typer.Option(
            "--default-protection",
            help="Default protection class.",
            case_sensitive=False,
        ),
    ] = ProtectionClass.COMPLETE_UNTIL_FIRST_AUTH,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a new config file."""
    config_path = get_config_path(ctx) or get_default_config_path()

    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        config = StorageConfig(
            app_name=app_name,
            group_identifier=group_id,
            default_protection=default_protection,
        )
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1) from e

    try:
        saved_path = save_config(config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved_path}")

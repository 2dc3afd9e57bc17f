"""Shared helpers for CLI commands.

Builds the storage context for a command invocation from the global
options stored on the Typer context.
"""

from pathlib import Path

import typer

from fsguard.api import StorageContext, build_context
from fsguard.core.config import ConfigError, load_config_or_default
from fsguard.storage.exceptions import ProtectionError
from fsguard.utils.formatting import print_error


def get_config_path(ctx: typer.Context) -> Path | None:
    """Config path given with --config, or None for the default."""
    obj = ctx.obj or {}
    return obj.get("config_path")


def load_storage_context(ctx: typer.Context) -> StorageContext:
    """Build the storage context for this invocation.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        StorageContext built from the configuration.

    Raises:
        typer.Exit: If the configuration is invalid or the protection
            backend is unavailable.
    """
    try:
        config = load_config_or_default(get_config_path(ctx))
        return build_context(config)
    except (ConfigError, ProtectionError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

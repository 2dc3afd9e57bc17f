"""CLI commands for fsguard.

This package contains all subcommand implementations.
"""

from fsguard.cli.commands import config, files, paths, protect, temp

__all__ = ["config", "files", "paths", "protect", "temp"]

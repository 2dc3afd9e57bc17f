"""XDG-compliant base directories for fsguard.

This module provides standardized paths following the XDG Base Directory
Specification. fsguard's own configuration lives under the config home,
while the storage roots handed out to applications are built on top of
the data, state and cache homes.

XDG defaults:
- Config: ~/.config/
- Data: ~/.local/share/
- State: ~/.local/state/
- Cache: ~/.cache/
"""

import os
from pathlib import Path

# Application identifier for fsguard's own files
APP_NAME = "fsguard"

CONFIG_FILENAME = "config.toml"


def _get_xdg_home(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting the environment override.

    Relative values are ignored, as required by the XDG specification.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_DATA_HOME").
        default_subdir: Default subdirectory under home (e.g., ".local/share").

    Returns:
        Absolute path to the XDG base directory.

    Raises:
        RuntimeError: If the home directory cannot be determined.
    """
    base = os.environ.get(env_var)
    if base and os.path.isabs(base):
        return Path(base)
    return Path.home() / default_subdir


def get_config_home() -> Path:
    """Get the XDG config home.

    Returns:
        Path to ~/.config (or XDG_CONFIG_HOME).
    """
    return _get_xdg_home("XDG_CONFIG_HOME", ".config")


def get_data_home() -> Path:
    """Get the XDG data home.

    Returns:
        Path to ~/.local/share (or XDG_DATA_HOME).
    """
    return _get_xdg_home("XDG_DATA_HOME", ".local/share")


def get_state_home() -> Path:
    """Get the XDG state home.

    State data persists between runs but is neither user content
    nor configuration.

    Returns:
        Path to ~/.local/state (or XDG_STATE_HOME).
    """
    return _get_xdg_home("XDG_STATE_HOME", ".local/state")


def get_cache_home() -> Path:
    """Get the XDG cache home.

    Returns:
        Path to ~/.cache (or XDG_CACHE_HOME).
    """
    return _get_xdg_home("XDG_CACHE_HOME", ".cache")


def get_config_dir() -> Path:
    """Get fsguard's configuration directory.

    Returns:
        Path to ~/.config/fsguard/ (or XDG_CONFIG_HOME/fsguard/).
    """
    return get_config_home() / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/fsguard/config.toml.
    """
    return get_config_dir() / CONFIG_FILENAME

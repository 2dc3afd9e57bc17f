"""Storage configuration and settings.

Defines the StorageConfig model and reads and writes it as TOML. The
settings name the directory storage roots live under and the shared-data
group, and set the protection defaults.

Configuration is stored in ~/.config/fsguard/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fsguard.core.paths import APP_NAME, get_config_path
from fsguard.models.storage import ProtectionClass

logger = logging.getLogger(__name__)

ProtectionBackend = Literal["auto", "xattr", "none"]

DEFAULT_RENAME_ATTEMPTS = 5


class StorageConfig(BaseModel):
    """Configuration for storage root resolution and file operations.

    Attributes:
        app_name: Directory name used for per-application storage roots.
        group_identifier: Identifier of the shared-data group. Required to
            resolve the shared-data root.
        default_protection: Protection class for roots and recursive passes.
        protection_backend: Protection mechanism ("auto", "xattr" or "none").
        rename_max_attempts: Collision retries for random-extension renames.
        purge_unmarked_temp_files: Also purge unprefixed temp entries older
            than the current launch.
        temp_base_dir: Override for the system temporary directory.
    """

    model_config = ConfigDict(extra="forbid")

    app_name: Annotated[
        str,
        Field(min_length=1, description="Directory name for application storage roots"),
    ] = APP_NAME
    group_identifier: Annotated[
        str | None,
        Field(description="Shared-data group identifier (None = shared data unavailable)"),
    ] = None
    default_protection: Annotated[
        ProtectionClass,
        Field(description="Default protection class"),
    ] = ProtectionClass.COMPLETE_UNTIL_FIRST_AUTH
    protection_backend: Annotated[
        ProtectionBackend,
        Field(description="Protection mechanism"),
    ] = "auto"
    rename_max_attempts: Annotated[
        int,
        Field(ge=1, le=100, description="Random rename attempts (1-100)"),
    ] = DEFAULT_RENAME_ATTEMPTS
    purge_unmarked_temp_files: Annotated[
        bool,
        Field(description="Purge unprefixed temp entries older than this launch"),
    ] = False
    temp_base_dir: Annotated[
        Path | None,
        Field(description="Base temporary directory (None = system default)"),
    ] = None

    @field_validator("app_name", "group_identifier")
    @classmethod
    def validate_directory_name(cls, v: str | None) -> str | None:
        """Reject names that would escape their base directory."""
        if v is None:
            return v
        if "/" in v or "\\" in v or v in (".", ".."):
            msg = f"must be a single directory name, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("temp_base_dir")
    @classmethod
    def validate_temp_base_dir(cls, v: Path | None) -> Path | None:
        """Expand and require an absolute temporary base directory."""
        if v is None:
            return v
        expanded = v.expanduser()
        if not expanded.is_absolute():
            msg = f"temp_base_dir must be absolute, got '{v}'"
            raise ValueError(msg)
        return expanded


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> StorageConfig:
    """Load storage configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated StorageConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return StorageConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> StorageConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded StorageConfig, or the default StorageConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return StorageConfig()


def save_config(config: StorageConfig, path: Path | None = None) -> Path:
    """Save storage configuration to a TOML file.

    Written to a sibling temporary file first, then moved over the target
    with os.replace(), so readers never see a half-written file.

    Args:
        config: The StorageConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: StorageConfig) -> dict[str, object]:
    """Convert StorageConfig to a dictionary for TOML serialization.

    TOML has no null, so None values are omitted.

    Args:
        config: The StorageConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "app_name": config.app_name,
        "default_protection": config.default_protection.value,
        "protection_backend": config.protection_backend,
        "rename_max_attempts": config.rename_max_attempts,
        "purge_unmarked_temp_files": config.purge_unmarked_temp_files,
    }

    if config.group_identifier is not None:
        result["group_identifier"] = config.group_identifier

    if config.temp_base_dir is not None:
        result["temp_base_dir"] = str(config.temp_base_dir)

    return result

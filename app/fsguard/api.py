"""Module-level storage functions.

Stateless entry points for applications: each function delegates to a
process-wide StorageContext that is built lazily from the configuration
file on first use. Call configure() at startup to use an explicit
configuration instead.

Example:
    >>> from fsguard import api
    >>> api.clear_old_temporary_directories()
    >>> scratch = api.temporary_directory()
"""

import os
from dataclasses import dataclass

from fsguard.core.config import StorageConfig, load_config_or_default
from fsguard.models.results import CleanupReport, ProtectionReport
from fsguard.models.storage import ProtectionClass
from fsguard.storage.fileops import SafeFileOps
from fsguard.storage.janitor import DirectoryJanitor
from fsguard.storage.protection import ProtectionManager, get_protection_manager
from fsguard.storage.resolver import PathResolver


@dataclass(frozen=True, slots=True)
class StorageContext:
    """Components wired for one process run.

    Attributes:
        config: Storage configuration.
        protection: Selected protection backend.
        file_ops: File operations using that backend.
        resolver: Storage root resolver for this run.
        janitor: Cleanup for this run.
    """

    config: StorageConfig
    protection: ProtectionManager
    file_ops: SafeFileOps
    resolver: PathResolver
    janitor: DirectoryJanitor


def build_context(config: StorageConfig) -> StorageContext:
    """Wire all storage components from a configuration.

    Args:
        config: Storage configuration.

    Returns:
        New StorageContext.
    """
    protection = get_protection_manager(config)
    file_ops = SafeFileOps(protection, config)
    resolver = PathResolver(config, file_ops)
    return StorageContext(
        config=config,
        protection=protection,
        file_ops=file_ops,
        resolver=resolver,
        janitor=DirectoryJanitor(resolver),
    )


# Process-wide context (built on first use)
_context: StorageContext | None = None


def get_context() -> StorageContext:
    """Get the process-wide context, building it if necessary.

    Returns:
        Cached StorageContext.

    Raises:
        ConfigError: If the configuration file is invalid.
    """
    global _context
    if _context is None:
        _context = build_context(load_config_or_default())
    return _context


def configure(config: StorageConfig) -> StorageContext:
    """Replace the process-wide context.

    A new context starts a new run: it gets a fresh run identifier and
    temporary directory.

    Args:
        config: Storage configuration to use from now on.

    Returns:
        The new StorageContext.
    """
    global _context
    _context = build_context(config)
    return _context


def reset_context() -> None:
    """Drop the process-wide context so the next call rebuilds it."""
    global _context
    _context = None


# =============================================================================
# Storage roots
# =============================================================================


def temporary_directory() -> str:
    return get_context().resolver.temporary_directory()


def temporary_directory_accessible_after_first_auth() -> str:
    return get_context().resolver.temporary_directory_accessible_after_first_auth()


def app_document_directory_path() -> str:
    return get_context().resolver.app_document_directory_path()


def app_library_directory_path() -> str:
    return get_context().resolver.app_library_directory_path()


def app_shared_data_directory_path() -> str:
    return get_context().resolver.app_shared_data_directory_path()


def app_shared_data_directory_url() -> str:
    return get_context().resolver.app_shared_data_directory_url()


def caches_directory_path() -> str:
    return get_context().resolver.caches_directory_path()


def temporary_file_path(extension: str | None = None) -> str:
    return get_context().resolver.temporary_file_path(extension)


def write_data_to_temporary_file(data: bytes, extension: str | None = None) -> str:
    return get_context().resolver.write_data_to_temporary_file(data, extension)


# =============================================================================
# Protection
# =============================================================================


def protect_file_or_folder(
    path: str | os.PathLike[str],
    protection_class: ProtectionClass | None = None,
) -> None:
    get_context().protection.protect(path, protection_class)


def protect_recursive_contents(
    path: str | os.PathLike[str],
    protection_class: ProtectionClass | None = None,
) -> ProtectionReport:
    return get_context().protection.protect_recursive(path, protection_class)


# =============================================================================
# File operations
# =============================================================================


def ensure_directory_exists(
    path: str | os.PathLike[str],
    protection_class: ProtectionClass | None = None,
) -> bool:
    return get_context().file_ops.ensure_directory_exists(path, protection_class)


def ensure_file_exists(
    path: str | os.PathLike[str],
    protection_class: ProtectionClass | None = None,
) -> bool:
    return get_context().file_ops.ensure_file_exists(path, protection_class)


def move_file_path(old_path: str | os.PathLike[str], new_path: str | os.PathLike[str]) -> None:
    get_context().file_ops.move_file_path(old_path, new_path)


def rename_file_path_using_random_extension(path: str | os.PathLike[str]) -> str:
    return get_context().file_ops.rename_file_path_using_random_extension(path)


def migrate_file_path(
    old_path: str | os.PathLike[str],
    new_path: str | os.PathLike[str],
) -> str | None:
    return get_context().file_ops.migrate_file_path(old_path, new_path)


def file_size_of_path(path: str | os.PathLike[str]) -> int | None:
    return get_context().file_ops.file_size_of_path(path)


def file_size_of_url(url: str | os.PathLike[str]) -> int | None:
    return get_context().file_ops.file_size_of_url(url)


def delete_file(path: str | os.PathLike[str]) -> bool:
    return get_context().file_ops.delete_file(path)


def delete_file_if_exists(path: str | os.PathLike[str]) -> bool:
    return get_context().file_ops.delete_file_if_exists(path)


def all_files_in_directory_recursive(path: str | os.PathLike[str]) -> list[str]:
    return get_context().file_ops.all_files_in_directory_recursive(path)


# =============================================================================
# Cleanup
# =============================================================================


def delete_contents_of_directory(path: str | os.PathLike[str]) -> CleanupReport:
    return get_context().janitor.delete_contents_of_directory(path)


def clear_old_temporary_directories() -> CleanupReport:
    return get_context().janitor.clear_old_temporary_directories()

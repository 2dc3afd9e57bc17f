"""Storage roots, data protection and safe file operations.

This package provides storage root resolution, protection backends,
fail-safe file operations, and best-effort cleanup.
"""

from fsguard.storage.exceptions import (
    CrossVolumeMoveFailedError,
    DestinationExistsError,
    DirectoryUnavailableError,
    PathNotFoundError,
    PermissionDeniedError,
    ProtectionError,
    RenameExhaustedError,
    StorageError,
)
from fsguard.storage.fileops import SafeFileOps
from fsguard.storage.janitor import DirectoryJanitor
from fsguard.storage.protection import (
    NoOpProtectionManager,
    ProtectionManager,
    XattrProtectionManager,
    get_protection_manager,
)
from fsguard.storage.resolver import PathResolver

__all__ = [
    "CrossVolumeMoveFailedError",
    "DestinationExistsError",
    "DirectoryJanitor",
    "DirectoryUnavailableError",
    "NoOpProtectionManager",
    "PathNotFoundError",
    "PathResolver",
    "PermissionDeniedError",
    "ProtectionError",
    "ProtectionManager",
    "RenameExhaustedError",
    "SafeFileOps",
    "StorageError",
    "XattrProtectionManager",
    "get_protection_manager",
]

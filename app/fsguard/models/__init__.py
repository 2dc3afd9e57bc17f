"""Data models for fsguard.

This package contains the storage root, protection class and result
models used across the storage layer.
"""

from fsguard.models.results import (
    CleanupReport,
    DeletionResult,
    ProtectionReport,
    ProtectionResult,
)
from fsguard.models.storage import (
    DEFAULT_ROOT_POLICIES,
    ProtectionClass,
    StorageRoot,
    StorageRootPolicy,
)

__all__ = [
    "DEFAULT_ROOT_POLICIES",
    "CleanupReport",
    "DeletionResult",
    "ProtectionClass",
    "ProtectionReport",
    "ProtectionResult",
    "StorageRoot",
    "StorageRootPolicy",
]

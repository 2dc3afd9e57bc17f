"""Storage root and protection class models.

This module defines the storage root and protection class enums and the
per-root resolution policy.
"""

from dataclasses import dataclass
from enum import Enum


class StorageRoot(str, Enum):
    """Lifecycle class of a top-level storage directory.

    Attributes:
        DOCUMENTS: User-visible application data.
        LIBRARY: Application support data that is not user content.
        SHARED_DATA: Data shared by a group of cooperating processes.
        CACHES: Regenerable cache data.
        TEMP: Per-run temporary directory, denied while the device is locked.
        TEMP_AFTER_FIRST_AUTH: Temporary root accessible after first unlock.
    """

    DOCUMENTS = "documents"
    LIBRARY = "library"
    SHARED_DATA = "shared-data"
    CACHES = "caches"
    TEMP = "temp"
    TEMP_AFTER_FIRST_AUTH = "temp-after-first-auth"


class ProtectionClass(str, Enum):
    """Data-protection class applied to a file or directory.

    Attributes:
        COMPLETE: Inaccessible whenever the device is locked.
        COMPLETE_UNLESS_OPEN: Files already open stay accessible after locking.
        COMPLETE_UNTIL_FIRST_AUTH: Accessible from the first unlock after boot.
        NONE: No protection.
    """

    COMPLETE = "complete"
    COMPLETE_UNLESS_OPEN = "complete-unless-open"
    COMPLETE_UNTIL_FIRST_AUTH = "complete-until-first-auth"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class StorageRootPolicy:
    """How a storage root is resolved.

    Attributes:
        root: Storage root this policy applies to.
        create_if_missing: Create the directory on first resolution. If False
            the directory must already exist.
        protection: Protection class for the root directory. None means the
            configured default protection class.
    """

    root: StorageRoot
    create_if_missing: bool = True
    protection: ProtectionClass | None = None


DEFAULT_ROOT_POLICIES: dict[StorageRoot, StorageRootPolicy] = {
    StorageRoot.DOCUMENTS: StorageRootPolicy(StorageRoot.DOCUMENTS),
    StorageRoot.LIBRARY: StorageRootPolicy(StorageRoot.LIBRARY),
    StorageRoot.SHARED_DATA: StorageRootPolicy(StorageRoot.SHARED_DATA),
    StorageRoot.CACHES: StorageRootPolicy(StorageRoot.CACHES),
    StorageRoot.TEMP: StorageRootPolicy(
        StorageRoot.TEMP,
        protection=ProtectionClass.COMPLETE_UNLESS_OPEN,
    ),
    StorageRoot.TEMP_AFTER_FIRST_AUTH: StorageRootPolicy(
        StorageRoot.TEMP_AFTER_FIRST_AUTH,
        protection=ProtectionClass.COMPLETE_UNTIL_FIRST_AUTH,
    ),
}



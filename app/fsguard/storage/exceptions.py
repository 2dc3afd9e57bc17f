"""Exceptions for storage operations.

Single-entity operations raise these directly. Bulk operations catch them
per item and report an aggregate outcome instead.
"""

import errno
import os


class StorageError(Exception):
    """Base exception for storage operations."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class DirectoryUnavailableError(StorageError):
    """Raised when a storage root cannot be provided."""


class PathNotFoundError(StorageError):
    """Raised when an operation target is absent."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path does not exist: {path}", path)


class PermissionDeniedError(StorageError):
    """Raised when the OS refuses access to a path."""

    def __init__(self, path: str, reason: str = "Permission denied") -> None:
        self.reason = reason
        super().__init__(f"{reason}: {path}", path)


class DestinationExistsError(StorageError):
    """Raised when a move target is already occupied."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Destination already exists: {path}", path)


class CrossVolumeMoveFailedError(StorageError):
    """Raised when a copy-then-delete move could not complete.

    Attributes:
        destination: Target of the move.
        copied: True if the copy succeeded and only deleting the source
            failed. Both copies of the data remain in that case.
    """

    def __init__(self, path: str, destination: str, copied: bool, reason: str) -> None:
        self.destination = destination
        self.copied = copied
        step = "delete source after copy" if copied else "copy"
        super().__init__(
            f"Cross-volume move {path} -> {destination} failed to {step}: {reason}",
            path,
        )


class RenameExhaustedError(StorageError):
    """Raised when no free random name was found."""

    def __init__(self, path: str, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            f"Could not find a free random name for {path} after {attempts} attempts",
            path,
        )


class ProtectionError(StorageError):
    """Raised when a protection attribute cannot be set or read."""


def translate_os_error(exc: OSError, path: str | os.PathLike[str]) -> StorageError:
    """Map an OSError onto the storage error taxonomy.

    Args:
        exc: The original OS error.
        path: Path the failing operation targeted.

    Returns:
        The matching StorageError subclass instance.
    """
    path_str = os.fspath(path)
    if exc.errno in (errno.ENOENT, errno.ENOTDIR):
        return PathNotFoundError(path_str)
    if exc.errno in (errno.EACCES, errno.EPERM):
        return PermissionDeniedError(path_str, exc.strerror or "Permission denied")
    return StorageError(f"{exc.strerror or exc}: {path_str}", path_str)

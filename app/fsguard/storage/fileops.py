"""Fail-safe file operations.

Provides directory and file creation, atomic moves with a copy-then-delete
fallback across volumes, collision-safe renames, and size queries that
distinguish a missing file from an empty one.
"""

import errno
import logging
import os
import shutil
import time
import uuid
from urllib.parse import urlparse
from urllib.request import url2pathname

from fsguard.core.config import StorageConfig
from fsguard.models.storage import ProtectionClass
from fsguard.storage.exceptions import (
    CrossVolumeMoveFailedError,
    DestinationExistsError,
    PathNotFoundError,
    RenameExhaustedError,
    StorageError,
    translate_os_error,
)
from fsguard.storage.protection import ProtectionManager, get_protection_manager

logger = logging.getLogger(__name__)


def remove_path(path: str) -> None:
    """Remove a file, symlink or directory tree.

    Directories are removed recursively; symlinks to directories are
    unlinked, never followed.

    Args:
        path: Path to remove.

    Raises:
        OSError: If the path cannot be removed.
    """
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.unlink(path)


class SafeFileOps:
    """File mutations with defined failure semantics.

    Holds no filesystem state between calls; every method is a transient
    operation on plain paths.

    Attributes:
        protection_manager: Backend used to protect created and moved entries.
    """

    def __init__(
        self,
        protection_manager: ProtectionManager | None = None,
        config: StorageConfig | None = None,
    ) -> None:
        """Initialize SafeFileOps.

        Args:
            protection_manager: Protection backend. If None, selected from config.
            config: Storage configuration. If None, uses defaults.
        """
        self._config = config or StorageConfig()
        self.protection_manager = protection_manager or get_protection_manager(self._config)

    def ensure_directory_exists(
        self,
        path: str | os.PathLike[str],
        protection_class: ProtectionClass | None = None,
    ) -> bool:
        """Create a directory and any missing parents, then protect it.

        Args:
            path: Directory to create.
            protection_class: Class for the directory. Defaults to the
                manager's default protection.

        Returns:
            False only if creation was attempted and failed, True otherwise.
        """
        path_str = os.fspath(path)

        if not os.path.isdir(path_str):
            try:
                os.makedirs(path_str, exist_ok=True)
            except OSError as e:
                logger.error("Failed to create directory %s: %s", path_str, e)
                return False
            logger.debug("Created directory %s", path_str)

        self._protect_quietly(path_str, protection_class)
        return True

    def ensure_file_exists(
        self,
        path: str | os.PathLike[str],
        protection_class: ProtectionClass | None = None,
    ) -> bool:
        """Create an empty file if none exists, then protect it.

        The parent directory must already exist.

        Args:
            path: File to create.
            protection_class: Class for the file. Defaults to the manager's
                default protection.

        Returns:
            True if the file exists afterwards, False otherwise.
        """
        path_str = os.fspath(path)

        if not os.path.isfile(path_str):
            if os.path.lexists(path_str):
                logger.error("Cannot create file %s: path is occupied", path_str)
                return False
            try:
                fd = os.open(path_str, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
                os.close(fd)
            except FileExistsError:
                logger.debug("File %s was created concurrently", path_str)
            except OSError as e:
                logger.error("Failed to create file %s: %s", path_str, e)
                return False

        self._protect_quietly(path_str, protection_class)
        return True

    def move_file_path(
        self,
        old_path: str | os.PathLike[str],
        new_path: str | os.PathLike[str],
    ) -> None:
        """Move a file or directory to a free destination.

        Same-volume moves use a single atomic rename. Cross-volume moves
        copy and then delete the source. The moved entry is protected
        recursively afterwards (best-effort).

        Args:
            old_path: Existing source path.
            new_path: Destination path, which must not exist.

        Raises:
            PathNotFoundError: If the source (or the destination's parent)
                does not exist.
            DestinationExistsError: If the destination already exists.
            CrossVolumeMoveFailedError: If the copy-then-delete fallback
                failed. ``copied`` tells whether duplicate data remains.
            PermissionDeniedError: If the OS refuses the move.
        """
        old_str = os.fspath(old_path)
        new_str = os.fspath(new_path)

        if not os.path.lexists(old_str):
            raise PathNotFoundError(old_str)
        if os.path.lexists(new_str):
            raise DestinationExistsError(new_str)

        start = time.monotonic()
        try:
            os.rename(old_str, new_str)
        except OSError as e:
            if e.errno == errno.EXDEV:
                self._copy_then_delete(old_str, new_str)
            elif e.errno == errno.ENOENT and os.path.lexists(old_str):
                raise PathNotFoundError(os.path.dirname(new_str) or new_str) from e
            else:
                raise translate_os_error(e, old_str) from e

        logger.info("Moved %s to %s in %.3fs", old_str, new_str, time.monotonic() - start)

        self.protection_manager.protect_recursive(new_str)

    def rename_file_path_using_random_extension(self, path: str | os.PathLike[str]) -> str:
        """Rename a path in place by appending a random extension.

        Used to retire a file (for example a corrupt database) before a
        fresh one is created at the original path.

        Args:
            path: Existing file or directory.

        Returns:
            The new path.

        Raises:
            PathNotFoundError: If the path does not exist.
            RenameExhaustedError: If every candidate name was taken.
            PermissionDeniedError: If the OS refuses the rename.
        """
        path_str = os.fspath(path)
        if len(path_str) > 1:
            path_str = path_str.rstrip(os.sep)

        if not os.path.lexists(path_str):
            raise PathNotFoundError(path_str)

        attempts = self._config.rename_max_attempts
        for attempt in range(1, attempts + 1):
            candidate = f"{path_str}.{uuid.uuid4().hex}"
            if os.path.lexists(candidate):
                logger.warning(
                    "Random name collision for %s (attempt %d of %d)", path_str, attempt, attempts
                )
                continue
            try:
                os.rename(path_str, candidate)
            except OSError as e:
                raise translate_os_error(e, path_str) from e
            logger.info("Renamed %s to %s", path_str, candidate)
            return candidate

        raise RenameExhaustedError(path_str, attempts)

    def migrate_file_path(
        self,
        old_path: str | os.PathLike[str],
        new_path: str | os.PathLike[str],
    ) -> str | None:
        """Move application data to a new home, retiring anything in the way.

        Does nothing if the source is gone (already migrated). An entry at
        the destination is renamed aside with a random extension first.

        Args:
            old_path: Previous location.
            new_path: New location.

        Returns:
            Path the previous destination entry was moved aside to, or None.

        Raises:
            StorageError: If retiring the destination or the move fails.
        """
        old_str = os.fspath(old_path)
        new_str = os.fspath(new_path)

        if not os.path.lexists(old_str):
            logger.debug("Nothing to migrate at %s", old_str)
            return None

        retired: str | None = None
        if os.path.lexists(new_str):
            retired = self.rename_file_path_using_random_extension(new_str)
            logger.warning("Moved existing %s aside to %s", new_str, retired)

        self.move_file_path(old_str, new_str)
        return retired

    def file_size_of_path(self, path: str | os.PathLike[str]) -> int | None:
        """Get the byte size of an existing entry.

        Args:
            path: Path to measure.

        Returns:
            Size in bytes, or None if the path does not exist.

        Raises:
            PermissionDeniedError: If the entry cannot be inspected.
        """
        try:
            return os.stat(os.fspath(path)).st_size
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            raise translate_os_error(e, path) from e

    def file_size_of_url(self, url: str | os.PathLike[str]) -> int | None:
        """Get the byte size of the entry a file URL points to.

        Args:
            url: A ``file://`` URL, or a path-like object.

        Returns:
            Size in bytes, or None if the entry does not exist.

        Raises:
            ValueError: If the URL is not a local file URL.
        """
        if isinstance(url, os.PathLike):
            return self.file_size_of_path(url)

        parsed = urlparse(url)
        if parsed.scheme != "file" or parsed.netloc not in ("", "localhost"):
            msg = f"Not a local file URL: {url}"
            raise ValueError(msg)
        return self.file_size_of_path(url2pathname(parsed.path))

    def delete_file(self, path: str | os.PathLike[str]) -> bool:
        """Delete a file, symlink or directory tree.

        Args:
            path: Path to delete.

        Returns:
            True if the entry was removed, False if it was missing or
            could not be removed.
        """
        path_str = os.fspath(path)
        if not os.path.lexists(path_str):
            logger.warning("Cannot delete missing path: %s", path_str)
            return False
        try:
            remove_path(path_str)
        except OSError as e:
            logger.error("Failed to delete %s: %s", path_str, e)
            return False
        return True

    def delete_file_if_exists(self, path: str | os.PathLike[str]) -> bool:
        """Delete an entry if present.

        Args:
            path: Path to delete.

        Returns:
            True if the entry is gone afterwards, False if removal failed.
        """
        if not os.path.lexists(os.fspath(path)):
            return True
        return self.delete_file(path)

    def all_files_in_directory_recursive(self, path: str | os.PathLike[str]) -> list[str]:
        """List every regular file below a directory.

        Symbolic links are skipped. Unreadable subdirectories are logged
        and skipped.

        Args:
            path: Directory to walk.

        Returns:
            Sorted absolute file paths. Empty if the directory is missing.
        """
        root = os.fspath(path)

        def _on_walk_error(exc: OSError) -> None:
            logger.warning("Cannot enumerate %s: %s", exc.filename or root, exc)

        files: list[str] = []
        for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_walk_error):
            for name in filenames:
                entry = os.path.join(dirpath, name)
                if os.path.isfile(entry) and not os.path.islink(entry):
                    files.append(os.path.abspath(entry))
        return sorted(files)

    def _copy_then_delete(self, old_path: str, new_path: str) -> None:
        """Move across volumes by copying and deleting the source.

        Args:
            old_path: Existing source path.
            new_path: Free destination path.

        Raises:
            CrossVolumeMoveFailedError: If either step fails.
        """
        logger.debug("Cross-volume move %s -> %s, copying", old_path, new_path)
        try:
            if os.path.isdir(old_path) and not os.path.islink(old_path):
                shutil.copytree(old_path, new_path, symlinks=True)
            else:
                shutil.copy2(old_path, new_path, follow_symlinks=False)
        except OSError as e:
            if os.path.lexists(new_path):
                try:
                    remove_path(new_path)
                except OSError as cleanup_error:
                    logger.error("Could not remove partial copy %s: %s", new_path, cleanup_error)
            raise CrossVolumeMoveFailedError(old_path, new_path, copied=False, reason=str(e)) from e

        try:
            remove_path(old_path)
        except OSError as e:
            logger.error(
                "Copied %s to %s but could not delete the source: %s", old_path, new_path, e
            )
            raise CrossVolumeMoveFailedError(old_path, new_path, copied=True, reason=str(e)) from e

    def _protect_quietly(self, path: str, protection_class: ProtectionClass | None) -> None:
        """Protect a single entry, logging instead of raising on failure."""
        try:
            self.protection_manager.protect(path, protection_class)
        except StorageError as e:
            logger.warning("Could not protect %s: %s", path, e)

"""Data-protection managers.

This module defines the ProtectionManager interface and its backends. The
xattr backend records the protection class in an extended attribute and
restricts POSIX permissions to the owner. The no-op backend is selected on
platforms without a protection concept, so calling code never branches on
platform.
"""

import errno
import logging
import os
import stat
from abc import ABC, abstractmethod

from fsguard.core.config import StorageConfig
from fsguard.models.results import ProtectionReport, ProtectionResult
from fsguard.models.storage import ProtectionClass
from fsguard.storage.exceptions import (
    PathNotFoundError,
    PermissionDeniedError,
    ProtectionError,
    StorageError,
    translate_os_error,
)

logger = logging.getLogger(__name__)

_OWNER_FILE_MODE = 0o600
_OWNER_DIR_MODE = 0o700

_UNSUPPORTED_ERRNOS = frozenset(
    getattr(errno, name) for name in ("ENOTSUP", "EOPNOTSUPP") if hasattr(errno, name)
)
_NO_ATTRIBUTE_ERRNOS = frozenset(
    getattr(errno, name) for name in ("ENODATA", "ENOATTR") if hasattr(errno, name)
)


class ProtectionManager(ABC):
    """Abstract base class for protection backends.

    A backend applies a ProtectionClass to single filesystem entries. The
    recursive pass is shared by all backends and is best-effort: per-entry
    failures are collected instead of aborting the pass.

    Example:
        >>> manager = get_protection_manager()
        >>> report = manager.protect_recursive("/srv/app/data")
        >>> if not report.fully_succeeded:
        ...     print(f"{report.failure_count} entries left unprotected")
    """

    def __init__(
        self,
        default_protection: ProtectionClass = ProtectionClass.COMPLETE_UNTIL_FIRST_AUTH,
    ) -> None:
        """Initialize the manager.

        Args:
            default_protection: Class used when none is given explicitly.
        """
        self._default_protection = default_protection

    @property
    def default_protection(self) -> ProtectionClass:
        """Protection class applied when none is specified."""
        return self._default_protection

    @abstractmethod
    def protect(
        self,
        path: str | os.PathLike[str],
        protection_class: ProtectionClass | None = None,
    ) -> None:
        """Apply a protection class to a single file or directory.

        Re-applying the class an entry already has is a no-op.

        Args:
            path: Existing file or directory.
            protection_class: Class to apply. Defaults to default_protection.

        Raises:
            PathNotFoundError: If the path does not exist.
            PermissionDeniedError: If the OS refuses the change.
            ProtectionError: If the attribute cannot be set for another reason.
        """

    @abstractmethod
    def get_protection(self, path: str | os.PathLike[str]) -> ProtectionClass | None:
        """Return the protection class recorded on an entry.

        Args:
            path: Existing file or directory.

        Returns:
            The recorded ProtectionClass, or None if none is recorded.

        Raises:
            PathNotFoundError: If the path does not exist.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this backend actually enforces protection.

        Returns:
            True if protection classes have an effect on this platform.
        """

    def protect_recursive(
        self,
        path: str | os.PathLike[str],
        protection_class: ProtectionClass | None = None,
    ) -> ProtectionReport:
        """Protect a path and every entry below it.

        Symbolic links are neither followed nor protected. Entries created
        after this call are not covered.

        Args:
            path: File or directory to protect.
            protection_class: Class to apply. Defaults to default_protection.

        Returns:
            ProtectionReport with one result per visited entry.
        """
        root = os.fspath(path)
        target_class = protection_class or self._default_protection

        if not os.path.lexists(root):
            logger.warning("Cannot protect missing path: %s", root)
            missing = ProtectionResult(
                path=root,
                success=False,
                error=f"Path does not exist: {root}",
            )
            return ProtectionReport(path=root, results=(missing,))

        results: list[ProtectionResult] = [self._protect_entry(root, target_class)]

        def _on_walk_error(exc: OSError) -> None:
            failed = exc.filename or root
            logger.warning("Cannot enumerate %s: %s", failed, exc)
            results.append(ProtectionResult(path=failed, success=False, error=str(exc)))

        if os.path.isdir(root) and not os.path.islink(root):
            for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
                for name in (*dirnames, *filenames):
                    entry = os.path.join(dirpath, name)
                    if os.path.islink(entry):
                        continue
                    results.append(self._protect_entry(entry, target_class))

        report = ProtectionReport(path=root, results=tuple(results))
        if not report.fully_succeeded:
            logger.warning(
                "Protected %d of %d entries under %s",
                report.success_count,
                len(report.results),
                root,
            )
        return report

    def _protect_entry(self, path: str, protection_class: ProtectionClass) -> ProtectionResult:
        """Protect one entry, converting errors into a failed result."""
        try:
            self.protect(path, protection_class)
        except StorageError as e:
            logger.warning("Could not protect %s: %s", path, e)
            return ProtectionResult(path=path, success=False, error=str(e))
        return ProtectionResult(path=path, success=True)


class NoOpProtectionManager(ProtectionManager):
    """Protection backend for platforms without a protection concept.

    Only existence is checked; every protect call on an existing entry
    succeeds without changing anything.
    """

    def protect(
        self,
        path: str | os.PathLike[str],
        protection_class: ProtectionClass | None = None,
    ) -> None:
        path_str = os.fspath(path)
        if not os.path.lexists(path_str):
            raise PathNotFoundError(path_str)

    def get_protection(self, path: str | os.PathLike[str]) -> ProtectionClass | None:
        path_str = os.fspath(path)
        if not os.path.lexists(path_str):
            raise PathNotFoundError(path_str)
        return None

    def is_available(self) -> bool:
        return False


class XattrProtectionManager(ProtectionManager):
    """Protection backend based on extended attributes.

    The protection class is stored in ``user.<app_name>.protection``. Every
    class except NONE also restricts permissions to the owner (0600 for
    files, 0700 for directories). On filesystems without user extended
    attributes only the permission change is applied.

    Attributes:
        attribute_name: Name of the extended attribute holding the class.
    """

    def __init__(
        self,
        app_name: str,
        default_protection: ProtectionClass = ProtectionClass.COMPLETE_UNTIL_FIRST_AUTH,
    ) -> None:
        """Initialize the xattr backend.

        Args:
            app_name: Namespace for the extended attribute.
            default_protection: Class used when none is given explicitly.
        """
        super().__init__(default_protection)
        self.attribute_name = f"user.{app_name}.protection"

    def protect(
        self,
        path: str | os.PathLike[str],
        protection_class: ProtectionClass | None = None,
    ) -> None:
        path_str = os.fspath(path)
        target_class = protection_class or self._default_protection

        try:
            st = os.stat(path_str)
        except OSError as e:
            raise translate_os_error(e, path_str) from e

        if target_class != ProtectionClass.NONE:
            mode = _OWNER_DIR_MODE if stat.S_ISDIR(st.st_mode) else _OWNER_FILE_MODE
            if stat.S_IMODE(st.st_mode) != mode:
                try:
                    os.chmod(path_str, mode)
                except OSError as e:
                    raise translate_os_error(e, path_str) from e

        if self._read_attribute(path_str) == target_class.value:
            return

        try:
            os.setxattr(path_str, self.attribute_name, target_class.value.encode())
        except OSError as e:
            if e.errno in _UNSUPPORTED_ERRNOS:
                logger.debug("Extended attributes unsupported for %s, mode applied only", path_str)
                return
            if e.errno in (errno.EACCES, errno.EPERM):
                raise PermissionDeniedError(path_str, "Cannot set protection attribute") from e
            raise ProtectionError(f"Cannot set protection on {path_str}: {e}", path_str) from e

        logger.debug("Protected %s as %s", path_str, target_class.value)

    def get_protection(self, path: str | os.PathLike[str]) -> ProtectionClass | None:
        path_str = os.fspath(path)
        if not os.path.lexists(path_str):
            raise PathNotFoundError(path_str)

        value = self._read_attribute(path_str)
        if value is None:
            return None
        try:
            return ProtectionClass(value)
        except ValueError:
            logger.warning("Unknown protection class '%s' on %s", value, path_str)
            return None

    def is_available(self) -> bool:
        return hasattr(os, "setxattr")

    def _read_attribute(self, path: str) -> str | None:
        """Read the raw protection attribute.

        Args:
            path: Existing file or directory.

        Returns:
            Decoded attribute value, or None if missing or unsupported.

        Raises:
            StorageError: If the attribute cannot be read for another reason.
        """
        try:
            raw = os.getxattr(path, self.attribute_name)
        except OSError as e:
            if e.errno in _NO_ATTRIBUTE_ERRNOS or e.errno in _UNSUPPORTED_ERRNOS:
                return None
            raise translate_os_error(e, path) from e
        return raw.decode(errors="replace")


def xattrs_supported() -> bool:
    """Check if the platform exposes extended attribute calls.

    Returns:
        True if os.setxattr and os.getxattr exist.
    """
    return hasattr(os, "setxattr") and hasattr(os, "getxattr")


def get_protection_manager(config: StorageConfig | None = None) -> ProtectionManager:
    """Select the protection backend for the current platform.

    Args:
        config: Storage configuration. If None, uses defaults.

    Returns:
        XattrProtectionManager where extended attributes exist (or are
        requested), NoOpProtectionManager otherwise.

    Raises:
        ProtectionError: If the xattr backend is requested but unavailable.
    """
    config = config or StorageConfig()
    backend = config.protection_backend

    if backend == "none":
        return NoOpProtectionManager(config.default_protection)

    if xattrs_supported():
        return XattrProtectionManager(config.app_name, config.default_protection)

    if backend == "xattr":
        msg = "Extended attributes are not supported on this platform"
        raise ProtectionError(msg)

    logger.debug("Extended attributes unavailable, protection is a no-op")
    return NoOpProtectionManager(config.default_protection)

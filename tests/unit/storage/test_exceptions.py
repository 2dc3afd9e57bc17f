"""Unit tests for the storage error taxonomy."""

import errno

import pytest
from fsguard.storage.exceptions import (
    CrossVolumeMoveFailedError,
    DirectoryUnavailableError,
    PathNotFoundError,
    PermissionDeniedError,
    RenameExhaustedError,
    StorageError,
    translate_os_error,
)


class TestTranslateOsError:
    """Tests for translate_os_error."""

    @pytest.mark.parametrize("code", [errno.ENOENT, errno.ENOTDIR])
    def test_missing_path(self, code: int) -> None:
        """ENOENT and ENOTDIR map to PathNotFoundError."""
        error = translate_os_error(OSError(code, "missing"), "/x")

        assert isinstance(error, PathNotFoundError)
        assert error.path == "/x"

    @pytest.mark.parametrize("code", [errno.EACCES, errno.EPERM])
    def test_permission(self, code: int) -> None:
        """EACCES and EPERM map to PermissionDeniedError."""
        error = translate_os_error(OSError(code, "Permission denied"), "/x")

        assert isinstance(error, PermissionDeniedError)
        assert error.reason == "Permission denied"

    def test_other_errors(self) -> None:
        """Anything else maps to the StorageError base class."""
        error = translate_os_error(OSError(errno.EIO, "Input/output error"), "/x")

        assert type(error) is StorageError
        assert "Input/output error" in str(error)


class TestErrorMessages:
    """Tests for error attributes and messages."""

    def test_all_are_storage_errors(self) -> None:
        """Every storage exception derives from StorageError."""
        for cls in (DirectoryUnavailableError, PathNotFoundError, PermissionDeniedError):
            assert issubclass(cls, StorageError)

    def test_cross_volume_copied(self) -> None:
        """The message names the step that failed."""
        error = CrossVolumeMoveFailedError("/a", "/b", copied=True, reason="busy")

        assert error.copied is True
        assert error.destination == "/b"
        assert "delete source after copy" in str(error)

    def test_rename_exhausted(self) -> None:
        """The attempt count is kept on the error."""
        error = RenameExhaustedError("/a", 5)

        assert error.attempts == 5
        assert "5 attempts" in str(error)

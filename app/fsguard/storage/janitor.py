"""Best-effort directory cleanup.

Deletes directory contents and purges temporary directories left behind
by previous runs. Per-entry failures are logged and collected, never
raised, so one stubborn entry does not stop the rest of the cleanup.
"""

import logging
import os

from fsguard.models.results import CleanupReport, DeletionResult
from fsguard.storage.exceptions import DirectoryUnavailableError
from fsguard.storage.fileops import remove_path
from fsguard.storage.resolver import PathResolver

logger = logging.getLogger(__name__)


class DirectoryJanitor:
    """Reclaims abandoned and unwanted storage.

    Temporary directories move through ``created -> stale -> purged``: a
    directory belongs to the run that created it and only becomes eligible
    for purging once a later run is active. The current run's directory is
    never purged, and neither is one touched after the current run launched.

    Args:
        resolver: Resolver of the current run; supplies the temporary root
            and the identity of the current run's directory.
    """

    def __init__(self, resolver: PathResolver) -> None:
        self._resolver = resolver

    def delete_contents_of_directory(self, path: str | os.PathLike[str]) -> CleanupReport:
        """Delete every entry inside a directory, keeping the directory.

        A missing directory counts as already empty. A symlinked directory
        is not followed and is reported as a failure.

        Args:
            path: Directory to empty.

        Returns:
            CleanupReport with one result per child.
        """
        dir_path = os.fspath(path)

        if not os.path.lexists(dir_path):
            logger.debug("Nothing to clean, %s does not exist", dir_path)
            return CleanupReport(path=dir_path)

        if os.path.islink(dir_path):
            logger.warning("Cannot clean %s: refusing to follow a symlink", dir_path)
            failure = DeletionResult(path=dir_path, success=False, error="Is a symlink")
            return CleanupReport(path=dir_path, results=(failure,))

        if not os.path.isdir(dir_path):
            logger.warning("Cannot clean %s: not a directory", dir_path)
            failure = DeletionResult(path=dir_path, success=False, error="Not a directory")
            return CleanupReport(path=dir_path, results=(failure,))

        try:
            names = sorted(os.listdir(dir_path))
        except OSError as e:
            logger.warning("Cannot list %s: %s", dir_path, e)
            failure = DeletionResult(path=dir_path, success=False, error=str(e))
            return CleanupReport(path=dir_path, results=(failure,))

        results = [self._delete_entry(os.path.join(dir_path, name)) for name in names]
        return self._finish(dir_path, results)

    def clear_old_temporary_directories(self) -> CleanupReport:
        """Purge temporary directories that belong to previous runs.

        Entries in the temporary root whose name carries the temp prefix
        and a run identifier other than the current one are deleted if they
        were last modified before this run launched. Anything modified later
        may be in use by a newer run and is kept. Entries without the prefix
        are kept, unless ``purge_unmarked_temp_files`` is enabled, in which
        case the same launch-time rule applies to them.

        Returns:
            CleanupReport with one result per purged entry.
        """
        resolver = self._resolver
        try:
            temp_root = resolver.temporary_directory_accessible_after_first_auth()
        except DirectoryUnavailableError as e:
            logger.warning("Skipping temporary cleanup: %s", e)
            failure = DeletionResult(path=e.path or "", success=False, error=str(e))
            return CleanupReport(path=e.path or "", results=(failure,))

        prefix = resolver.temp_dir_prefix
        current = resolver.current_temp_dir_name
        purge_unmarked = resolver.config.purge_unmarked_temp_files

        try:
            names = sorted(os.listdir(temp_root))
        except FileNotFoundError:
            return CleanupReport(path=temp_root)
        except OSError as e:
            logger.warning("Cannot list temporary root %s: %s", temp_root, e)
            return CleanupReport(path=temp_root)

        results: list[DeletionResult] = []
        for name in names:
            if name == current:
                continue

            entry = os.path.join(temp_root, name)
            if not name.startswith(prefix) and not purge_unmarked:
                continue
            # Entries touched since launch may belong to a run started after this one
            if not self._predates_launch(entry):
                logger.debug("Keeping %s: modified after this run launched", entry)
                continue

            results.append(self._delete_entry(entry))

        return self._finish(temp_root, results)

    def _predates_launch(self, path: str) -> bool:
        """Check if an entry was last modified before this run launched."""
        try:
            mtime = os.lstat(path).st_mtime
        except OSError:
            return False
        return mtime < self._resolver.launch_time

    @staticmethod
    def _delete_entry(path: str) -> DeletionResult:
        """Delete one entry, converting errors into a failed result."""
        try:
            remove_path(path)
        except FileNotFoundError:
            # Removed by someone else in the meantime
            return DeletionResult(path=path, success=True)
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path, e)
            return DeletionResult(path=path, success=False, error=str(e))
        logger.debug("Deleted %s", path)
        return DeletionResult(path=path, success=True)

    @staticmethod
    def _finish(path: str, results: list[DeletionResult]) -> CleanupReport:
        report = CleanupReport(path=path, results=tuple(results))
        if report.failure_count:
            logger.warning(
                "Cleanup of %s: %d deleted, %d failed",
                path,
                report.success_count,
                report.failure_count,
            )
        else:
            logger.info("Cleanup of %s: %d deleted", path, report.success_count)
        return report

"""Storage root resolution.

Maps each StorageRoot onto an XDG location and creates the backing
directory with the root's protection class on first use. Resolved paths
are cached, so a resolver hands out exactly one path per root.

Layout:
    documents               $XDG_DATA_HOME/<app_name>
    library                 $XDG_STATE_HOME/<app_name>
    shared-data             $XDG_DATA_HOME/<group_identifier>
    caches                  $XDG_CACHE_HOME/<app_name>
    temp-after-first-auth   <temp base>/<app_name>
    temp                    <temp base>/<app_name>/<app_name>_temp_<run_id>
"""

import contextlib
import logging
import os
import tempfile
import time
import uuid
from pathlib import Path

from fsguard.core.config import StorageConfig
from fsguard.core.paths import get_cache_home, get_data_home, get_state_home
from fsguard.models.storage import (
    DEFAULT_ROOT_POLICIES,
    ProtectionClass,
    StorageRoot,
    StorageRootPolicy,
)
from fsguard.storage.exceptions import DirectoryUnavailableError, StorageError
from fsguard.storage.fileops import SafeFileOps

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves and caches storage roots for one process run.

    Each resolver carries a run identifier that names its temporary
    directory, and the time it was created, which marks the launch of the
    current run.

    Attributes:
        config: Storage configuration.
        file_ops: Operations used to create and protect root directories.
        run_id: Identifier of the current run.
        launch_time: Creation time of this resolver (seconds since epoch).
    """

    def __init__(
        self,
        config: StorageConfig | None = None,
        file_ops: SafeFileOps | None = None,
        *,
        run_id: str | None = None,
        policies: dict[StorageRoot, StorageRootPolicy] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Storage configuration. If None, uses defaults.
            file_ops: File operations. If None, built from config.
            run_id: Identifier of this run. If None, a random one is generated.
            policies: Per-root policy overrides.
        """
        self.config = config or StorageConfig()
        self.file_ops = file_ops or SafeFileOps(config=self.config)
        self.run_id = run_id or uuid.uuid4().hex
        self.launch_time = time.time()
        self._policies = {**DEFAULT_ROOT_POLICIES, **(policies or {})}
        self._resolved: dict[StorageRoot, str] = {}

    @property
    def temp_dir_prefix(self) -> str:
        """Name prefix shared by every run's temporary directory."""
        return f"{self.config.app_name}_temp_"

    @property
    def current_temp_dir_name(self) -> str:
        """Name of this run's temporary directory."""
        return f"{self.temp_dir_prefix}{self.run_id}"

    def resolve(self, root: StorageRoot) -> str:
        """Return the absolute path of a storage root, creating it if needed.

        Args:
            root: Storage root to resolve.

        Returns:
            Absolute directory path; identical for every call on this resolver.

        Raises:
            DirectoryUnavailableError: If the base directory cannot be
                determined or the root cannot be created.
        """
        cached = self._resolved.get(root)
        if cached is not None:
            return cached

        policy = self._policies[root]
        path = self._location(root)

        if not os.path.isdir(path):
            if not policy.create_if_missing:
                msg = f"Storage root '{root.value}' does not exist: {path}"
                raise DirectoryUnavailableError(msg, path)
            if os.path.lexists(path):
                msg = f"Storage root '{root.value}' is occupied by a non-directory: {path}"
                raise DirectoryUnavailableError(msg, path)

        protection = policy.protection or self.config.default_protection
        if not self.file_ops.ensure_directory_exists(path, protection):
            msg = f"Cannot create storage root '{root.value}' at {path}"
            raise DirectoryUnavailableError(msg, path)

        logger.debug("Resolved %s to %s", root.value, path)
        self._resolved[root] = path
        return path

    def temporary_directory(self) -> str:
        """Per-run temporary directory, inaccessible while the device is locked."""
        return self.resolve(StorageRoot.TEMP)

    def temporary_directory_accessible_after_first_auth(self) -> str:
        """Temporary root that stays accessible after the first unlock."""
        return self.resolve(StorageRoot.TEMP_AFTER_FIRST_AUTH)

    def app_document_directory_path(self) -> str:
        """Directory for user-visible application data."""
        return self.resolve(StorageRoot.DOCUMENTS)

    def app_library_directory_path(self) -> str:
        """Directory for application support data."""
        return self.resolve(StorageRoot.LIBRARY)

    def app_shared_data_directory_path(self) -> str:
        """Directory shared by the processes of the configured group."""
        return self.resolve(StorageRoot.SHARED_DATA)

    def app_shared_data_directory_url(self) -> str:
        """Shared-data directory as a ``file://`` URL."""
        return Path(self.app_shared_data_directory_path()).as_uri()

    def caches_directory_path(self) -> str:
        """Directory for regenerable cache data."""
        return self.resolve(StorageRoot.CACHES)

    def temporary_file_path(self, extension: str | None = None) -> str:
        """Return a fresh path inside the per-run temporary directory.

        The file itself is not created.

        Args:
            extension: Optional file extension, with or without leading dot.

        Returns:
            Absolute path to a file that does not exist yet.
        """
        name = uuid.uuid4().hex
        if extension:
            name = f"{name}.{extension.lstrip('.')}"
        return os.path.join(self.temporary_directory(), name)

    def write_data_to_temporary_file(self, data: bytes, extension: str | None = None) -> str:
        """Write bytes to a new file in the per-run temporary directory.

        Args:
            data: Content to write.
            extension: Optional file extension.

        Returns:
            Path of the written file.

        Raises:
            StorageError: If the file cannot be written or protected. A file
                that cannot be protected is removed again.
        """
        path = self.temporary_file_path(extension)
        try:
            with open(path, "xb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Failed to write temporary file {path}: {e}", path) from e

        try:
            self.file_ops.protection_manager.protect(path, ProtectionClass.COMPLETE_UNLESS_OPEN)
        except StorageError:
            # Unprotected data must not outlive the failed call
            with contextlib.suppress(FileNotFoundError):
                os.unlink(path)
            raise
        return path

    def _location(self, root: StorageRoot) -> str:
        """Compute the location of a root without touching the filesystem.

        Raises:
            DirectoryUnavailableError: If the base directory is unknown.
        """
        app_name = self.config.app_name
        try:
            if root == StorageRoot.DOCUMENTS:
                path = get_data_home() / app_name
            elif root == StorageRoot.LIBRARY:
                path = get_state_home() / app_name
            elif root == StorageRoot.CACHES:
                path = get_cache_home() / app_name
            elif root == StorageRoot.SHARED_DATA:
                group = self.config.group_identifier
                if not group:
                    msg = "Shared data requires a group_identifier in the configuration"
                    raise DirectoryUnavailableError(msg)
                path = get_data_home() / group
            elif root == StorageRoot.TEMP_AFTER_FIRST_AUTH:
                path = self._temp_base() / app_name
            else:
                # Nested under the after-first-auth root so stale runs can be found
                parent = self.temporary_directory_accessible_after_first_auth()
                path = Path(parent) / self.current_temp_dir_name
        except RuntimeError as e:
            msg = f"Cannot determine base directory for '{root.value}': {e}"
            raise DirectoryUnavailableError(msg) from e
        return os.path.abspath(path)

    def _temp_base(self) -> Path:
        """Base temporary directory (configured or system default)."""
        if self.config.temp_base_dir is not None:
            return self.config.temp_base_dir
        return Path(tempfile.gettempdir())

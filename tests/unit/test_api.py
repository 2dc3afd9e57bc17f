"""Unit tests for the module-level storage functions."""

import os
import time
from collections.abc import Iterator
from pathlib import Path

import pytest
from fsguard import api
from fsguard.core.config import StorageConfig
from fsguard.models.storage import ProtectionClass
from fsguard.storage.protection import NoOpProtectionManager


@pytest.fixture(autouse=True)
def fresh_context() -> Iterator[None]:
    """Drop the process-wide context before and after each test."""
    api.reset_context()
    yield
    api.reset_context()


@pytest.fixture
def configured(xdg_home: Path, storage_config: StorageConfig) -> api.StorageContext:
    """Process-wide context built from the test configuration."""
    return api.configure(storage_config)


class TestContext:
    """Tests for context management."""

    def test_configure_replaces_context(self, configured: api.StorageContext) -> None:
        """configure installs the context used by later calls."""
        assert api.get_context() is configured

    def test_context_cached(self, configured: api.StorageContext) -> None:
        """The same context is returned until reset."""
        assert api.get_context() is api.get_context()

    def test_configure_starts_new_run(
        self, configured: api.StorageContext, storage_config: StorageConfig
    ) -> None:
        """A new configuration means a new run and temp directory."""
        first_temp = api.temporary_directory()

        api.configure(storage_config)

        assert api.temporary_directory() != first_temp

    def test_lazy_build_from_config_file(self, xdg_home: Path) -> None:
        """Without configure, the config file (or defaults) is used."""
        config_dir = xdg_home / ".config" / "fsguard"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text(
            'app_name = "lazyapp"\nprotection_backend = "none"\n'
        )

        context = api.get_context()

        assert context.config.app_name == "lazyapp"
        assert isinstance(context.protection, NoOpProtectionManager)

    def test_components_share_backend(self, configured: api.StorageContext) -> None:
        """File operations use the context's protection backend."""
        assert configured.file_ops.protection_manager is configured.protection
        assert configured.resolver.file_ops is configured.file_ops


class TestRoots:
    """Tests for the storage root functions."""

    def test_all_roots_resolve(self, configured: api.StorageContext, xdg_home: Path) -> None:
        """Every root resolves to an existing directory."""
        paths = [
            api.temporary_directory(),
            api.temporary_directory_accessible_after_first_auth(),
            api.app_document_directory_path(),
            api.app_library_directory_path(),
            api.app_shared_data_directory_path(),
            api.caches_directory_path(),
        ]

        assert len(set(paths)) == 6
        assert all(Path(p).is_dir() for p in paths)

    def test_shared_data_url(self, configured: api.StorageContext) -> None:
        """The shared-data URL is a file URL."""
        assert api.app_shared_data_directory_url().startswith("file://")

    def test_write_data_to_temporary_file(self, configured: api.StorageContext) -> None:
        """Data lands in the per-run temp directory."""
        path = api.write_data_to_temporary_file(b"abc", "txt")

        assert Path(path).parent == Path(api.temporary_directory())
        assert api.file_size_of_path(path) == 3


class TestFileFunctions:
    """Tests for the file operation functions."""

    def test_ensure_and_move(self, configured: api.StorageContext, tmp_path: Path) -> None:
        """Created files can be moved and measured."""
        folder = tmp_path / "work"
        assert api.ensure_directory_exists(folder)
        assert api.ensure_file_exists(folder / "a.db", ProtectionClass.COMPLETE)

        api.move_file_path(folder / "a.db", folder / "b.db")

        assert api.file_size_of_path(folder / "a.db") is None
        assert api.file_size_of_path(folder / "b.db") == 0
        assert api.file_size_of_url((folder / "b.db").as_uri()) == 0

    def test_rename_and_migrate(self, configured: api.StorageContext, tmp_path: Path) -> None:
        """Random renames and migrations go through the shared file ops."""
        target = tmp_path / "store.db"
        target.write_text("old")

        retired = api.rename_file_path_using_random_extension(target)
        moved_aside = api.migrate_file_path(retired, target)

        assert moved_aside is None
        assert target.read_text() == "old"

    def test_listing_and_deletion(self, configured: api.StorageContext, tmp_path: Path) -> None:
        """Files can be listed and deleted."""
        (tmp_path / "d").mkdir()
        (tmp_path / "d" / "f").write_text("x")

        assert api.all_files_in_directory_recursive(tmp_path / "d") == [str(tmp_path / "d" / "f")]
        assert api.delete_file(tmp_path / "d" / "f") is True
        assert api.delete_file_if_exists(tmp_path / "d" / "f") is True

    def test_protection_functions(self, configured: api.StorageContext, tmp_path: Path) -> None:
        """Protection functions delegate to the configured backend."""
        (tmp_path / "f").write_text("x")

        api.protect_file_or_folder(tmp_path / "f")
        report = api.protect_recursive_contents(tmp_path)

        assert report.fully_succeeded


class TestCleanupFunctions:
    """Tests for the cleanup functions."""

    def test_delete_contents(self, configured: api.StorageContext, tmp_path: Path) -> None:
        """delete_contents_of_directory empties the directory."""
        work = tmp_path / "work"
        work.mkdir()
        (work / "f").write_text("x")

        report = api.delete_contents_of_directory(work)

        assert report.deleted_paths == [str(work / "f")]

    def test_clear_old_temporary_directories(
        self, configured: api.StorageContext, storage_config: StorageConfig
    ) -> None:
        """A later run purges the temp directory of an earlier one."""
        earlier = api.temporary_directory()
        old = time.time() - 3600
        os.utime(earlier, (old, old))

        api.configure(storage_config)
        current = api.temporary_directory()
        report = api.clear_old_temporary_directories()

        assert report.deleted_paths == [earlier]
        assert Path(current).is_dir()

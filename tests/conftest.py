"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from pathlib import Path

# Rich sizes its module-level consoles from COLUMNS at import time; use a wide
# terminal so long tmp paths in CLI output are not line-wrapped.
os.environ["COLUMNS"] = "200"

import pytest
from fsguard.core.config import StorageConfig
from fsguard.storage.fileops import SafeFileOps
from fsguard.storage.protection import NoOpProtectionManager
from fsguard.storage.resolver import PathResolver


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every XDG base directory into a temporary home."""
    home = tmp_path / "home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / ".cache"))
    return home


@pytest.fixture
def storage_config(tmp_path: Path) -> StorageConfig:
    """Storage config with a private temporary base and a shared-data group."""
    return StorageConfig(
        app_name="testapp",
        group_identifier="group.test",
        protection_backend="none",
        temp_base_dir=tmp_path / "tmp",
    )


@pytest.fixture
def noop_protection() -> NoOpProtectionManager:
    """Protection backend that only checks existence."""
    return NoOpProtectionManager()


@pytest.fixture
def file_ops(
    noop_protection: NoOpProtectionManager,
    storage_config: StorageConfig,
) -> SafeFileOps:
    """SafeFileOps wired to the no-op protection backend."""
    return SafeFileOps(noop_protection, storage_config)


@pytest.fixture
def resolver(
    xdg_home: Path,
    storage_config: StorageConfig,
    file_ops: SafeFileOps,
) -> PathResolver:
    """PathResolver rooted in the temporary XDG home."""
    return PathResolver(storage_config, file_ops, run_id="currentrun")


@pytest.fixture
def config_file(tmp_path: Path, xdg_home: Path) -> Path:
    """Config file for CLI tests, kept out of the real home and /tmp."""
    path = tmp_path / "fsguard.toml"
    path.write_text(
        'app_name = "testapp"\n'
        'group_identifier = "group.test"\n'
        'protection_backend = "none"\n'
        f'temp_base_dir = "{tmp_path / "tmp"}"\n'
    )
    return path

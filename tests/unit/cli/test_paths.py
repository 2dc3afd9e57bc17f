"""Unit tests for the paths command."""

import json
from pathlib import Path

from fsguard.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestPathsShow:
    """Tests for fsguard paths show."""

    def test_table_lists_all_roots(self, config_file: Path) -> None:
        """Every root appears in the table."""
        result = runner.invoke(app, ["--config", str(config_file), "paths", "show"])

        assert result.exit_code == 0
        assert "Storage Roots" in result.stdout
        for root in ("documents", "library", "shared-data", "caches"):
            assert root in result.stdout

    def test_json_output(self, config_file: Path, xdg_home: Path, tmp_path: Path) -> None:
        """JSON output maps each root to its resolved path."""
        result = runner.invoke(
            app, ["--config", str(config_file), "paths", "show", "--format", "json"]
        )

        assert result.exit_code == 0
        rows = {row["root"]: row for row in json.loads(result.stdout)}
        assert rows["caches"]["path"] == str(xdg_home / ".cache" / "testapp")
        assert rows["temp-after-first-auth"]["path"] == str(tmp_path / "tmp" / "testapp")
        assert rows["temp"]["path"].startswith(str(tmp_path / "tmp" / "testapp" / "testapp_temp_"))
        assert all(row["error"] is None for row in rows.values())

    def test_unavailable_root_reported(self, tmp_path: Path, xdg_home: Path) -> None:
        """A root that cannot be resolved is shown with its error."""
        config_file = tmp_path / "nogroup.toml"
        config_file.write_text(
            f'protection_backend = "none"\ntemp_base_dir = "{tmp_path / "tmp"}"\n'
        )

        result = runner.invoke(
            app, ["--config", str(config_file), "paths", "show", "--format", "json"]
        )

        assert result.exit_code == 0
        rows = {row["root"]: row for row in json.loads(result.stdout)}
        assert rows["shared-data"]["path"] is None
        assert "group_identifier" in rows["shared-data"]["error"]

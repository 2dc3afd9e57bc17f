"""Unit tests for the protect commands."""

from pathlib import Path
from unittest.mock import patch

from fsguard.cli.main import app
from fsguard.models.storage import ProtectionClass
from fsguard.storage.exceptions import PermissionDeniedError
from fsguard.storage.protection import NoOpProtectionManager
from typer.testing import CliRunner

runner = CliRunner()


class TestProtectApply:
    """Tests for fsguard protect apply."""

    def test_apply_single(self, config_file: Path, tmp_path: Path) -> None:
        """Protecting an existing file succeeds."""
        target = tmp_path / "f"
        target.write_text("x")

        with patch.object(NoOpProtectionManager, "protect") as protect:
            result = runner.invoke(
                app,
                [
                    "--config",
                    str(config_file),
                    "protect",
                    "apply",
                    str(target),
                    "--class",
                    "complete",
                ],
            )

        assert result.exit_code == 0
        assert "Protected" in result.stdout
        protect.assert_called_once_with(target, ProtectionClass.COMPLETE)

    def test_apply_uses_default_class(self, config_file: Path, tmp_path: Path) -> None:
        """Without --class the configured default is applied."""
        target = tmp_path / "f"
        target.write_text("x")

        with patch.object(NoOpProtectionManager, "protect") as protect:
            result = runner.invoke(
                app, ["--config", str(config_file), "protect", "apply", str(target)]
            )

        assert result.exit_code == 0
        protect.assert_called_once_with(target, ProtectionClass.COMPLETE_UNTIL_FIRST_AUTH)

    def test_warns_when_unavailable(self, config_file: Path, tmp_path: Path) -> None:
        """The no-op backend is reported as having no effect."""
        result = runner.invoke(
            app, ["--config", str(config_file), "protect", "apply", str(tmp_path)]
        )

        assert result.exit_code == 0
        assert "not supported" in result.output

    def test_missing_path(self, config_file: Path, tmp_path: Path) -> None:
        """A missing path exits with an error."""
        result = runner.invoke(
            app, ["--config", str(config_file), "protect", "apply", str(tmp_path / "missing")]
        )

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_recursive(self, config_file: Path, tmp_path: Path) -> None:
        """--recursive reports how many entries were protected."""
        root = tmp_path / "data"
        root.mkdir()
        (root / "a").write_text("a")
        (root / "b").write_text("b")

        result = runner.invoke(
            app, ["--config", str(config_file), "protect", "apply", str(root), "--recursive"]
        )

        assert result.exit_code == 0
        assert "Protected 3 entries" in result.stdout

    def test_recursive_partial_failure(self, config_file: Path, tmp_path: Path) -> None:
        """A partially failed recursive pass lists failures and exits 1."""
        root = tmp_path / "data"
        root.mkdir()
        (root / "blocked").write_text("x")

        def _protect(self, path, protection_class=None):
            if str(path).endswith("blocked"):
                raise PermissionDeniedError(str(path))

        with patch.object(NoOpProtectionManager, "protect", _protect):
            result = runner.invoke(
                app, ["--config", str(config_file), "protect", "apply", str(root), "-r"]
            )

        assert result.exit_code == 1
        assert "Protection Failures" in result.stdout
        assert "1 failed" in result.output


class TestProtectShow:
    """Tests for fsguard protect show."""

    def test_no_class_recorded(self, config_file: Path, tmp_path: Path) -> None:
        """An entry without a recorded class says so."""
        result = runner.invoke(
            app, ["--config", str(config_file), "protect", "show", str(tmp_path)]
        )

        assert result.exit_code == 0
        assert "no protection class recorded" in result.stdout

    def test_recorded_class(self, config_file: Path, tmp_path: Path) -> None:
        """A recorded class is printed."""
        with patch.object(
            NoOpProtectionManager, "get_protection", return_value=ProtectionClass.COMPLETE
        ):
            result = runner.invoke(
                app, ["--config", str(config_file), "protect", "show", str(tmp_path)]
            )

        assert result.exit_code == 0
        assert "complete" in result.stdout

    def test_missing_path(self, config_file: Path, tmp_path: Path) -> None:
        """A missing path exits with an error."""
        result = runner.invoke(
            app, ["--config", str(config_file), "protect", "show", str(tmp_path / "missing")]
        )

        assert result.exit_code == 1

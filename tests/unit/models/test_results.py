"""Unit tests for storage result models.

Tests for per-entry results and the aggregate reports built from them.
"""

import dataclasses

import pytest
from fsguard.models.results import (
    CleanupReport,
    DeletionResult,
    ProtectionReport,
    ProtectionResult,
)


class TestProtectionReport:
    """Tests for ProtectionReport."""

    def test_empty_report_succeeded(self) -> None:
        """A report with no results counts as fully succeeded."""
        report = ProtectionReport(path="/data")

        assert report.fully_succeeded is True
        assert report.success_count == 0
        assert report.failure_count == 0
        assert report.failures == []

    def test_counts_mixed_results(self) -> None:
        """Success and failure counts reflect the individual results."""
        report = ProtectionReport(
            path="/data",
            results=(
                ProtectionResult(path="/data", success=True),
                ProtectionResult(path="/data/a", success=False, error="denied"),
                ProtectionResult(path="/data/b", success=True),
            ),
        )

        assert report.fully_succeeded is False
        assert report.success_count == 2
        assert report.failure_count == 1
        assert [f.path for f in report.failures] == ["/data/a"]

    def test_is_frozen(self) -> None:
        """Reports are immutable."""
        report = ProtectionReport(path="/data")

        with pytest.raises(dataclasses.FrozenInstanceError):
            report.path = "/other"  # type: ignore[misc]


class TestCleanupReport:
    """Tests for CleanupReport."""

    def test_deleted_paths(self) -> None:
        """deleted_paths lists only successful deletions."""
        report = CleanupReport(
            path="/tmp/app",
            results=(
                DeletionResult(path="/tmp/app/a", success=True),
                DeletionResult(path="/tmp/app/b", success=False, error="busy"),
            ),
        )

        assert report.deleted_paths == ["/tmp/app/a"]
        assert report.failures[0].error == "busy"
        assert report.fully_succeeded is False

    def test_result_defaults(self) -> None:
        """A result without an error has error None."""
        result = DeletionResult(path="/x", success=True)

        assert result.error is None

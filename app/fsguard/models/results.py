"""Results and aggregate reports for storage operations.

Best-effort bulk operations return one result per visited entry, wrapped
in a report that exposes the aggregate outcome.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProtectionResult:
    """Result of protecting a single filesystem entry.

    Attributes:
        path: Path that was protected.
        success: Whether the protection class was applied.
        error: Error message if the operation failed, None otherwise.
    """

    path: str
    success: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of deleting a single filesystem entry.

    Attributes:
        path: Path that was deleted.
        success: Whether the entry was removed.
        error: Error message if the operation failed, None otherwise.
    """

    path: str
    success: bool
    error: str | None = None


class _AggregateMixin:
    """Shared counters for aggregate reports."""

    results: tuple[ProtectionResult, ...] | tuple[DeletionResult, ...]

    @property
    def fully_succeeded(self) -> bool:
        """Check if every item succeeded (True for an empty report)."""
        return all(r.success for r in self.results)

    @property
    def success_count(self) -> int:
        """Number of items that succeeded."""
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        """Number of items that failed."""
        return sum(1 for r in self.results if not r.success)


@dataclass(frozen=True, slots=True)
class ProtectionReport(_AggregateMixin):
    """Aggregate outcome of a recursive protection pass.

    Attributes:
        path: Root of the protected tree.
        results: One result per entry that was visited.
    """

    path: str
    results: tuple[ProtectionResult, ...] = ()

    @property
    def failures(self) -> list[ProtectionResult]:
        """Results for entries that could not be protected."""
        return [r for r in self.results if not r.success]


@dataclass(frozen=True, slots=True)
class CleanupReport(_AggregateMixin):
    """Aggregate outcome of a best-effort cleanup.

    Attributes:
        path: Directory that was cleaned.
        results: One result per entry that deletion was attempted on.
    """

    path: str
    results: tuple[DeletionResult, ...] = ()

    @property
    def failures(self) -> list[DeletionResult]:
        """Results for entries that could not be deleted."""
        return [r for r in self.results if not r.success]

    @property
    def deleted_paths(self) -> list[str]:
        """Paths that were removed."""
        return [r.path for r in self.results if r.success]

"""Sweep domain models.

Data structures passed between the walker, the worker pool, the
result aggregator, and the caller of a folder sweep.
"""

from dataclasses import dataclass, field
from enum import Enum

from antiquarantine.sweep.errors import SweepFailedError, TraversalError


class EventKind(str, Enum):
    """What a worker reports for a path that carries the attribute.

    Attributes:
        FOUND: The attribute is present (list mode).
        REMOVED: The attribute has been removed (remove mode).
    """

    FOUND = "found"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class SweepEvent:
    """One line of sweep output.

    Attributes:
        path: Path the event refers to.
        kind: Whether the attribute was found or removed.
    """

    path: str
    kind: EventKind


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """A per-path failure recorded during a sweep.

    Attributes:
        path: Path whose probe or removal failed.
        message: Failure description.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(slots=True)
class SweepStats:
    """Counters for one sweep (or one worker's share of it).

    Attributes:
        probed: Paths whose attribute was probed.
        present: Paths that carried the attribute.
        removed: Paths the attribute was removed from.
        failed: Paths whose probe or removal failed.
    """

    probed: int = 0
    present: int = 0
    removed: int = 0
    failed: int = 0

    def merge(self, other: "SweepStats") -> None:
        """Add another set of counters to this one."""
        self.probed += other.probed
        self.present += other.present
        self.removed += other.removed
        self.failed += other.failed


@dataclass(frozen=True, slots=True)
class RunResult:
    """Aggregate outcome of a folder sweep.

    Attributes:
        errors: Per-path failures, in recording order.
        stats: Merged worker counters.
        walk_error: Error that stopped the traversal early, if any.
        skipped: Entries the walker could not read and skipped.
    """

    errors: tuple[ErrorRecord, ...] = ()
    stats: SweepStats = field(default_factory=SweepStats)
    walk_error: TraversalError | None = None
    skipped: int = 0

    @property
    def ok(self) -> bool:
        """True when the walk completed and no path failed."""
        return self.walk_error is None and not self.errors

    def raise_for_errors(self) -> None:
        """Raise the primary error of this sweep, if there is one.

        A traversal error takes precedence over per-path failures; the
        failures stay available on ``errors`` either way.

        Raises:
            TraversalError: If the walk stopped early.
            SweepFailedError: If any path failed.
        """
        if self.walk_error is not None:
            raise self.walk_error
        if self.errors:
            raise SweepFailedError(self.errors)

"""Thread-safe collection of sweep results.

Workers append failures and hand over their counters here; the sweep
driver reads everything exactly once after all workers have finished.
"""

import logging
import threading

from antiquarantine.sweep.errors import TraversalError
from antiquarantine.sweep.models import ErrorRecord, RunResult, SweepStats

logger = logging.getLogger(__name__)


class ResultAggregator:
    """Append-only, lock-guarded store of per-path failures and counters.

    Once result() has been called the aggregator is sealed and any
    further mutation raises RuntimeError.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[ErrorRecord] = []
        self._stats = SweepStats()
        self._sealed = False

    def record(self, path: str, message: str) -> ErrorRecord:
        """Append a failure for a path.

        Args:
            path: Path whose probe or removal failed.
            message: Failure description.

        Returns:
            The stored ErrorRecord.

        Raises:
            RuntimeError: If the aggregator has been sealed.
        """
        record = ErrorRecord(path=path, message=message)
        with self._lock:
            self._check_open()
            self._records.append(record)
        logger.debug("Recorded failure %s", record)
        return record

    def merge_stats(self, stats: SweepStats) -> None:
        """Add a worker's counters to the sweep totals.

        Raises:
            RuntimeError: If the aggregator has been sealed.
        """
        with self._lock:
            self._check_open()
            self._stats.merge(stats)

    @property
    def error_count(self) -> int:
        """Number of failures recorded so far."""
        with self._lock:
            return len(self._records)

    def result(self, walk_error: TraversalError | None = None, skipped: int = 0) -> RunResult:
        """Seal the aggregator and build the sweep result.

        Args:
            walk_error: Error that stopped the traversal, if any.
            skipped: Number of entries the walker skipped.

        Returns:
            RunResult with every recorded failure.

        Raises:
            RuntimeError: If called more than once.
        """
        with self._lock:
            self._check_open()
            self._sealed = True
            stats = SweepStats()
            stats.merge(self._stats)
            return RunResult(
                errors=tuple(self._records),
                stats=stats,
                walk_error=walk_error,
                skipped=skipped,
            )

    def _check_open(self) -> None:
        if self._sealed:
            msg = "Sweep results have already been collected"
            raise RuntimeError(msg)

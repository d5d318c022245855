"""Worker pool that probes (and optionally clears) queued paths.

Each worker drains the shared WorkQueue until it is closed and empty.
A failing path is recorded and the worker moves on; nothing a single
path does can stop the other workers.
"""

import logging
import os
import threading
from collections.abc import Callable

from antiquarantine.attributes.errors import AttributeProbeError
from antiquarantine.attributes.models import AttributeState
from antiquarantine.attributes.probe import AttributeProbe
from antiquarantine.sweep.models import EventKind, SweepEvent, SweepStats
from antiquarantine.sweep.results import ResultAggregator
from antiquarantine.sweep.work_queue import WorkQueue

logger = logging.getLogger(__name__)

EventSink = Callable[[SweepEvent], None]


def default_worker_count() -> int:
    """Number of CPUs available to the process, at least 1."""
    return max(1, os.cpu_count() or 1)


class WorkerPool:
    """Fixed set of threads that process paths from a WorkQueue.

    Per path, the attribute is probed; present attributes are reported
    through ``emit`` (list mode) or removed and then reported (remove
    mode). Calls to ``emit`` are serialized, so a sink that prints one
    line per event never interleaves partial lines.

    Args:
        probe: Probe used for attribute access.
        attribute: Attribute name.
        work_queue: Source of paths.
        aggregator: Destination for failures and counters.
        remove: Remove the attribute instead of only reporting it.
        workers: Number of threads. Defaults to the CPU count.
        emit: Callback invoked for every found or removed path.

    Raises:
        ValueError: If workers is less than 1.
    """

    def __init__(
        self,
        probe: AttributeProbe,
        attribute: str,
        work_queue: WorkQueue,
        aggregator: ResultAggregator,
        *,
        remove: bool = False,
        workers: int | None = None,
        emit: EventSink | None = None,
    ) -> None:
        size = default_worker_count() if workers is None else workers
        if size < 1:
            msg = f"Worker count must be at least 1, got {size}"
            raise ValueError(msg)

        self._probe = probe
        self._attribute = attribute
        self._queue = work_queue
        self._aggregator = aggregator
        self._remove = remove
        self._size = size
        self._emit = emit
        self._emit_lock = threading.Lock()
        self._threads: list[threading.Thread] = []

    @property
    def size(self) -> int:
        """Number of worker threads."""
        return self._size

    def start(self) -> None:
        """Start the worker threads.

        Raises:
            RuntimeError: If the pool has already been started.
        """
        if self._threads:
            msg = "WorkerPool has already been started"
            raise RuntimeError(msg)
        for idx in range(self._size):
            thread = threading.Thread(target=self._worker, name=f"aq-worker-{idx + 1}", daemon=True)
            thread.start()
            self._threads.append(thread)
        logger.debug("Started %d workers", self._size)

    def join(self) -> None:
        """Wait until every worker has drained the closed queue."""
        for thread in self._threads:
            thread.join()

    def _worker(self) -> None:
        stats = SweepStats()
        try:
            while True:
                path = self._queue.get()
                if path is None:
                    break
                try:
                    self._process(path, stats)
                except Exception as e:
                    logger.exception("Unexpected error processing %s", path)
                    stats.failed += 1
                    self._aggregator.record(path, f"unexpected error: {e}")
        finally:
            self._aggregator.merge_stats(stats)

    def _process(self, path: str, stats: SweepStats) -> None:
        """Probe one path and act on the result."""
        stats.probed += 1
        try:
            state = self._probe.probe(path, self._attribute)
        except AttributeProbeError as e:
            self._fail(path, f"error checking attribute: {e.cause}", stats)
            return

        if state is AttributeState.ABSENT:
            return

        stats.present += 1
        if not self._remove:
            self._publish(SweepEvent(path=path, kind=EventKind.FOUND))
            return

        try:
            self._probe.remove(path, self._attribute)
        except AttributeProbeError as e:
            self._fail(path, f"failed to remove attribute: {e.cause}", stats)
            return

        stats.removed += 1
        self._publish(SweepEvent(path=path, kind=EventKind.REMOVED))

    def _fail(self, path: str, message: str, stats: SweepStats) -> None:
        stats.failed += 1
        self._aggregator.record(path, message)

    def _publish(self, event: SweepEvent) -> None:
        if self._emit is None:
            return
        with self._emit_lock:
            self._emit(event)

"""Folder sweep driver.

Wires the tree walker, the bounded work queue, the worker pool, and the
result aggregator together for one folder-mode run:

    walker thread --put--> WorkQueue --get--> N worker threads --> aggregator

The walker thread closes the queue when the walk ends, for whatever
reason; the workers then drain what is left and exit. The driver joins
both sides before reading the aggregated result.
"""

import logging
import os
import threading

from antiquarantine.attributes.probe import AttributeProbe, get_default_probe
from antiquarantine.sweep.errors import TraversalError
from antiquarantine.sweep.models import RunResult
from antiquarantine.sweep.pool import EventSink, WorkerPool, default_worker_count
from antiquarantine.sweep.results import ResultAggregator
from antiquarantine.sweep.walker import TreeWalker
from antiquarantine.sweep.work_queue import WorkQueue

logger = logging.getLogger(__name__)

# Default queue capacity is this many pending paths per worker
QUEUE_SLOTS_PER_WORKER = 64


def run_sweep(
    root: str | os.PathLike[str],
    attribute: str,
    *,
    remove: bool = False,
    probe: AttributeProbe | None = None,
    workers: int | None = None,
    queue_capacity: int | None = None,
    emit: EventSink | None = None,
) -> RunResult:
    """Find, and optionally remove, an attribute on every path under root.

    Args:
        root: Directory to sweep. Subtrees on other filesystems are pruned.
        attribute: Attribute name.
        remove: Remove the attribute instead of only listing it.
        probe: Probe used for attribute access. Defaults to the host probe.
        workers: Worker thread count. Defaults to the CPU count.
        queue_capacity: Pending path capacity. Defaults to
            ``QUEUE_SLOTS_PER_WORKER`` per worker.
        emit: Callback invoked for every found or removed path.

    Returns:
        RunResult with every per-path failure and the sweep counters.

    Raises:
        TraversalError: If the root cannot be resolved; nothing is started.
        ProbeUnavailableError: If no probe is given and the host has none.
    """
    walker = TreeWalker(root)
    walker.resolve_root()

    attribute_probe = probe or get_default_probe()
    pool_size = default_worker_count() if workers is None else workers
    capacity = queue_capacity or pool_size * QUEUE_SLOTS_PER_WORKER

    work_queue = WorkQueue(capacity)
    aggregator = ResultAggregator()
    pool = WorkerPool(
        attribute_probe,
        attribute,
        work_queue,
        aggregator,
        remove=remove,
        workers=pool_size,
        emit=emit,
    )

    walk_errors: list[TraversalError] = []

    def _feed() -> None:
        try:
            for path in walker.walk():
                work_queue.put(path)
        except TraversalError as e:
            walk_errors.append(e)
        except Exception as e:
            logger.exception("Walk of %s stopped unexpectedly", walker.root)
            walk_errors.append(TraversalError(walker.root, str(e)))
        finally:
            work_queue.close()

    logger.debug(
        "Sweeping %s for %s (remove=%s, workers=%d, capacity=%d)",
        walker.root,
        attribute,
        remove,
        pool_size,
        capacity,
    )
    pool.start()
    feeder = threading.Thread(target=_feed, name="aq-walker", daemon=True)
    feeder.start()
    feeder.join()
    pool.join()

    result = aggregator.result(
        walk_error=walk_errors[0] if walk_errors else None,
        skipped=walker.skipped,
    )
    logger.debug(
        "Sweep finished: %d probed, %d present, %d removed, %d failed, %d skipped",
        result.stats.probed,
        result.stats.present,
        result.stats.removed,
        result.stats.failed,
        result.skipped,
    )
    return result

"""Concurrent, filesystem-boundary-aware attribute sweeps.

This module provides the tree walker, the bounded work queue, the
worker pool, the result aggregator, and the run_sweep driver that
combines them.
"""

from antiquarantine.sweep.device import device_of
from antiquarantine.sweep.errors import (
    BoundaryError,
    SweepError,
    SweepFailedError,
    TraversalError,
)
from antiquarantine.sweep.models import (
    ErrorRecord,
    EventKind,
    RunResult,
    SweepEvent,
    SweepStats,
)
from antiquarantine.sweep.pool import WorkerPool, default_worker_count
from antiquarantine.sweep.results import ResultAggregator
from antiquarantine.sweep.runner import QUEUE_SLOTS_PER_WORKER, run_sweep
from antiquarantine.sweep.walker import TreeWalker
from antiquarantine.sweep.work_queue import WorkQueue

__all__ = [
    "QUEUE_SLOTS_PER_WORKER",
    "BoundaryError",
    "ErrorRecord",
    "EventKind",
    "ResultAggregator",
    "RunResult",
    "SweepError",
    "SweepEvent",
    "SweepFailedError",
    "SweepStats",
    "TraversalError",
    "TreeWalker",
    "WorkQueue",
    "WorkerPool",
    "default_worker_count",
    "run_sweep",
]

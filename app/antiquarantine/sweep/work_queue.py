"""Bounded work queue between the tree walker and the worker pool.

A thin layer over ``queue.Queue`` that adds an explicit close. The
producer blocks while the queue is full, which keeps the walker at
most ``capacity`` paths ahead of the workers.
"""

import queue
import threading
from typing import cast

# Posted once by close(); each consumer that takes it posts it again
# so that every other consumer sees it too.
_CLOSED = object()


class WorkQueue:
    """Fixed-capacity FIFO of pending paths with graceful shutdown.

    Args:
        capacity: Maximum number of paths waiting for a consumer.

    Raises:
        ValueError: If capacity is less than 1.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            msg = f"Queue capacity must be at least 1, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity)
        self._closed = False
        self._close_lock = threading.Lock()

    @property
    def capacity(self) -> int:
        """Maximum number of pending paths."""
        return self._capacity

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def put(self, path: str) -> None:
        """Enqueue a path, blocking while the queue is full.

        Raises:
            RuntimeError: If the queue has been closed.
        """
        if self._closed:
            msg = "Cannot put into a closed WorkQueue"
            raise RuntimeError(msg)
        self._queue.put(path)

    def close(self) -> None:
        """Signal that no more paths will be enqueued.

        Paths already in the queue are still delivered; consumers see
        the end of the queue only after draining them.

        Raises:
            RuntimeError: If the queue is already closed.
        """
        with self._close_lock:
            if self._closed:
                msg = "WorkQueue is already closed"
                raise RuntimeError(msg)
            self._closed = True
        self._queue.put(_CLOSED)

    def get(self) -> str | None:
        """Dequeue the next path, blocking while the queue is empty.

        Returns:
            The next path, or None once the queue is closed and drained.
        """
        item = self._queue.get()
        if item is _CLOSED:
            self._queue.put(_CLOSED)
            return None
        return cast(str, item)

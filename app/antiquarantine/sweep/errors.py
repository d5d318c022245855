"""Exceptions raised by folder sweeps."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antiquarantine.sweep.models import ErrorRecord


class SweepError(Exception):
    """Base exception for folder sweep errors."""


class BoundaryError(SweepError):
    """Raised when the device of a path cannot be determined.

    The walker treats this as a reason to skip the subtree, never to
    abort the sweep.

    Attributes:
        path: Path whose device could not be resolved.
        cause: Underlying error description.
    """

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot determine device of {path}: {cause}")


class TraversalError(SweepError):
    """Raised when the sweep root cannot be resolved or walked at all.

    Attributes:
        path: The sweep root.
        cause: Underlying error description.
    """

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot walk {path}: {cause}")


class SweepFailedError(SweepError):
    """Summary of every per-path failure of a finished sweep.

    Attributes:
        records: The failures, in the order they were recorded.
    """

    def __init__(self, records: tuple[ErrorRecord, ...]) -> None:
        self.records = records
        lines = [f"{len(records)} path(s) failed:"]
        lines.extend(f"  {record}" for record in records)
        super().__init__("\n".join(lines))

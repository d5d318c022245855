"""Device identity resolution for filesystem boundary checks."""

import os

from antiquarantine.sweep.errors import BoundaryError


def device_of(path: str, *, follow_symlinks: bool = False) -> int:
    """Return the identifier of the device a path resides on.

    Args:
        path: Path to stat.
        follow_symlinks: Stat the symlink target instead of the link.

    Returns:
        The ``st_dev`` of the path.

    Raises:
        BoundaryError: If the path cannot be stat'd.
    """
    try:
        return os.stat(path, follow_symlinks=follow_symlinks).st_dev
    except OSError as e:
        raise BoundaryError(path, e.strerror or str(e)) from e

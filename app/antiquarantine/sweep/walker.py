"""Boundary-aware directory tree walker.

Walks a tree depth-first in pre-order and yields every path it visits,
files and directories alike, without following symlinks. The walk never
crosses onto another filesystem: a directory that lives on a different
device than the root is still yielded (its own attributes sit on the
mount point), but its contents are not.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from antiquarantine.sweep.device import device_of
from antiquarantine.sweep.errors import BoundaryError, TraversalError

logger = logging.getLogger(__name__)


class TreeWalker:
    """Depth-first, pre-order walker that stays on the root's filesystem.

    Unreadable entries are logged and skipped; the walk itself only fails
    when the root cannot be resolved or listed.

    Args:
        root: Directory (or single path) to walk.

    Attributes:
        skipped: Entries skipped because they could not be read or stat'd.
        pruned: Directories whose contents were not walked because they
            are on another device.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self._root = os.fspath(root)
        self._root_device: int | None = None
        self.skipped = 0
        self.pruned = 0

    @property
    def root(self) -> str:
        """The path the walk starts from."""
        return self._root

    def resolve_root(self) -> int:
        """Resolve the device of the root.

        A root given as a symlink is followed so that ``aq scan link``
        walks the directory the link points to.

        Returns:
            The root device identifier.

        Raises:
            TraversalError: If the root cannot be stat'd.
        """
        if self._root_device is None:
            try:
                self._root_device = device_of(self._root, follow_symlinks=True)
            except BoundaryError as e:
                raise TraversalError(self._root, e.cause) from e
        return self._root_device

    def walk(self) -> Iterator[str]:
        """Yield every path under the root, the root first.

        Children are yielded in the order the operating system lists
        them, each subdirectory completely before its next sibling.

        Yields:
            Paths joined onto the root as given.

        Raises:
            TraversalError: If the root cannot be resolved or listed.
        """
        root_device = self.resolve_root()
        yield self._root

        if not os.path.isdir(self._root):
            return

        try:
            root_entries = os.scandir(self._root)
        except OSError as e:
            raise TraversalError(self._root, e.strerror or str(e)) from e

        stack: list[tuple[str, os._ScandirIterator[str]]] = [(self._root, root_entries)]
        try:
            while stack:
                dirpath, entries = stack[-1]
                try:
                    entry = next(entries)
                except StopIteration:
                    stack.pop()
                    entries.close()
                    continue
                except OSError as e:
                    self._skip(dirpath, e.strerror or str(e))
                    stack.pop()
                    entries.close()
                    continue

                path = entry.path
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    self._skip(path, e.strerror or str(e))
                    continue

                if not is_dir:
                    yield path
                    continue

                try:
                    device = device_of(path)
                except BoundaryError as e:
                    self._skip(path, e.cause)
                    continue

                yield path

                if device != root_device:
                    logger.info("Not descending into %s: different filesystem", path)
                    self.pruned += 1
                    continue

                self._push(stack, path)
        finally:
            for _, entries in stack:
                entries.close()

    def _push(self, stack: list[tuple[str, os._ScandirIterator[str]]], path: str) -> None:
        """Open a directory listing and put it on top of the stack."""
        try:
            entries = os.scandir(path)
        except OSError as e:
            self._skip(path, e.strerror or str(e))
            return
        stack.append((path, entries))

    def _skip(self, path: str, cause: str) -> None:
        logger.warning("Skipping %s (access error): %s", path, cause)
        self.skipped += 1

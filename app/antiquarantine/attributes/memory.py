"""In-memory attribute probe.

Stands in for the operating system in tests and when reasoning about
a sweep without touching the filesystem. Paths are compared after
``os.path.normpath`` so ``a/./b`` and ``a/b`` are the same key.
"""

import os
import threading
from collections import Counter
from collections.abc import Iterable

from antiquarantine.attributes.errors import AttributeAccessError, PathNotFoundError
from antiquarantine.attributes.models import AttributeState, RemovalOutcome
from antiquarantine.attributes.probe import AttributeProbe


class MemoryAttributeProbe(AttributeProbe):
    """Attribute probe backed by a ``path -> attribute names`` mapping.

    Args:
        attributes: Initial mapping of paths to the attribute names they carry.
            Every key is an existing path; a path with no attributes maps to
            an empty iterable.
        failures: Paths whose probe and remove calls fail, mapped to the
            failure message.

    Attributes:
        probe_calls: How often each path has been probed.
    """

    def __init__(
        self,
        attributes: dict[str, Iterable[str]] | None = None,
        failures: dict[str, str] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._attributes: dict[str, set[str]] = {
            _key(path): set(names) for path, names in (attributes or {}).items()
        }
        self._failures = {_key(path): cause for path, cause in (failures or {}).items()}
        self.probe_calls: Counter[str] = Counter()

    def add(self, path: str, *names: str) -> None:
        """Register a path and set attributes on it."""
        with self._lock:
            self._attributes.setdefault(_key(path), set()).update(names)

    def names(self, path: str) -> set[str]:
        """Return a copy of the attribute names stored for a path."""
        with self._lock:
            return set(self._attributes.get(_key(path), ()))

    def probe(self, path: str, name: str) -> AttributeState:
        key = _key(path)
        with self._lock:
            self.probe_calls[key] += 1
            names = self._lookup(path, key)
            return AttributeState.PRESENT if name in names else AttributeState.ABSENT

    def remove(self, path: str, name: str) -> RemovalOutcome:
        key = _key(path)
        with self._lock:
            names = self._lookup(path, key)
            if name not in names:
                return RemovalOutcome.ALREADY_ABSENT
            names.discard(name)
            return RemovalOutcome.REMOVED

    def is_available(self) -> bool:
        return True

    def _lookup(self, path: str, key: str) -> set[str]:
        """Return the live attribute set for a path; caller holds the lock."""
        if key in self._failures:
            raise AttributeAccessError(path, self._failures[key])
        if key not in self._attributes:
            raise PathNotFoundError(path, "No such file or directory")
        return self._attributes[key]


def _key(path: str) -> str:
    return os.path.normpath(path)

"""Attribute probes: the only code that touches extended attributes.

An AttributeProbe answers two questions about one (path, name) pair:
does the attribute exist, and can it be removed. Everything above this
layer (single-path commands, the folder sweep) talks to a probe and
never to the operating system directly.
"""

import errno
import logging
import os
import subprocess
from abc import ABC, abstractmethod

from antiquarantine.attributes.errors import (
    AttributeAccessError,
    AttributeProbeError,
    PathNotFoundError,
    ProbeUnavailableError,
)
from antiquarantine.attributes.models import AttributeState, RemovalOutcome
from antiquarantine.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# macOS reports a missing attribute as ENOATTR, Linux as ENODATA
_ABSENT_ERRNOS: frozenset[int] = frozenset(
    {errno.ENODATA, getattr(errno, "ENOATTR", errno.ENODATA)}
)
_NOT_FOUND_ERRNOS: frozenset[int] = frozenset({errno.ENOENT, errno.ENOTDIR})


class AttributeProbe(ABC):
    """Abstract base class for extended attribute access.

    Implementations must be safe to call from several threads at once.

    Example:
        >>> probe = get_default_probe()
        >>> if probe.probe("app.dmg", "com.apple.quarantine") is AttributeState.PRESENT:
        ...     probe.remove("app.dmg", "com.apple.quarantine")
    """

    @abstractmethod
    def probe(self, path: str, name: str) -> AttributeState:
        """Check whether a path carries an attribute.

        Args:
            path: Filesystem path to inspect. Symlinks are not followed.
            name: Attribute name.

        Returns:
            AttributeState.PRESENT or AttributeState.ABSENT.

        Raises:
            PathNotFoundError: If the path does not exist.
            AttributeAccessError: If the attribute cannot be read.
        """

    @abstractmethod
    def remove(self, path: str, name: str) -> RemovalOutcome:
        """Remove an attribute from a path.

        Removing an attribute that is not there is not an error.

        Args:
            path: Filesystem path to modify. Symlinks are not followed.
            name: Attribute name.

        Returns:
            RemovalOutcome.REMOVED or RemovalOutcome.ALREADY_ABSENT.

        Raises:
            PathNotFoundError: If the path does not exist.
            AttributeAccessError: If the attribute cannot be removed.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this probe can be used on the current host.

        Returns:
            True if the probe's primitives exist, False otherwise.
        """


class OsAttributeProbe(AttributeProbe):
    """Probe backed by ``os.getxattr`` and ``os.removexattr``.

    Available on Linux and other platforms where Python exposes the
    xattr system calls.
    """

    def probe(self, path: str, name: str) -> AttributeState:
        try:
            os.getxattr(path, name, follow_symlinks=False)
        except OSError as e:
            if e.errno in _ABSENT_ERRNOS:
                return AttributeState.ABSENT
            raise _translate_os_error(path, e) from e
        return AttributeState.PRESENT

    def remove(self, path: str, name: str) -> RemovalOutcome:
        try:
            os.removexattr(path, name, follow_symlinks=False)
        except OSError as e:
            if e.errno in _ABSENT_ERRNOS:
                return RemovalOutcome.ALREADY_ABSENT
            raise _translate_os_error(path, e) from e
        return RemovalOutcome.REMOVED

    def is_available(self) -> bool:
        return hasattr(os, "getxattr") and hasattr(os, "removexattr")


class XattrCommandProbe(AttributeProbe):
    """Probe backed by the macOS ``xattr`` command.

    CPython on macOS does not expose the xattr system calls, so the
    attribute is inspected by listing attribute names with ``xattr -s``
    and removed with ``xattr -s -d``. Values are never printed.

    Args:
        executable: Name or path of the xattr tool.
        timeout: Maximum seconds to wait for one invocation.
    """

    def __init__(self, executable: str = "xattr", timeout: float = 30.0) -> None:
        self._executable = executable
        self._timeout = timeout

    def probe(self, path: str, name: str) -> AttributeState:
        result = self._run(["-s", path], path)
        if not result.success:
            raise self._failure(path, result)
        names = {line.strip() for line in result.stdout.splitlines()}
        return AttributeState.PRESENT if name in names else AttributeState.ABSENT

    def remove(self, path: str, name: str) -> RemovalOutcome:
        result = self._run(["-s", "-d", name, path], path)
        if result.success:
            return RemovalOutcome.REMOVED
        if "no such xattr" in result.stderr.lower():
            return RemovalOutcome.ALREADY_ABSENT
        raise self._failure(path, result)

    def is_available(self) -> bool:
        return command_exists(self._executable)

    def _run(self, args: list[str], path: str) -> CommandResult:
        """Run the xattr tool, translating launch failures."""
        try:
            return run_command([self._executable, *args], timeout=self._timeout)
        except FileNotFoundError as e:
            raise AttributeAccessError(path, f"{self._executable} command not found") from e
        except subprocess.TimeoutExpired as e:
            raise AttributeAccessError(path, f"{self._executable} timed out") from e
        except OSError as e:
            raise AttributeAccessError(path, str(e)) from e

    @staticmethod
    def _failure(path: str, result: CommandResult) -> AttributeProbeError:
        """Classify a failed xattr invocation by its stderr."""
        message = result.stderr.strip() or f"xattr exited with status {result.returncode}"
        if "no such file" in message.lower():
            return PathNotFoundError(path, message)
        return AttributeAccessError(path, message)


def _translate_os_error(path: str, error: OSError) -> AttributeProbeError:
    """Map an OSError from an xattr call onto the probe error taxonomy."""
    cause = error.strerror or str(error)
    if error.errno in _NOT_FOUND_ERRNOS:
        return PathNotFoundError(path, cause)
    return AttributeAccessError(path, cause)


def get_default_probe() -> AttributeProbe:
    """Return the first attribute probe usable on this host.

    Prefers the system calls and falls back to the ``xattr`` command.

    Returns:
        An available AttributeProbe.

    Raises:
        ProbeUnavailableError: If neither mechanism is available.
    """
    for candidate in (OsAttributeProbe(), XattrCommandProbe()):
        if candidate.is_available():
            logger.debug("Using attribute probe %s", type(candidate).__name__)
            return candidate
    msg = "Extended attributes are not supported on this system (no xattr calls or command)"
    raise ProbeUnavailableError(msg)

"""Single-path attribute operations.

A check or removal on one path is a lookup followed by at most one
probe call; there is no concurrency and no aggregation here. Failures
propagate to the caller immediately.
"""

import logging
import os

from antiquarantine.attributes.errors import PathNotFoundError
from antiquarantine.attributes.models import AttributeState, RemovalOutcome
from antiquarantine.attributes.probe import AttributeProbe

logger = logging.getLogger(__name__)


def ensure_exists(path: str) -> None:
    """Raise PathNotFoundError unless something exists at path.

    A dangling symlink counts as existing; its own attributes are
    still reachable.
    """
    try:
        os.lstat(path)
    except FileNotFoundError as e:
        raise PathNotFoundError(path, e.strerror or "No such file or directory") from e
    except NotADirectoryError as e:
        raise PathNotFoundError(path, e.strerror or "Not a directory") from e


def check_path(path: str, attribute: str, probe: AttributeProbe) -> AttributeState:
    """Report whether a single path carries the attribute.

    Args:
        path: Path to inspect.
        attribute: Attribute name.
        probe: Probe used to access the attribute.

    Returns:
        AttributeState for the path.

    Raises:
        PathNotFoundError: If the path does not exist.
        AttributeAccessError: If the attribute cannot be read.
    """
    ensure_exists(path)
    state = probe.probe(path, attribute)
    logger.debug("%s: %s is %s", path, attribute, state.value)
    return state


def remove_from_path(path: str, attribute: str, probe: AttributeProbe) -> RemovalOutcome:
    """Remove the attribute from a single path.

    Args:
        path: Path to modify.
        attribute: Attribute name.
        probe: Probe used to access the attribute.

    Returns:
        RemovalOutcome; ALREADY_ABSENT when there was nothing to remove.

    Raises:
        PathNotFoundError: If the path does not exist.
        AttributeAccessError: If the attribute cannot be removed.
    """
    ensure_exists(path)
    outcome = probe.remove(path, attribute)
    logger.debug("%s: %s %s", path, attribute, outcome.value)
    return outcome

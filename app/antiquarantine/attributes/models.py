"""Attribute domain models.

Presence of one named extended attribute on one path is the only fact
aq cares about; attribute values are never read.
"""

from enum import Enum


class AttributeState(str, Enum):
    """Outcome of probing a path for an attribute.

    The third arm of the probe result, failure, is an
    AttributeProbeError raised by the probe.

    Attributes:
        PRESENT: The attribute exists on the path.
        ABSENT: The path exists but does not carry the attribute.
    """

    PRESENT = "present"
    ABSENT = "absent"


class RemovalOutcome(str, Enum):
    """Outcome of removing an attribute from a path.

    Both outcomes are successes; callers treat them identically.

    Attributes:
        REMOVED: The attribute was present and has been removed.
        ALREADY_ABSENT: The attribute was not present; nothing changed.
    """

    REMOVED = "removed"
    ALREADY_ABSENT = "already_absent"

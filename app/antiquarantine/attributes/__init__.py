"""Extended attribute access.

This module provides the attribute probe interface and its
implementations, the probe error taxonomy, and single-path
check and remove operations.
"""

from antiquarantine.attributes.errors import (
    AttributeAccessError,
    AttributeProbeError,
    PathNotFoundError,
    ProbeUnavailableError,
)
from antiquarantine.attributes.memory import MemoryAttributeProbe
from antiquarantine.attributes.models import AttributeState, RemovalOutcome
from antiquarantine.attributes.probe import (
    AttributeProbe,
    OsAttributeProbe,
    XattrCommandProbe,
    get_default_probe,
)
from antiquarantine.attributes.single import check_path, ensure_exists, remove_from_path

__all__ = [
    "AttributeAccessError",
    "AttributeProbe",
    "AttributeProbeError",
    "AttributeState",
    "MemoryAttributeProbe",
    "OsAttributeProbe",
    "PathNotFoundError",
    "ProbeUnavailableError",
    "RemovalOutcome",
    "XattrCommandProbe",
    "check_path",
    "ensure_exists",
    "get_default_probe",
    "remove_from_path",
]

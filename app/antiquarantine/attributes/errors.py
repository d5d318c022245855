"""Exceptions raised by attribute probes."""


class AttributeProbeError(Exception):
    """Base exception for attribute probe failures.

    Attributes:
        path: Path the failing operation was applied to.
        cause: Underlying error description.
    """

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class PathNotFoundError(AttributeProbeError):
    """Raised when the target path does not exist."""


class AttributeAccessError(AttributeProbeError):
    """Raised when an attribute call fails for any reason other than absence.

    Covers permission errors, I/O errors, and filesystems that do not
    support extended attributes.
    """


class ProbeUnavailableError(AttributeProbeError):
    """Raised when the host offers no way to access extended attributes."""

    def __init__(self, cause: str) -> None:
        super().__init__("-", cause)

    def __str__(self) -> str:
        return self.cause

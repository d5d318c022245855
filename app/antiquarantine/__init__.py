"""aq - antiQuarantine.

Detect and remove the com.apple.quarantine extended attribute
(or any other single named attribute) from files and directory trees.
"""

__version__ = "1.0.0"

DEFAULT_ATTRIBUTE = "com.apple.quarantine"

__all__ = ["DEFAULT_ATTRIBUTE", "__version__"]

from __future__ import annotations

"""
Embedding Error Taxonomy.

Defines the small, closed set of failure kinds surfaced by the tree builder,
the serializer and the configuration layer. Every error carries the path
(or field) it refers to, and the underlying cause is chained with
'raise ... from' by the raising site.
"""

from typing import Optional

# -----------------------------------------------------------------------------
# BASE ERROR
# -----------------------------------------------------------------------------

class IncludeDirError(Exception):
    """Root of every error raised by the includedir package."""


# -----------------------------------------------------------------------------
# I/O ERRORS
# -----------------------------------------------------------------------------

class ReadFailure(IncludeDirError):
    """
    A file could not be read or a directory could not be listed.

    Attributes:
        path: Offending filesystem path.
        cause: Underlying exception, if any.
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to read '{path}'{detail}")


class WriteFailure(IncludeDirError):
    """
    The rendered text could not be committed to its destination.

    Attributes:
        path: Destination path.
        cause: Underlying exception, if any.
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to write '{path}'{detail}")


# -----------------------------------------------------------------------------
# STRUCTURAL AND CONFIGURATION ERRORS
# -----------------------------------------------------------------------------

class DuplicateEntry(IncludeDirError):
    """Two entries with the same relative path were inserted into one directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Duplicate entry '{path}'")


class ConfigurationError(IncludeDirError, ValueError):
    """
    A configuration value is unusable (identifier, policy, worker count...).

    Attributes:
        field: Name of the offending configuration key.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"Invalid '{field}': {message}")

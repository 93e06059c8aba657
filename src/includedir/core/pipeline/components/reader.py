from __future__ import annotations

"""
Byte-Exact File Reading Component.

Reads files in binary mode so the captured contents are exactly the bytes on
disk. Any OS-level failure is reported as a ReadFailure tagged with the path.
"""

from includedir.domain.errors import ReadFailure

# -----------------------------------------------------------------------------
# READING OPERATIONS
# -----------------------------------------------------------------------------

def read_file_bytes(file_path: str) -> bytes:
    """
    Read the full contents of a file.

    Args:
        file_path: Absolute path to the target file.

    Returns:
        bytes: Raw file contents.

    Raises:
        ReadFailure: If the file vanished, is unreadable or is not a file.
    """
    try:
        with open(file_path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ReadFailure(file_path, e) from e

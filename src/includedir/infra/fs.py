from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation used by the walker and the writer.
Relative paths handed to the tree model are always '/'-separated, whatever
the host separator is.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def to_posix_relpath(path: str, root: str) -> str:
    """
    Express 'path' relative to 'root' with '/' separators.

    Args:
        path: Absolute path inside root.
        root: Absolute embedding root.

    Returns:
        str: Relative path, '' for the root itself.
    """
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        return ""
    if os.sep != "/":
        rel = rel.replace(os.sep, "/")
    if os.altsep and os.altsep != "/":
        rel = rel.replace(os.altsep, "/")
    return rel


def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory hierarchy of a target file.

    Raises:
        OSError: If the hierarchy cannot be created.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)

from __future__ import annotations

"""
Walk Event Data Models.

Defines the events exchanged between the directory walker, the file reader
and the tree builder.
"""

from dataclasses import dataclass
from typing import Optional

ENTRY_FILE = "file"
ENTRY_DIR = "dir"

ENTRY_KINDS = (ENTRY_FILE, ENTRY_DIR)

SYMLINK_FOLLOW = "follow"
SYMLINK_SKIP = "skip"
SYMLINK_REJECT = "reject"

SYMLINK_POLICIES = (SYMLINK_FOLLOW, SYMLINK_SKIP, SYMLINK_REJECT)

# -----------------------------------------------------------------------------
# EVENT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WalkEntry:
    """
    A filesystem entry reported by the walker, contents not yet read.

    Attributes:
        rel_path: '/'-separated path relative to the embedding root.
        kind: ENTRY_FILE or ENTRY_DIR.
        abs_path: Absolute path used to read the entry.
    """
    rel_path: str
    kind: str
    abs_path: str


@dataclass(frozen=True)
class Entry:
    """
    A fully captured entry ready to be folded into a tree.

    Attributes:
        rel_path: '/'-separated path relative to the embedding root.
        kind: ENTRY_FILE or ENTRY_DIR.
        contents: File bytes; None for directories.
    """
    rel_path: str
    kind: str
    contents: Optional[bytes] = None

    def __post_init__(self) -> None:
        if self.kind not in ENTRY_KINDS:
            raise ValueError(f"Unknown entry kind '{self.kind}'.")
        if self.kind == ENTRY_FILE and self.contents is None:
            raise ValueError(f"File entry '{self.rel_path}' has no contents.")

from __future__ import annotations

"""
Directory Walking Service.

Enumerates every entry below an embedding root exactly once and reports it
as a WalkEntry. Listing failures are raised instead of being silently
skipped, and symbolic links are handled by an explicit policy:

- follow: links are read through; linked directories are descended, unless
  the link points back to a directory already on the current walk path.
- skip: links are left out of the snapshot.
- reject: any link aborts the walk with a ReadFailure.
"""

import logging
import os
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional

from includedir.core.pipeline.components.filters import compile_patterns, matches_any
from includedir.domain.entry_models import (
    ENTRY_DIR,
    ENTRY_FILE,
    SYMLINK_FOLLOW,
    SYMLINK_POLICIES,
    SYMLINK_REJECT,
    SYMLINK_SKIP,
    WalkEntry,
)
from includedir.domain.errors import ConfigurationError, ReadFailure
from includedir.infra.fs import to_posix_relpath

logger = logging.getLogger(__name__)


class SymlinkRejected(OSError):
    """Cause attached to a ReadFailure raised for a link refused by policy."""


# ==============================================================================
# PUBLIC API
# ==============================================================================

def scan_entries(
        root: str,
        symlinks: str = SYMLINK_FOLLOW,
        exclude_patterns: Optional[List[str]] = None,
        skip_files: Optional[Iterable[str]] = None,
) -> Iterator[WalkEntry]:
    """
    Walk 'root' top-down and yield one event per directory and file.

    Args:
        root: Directory to embed.
        symlinks: Symbolic link policy ('follow', 'skip' or 'reject').
        exclude_patterns: Regexes matched against entry names to leave out.
        skip_files: Files never reported, e.g. the generated module itself when
                    it is written inside the root.

    Yields:
        WalkEntry: Directories and files below the root (root excluded).

    Raises:
        ReadFailure: If the root or any directory cannot be listed, or a
                     link is refused by the policy.
        ConfigurationError: On unknown policy or malformed pattern.
    """
    if symlinks not in SYMLINK_POLICIES:
        raise ConfigurationError("symlinks", f"unknown policy {symlinks!r}.")

    root_abs = os.path.abspath(root)
    if not os.path.isdir(root_abs):
        raise ReadFailure(root_abs, NotADirectoryError(f"Not a directory: {root_abs}"))

    exclude_rx = compile_patterns(exclude_patterns or [])
    follow = symlinks == SYMLINK_FOLLOW
    skipped = frozenset(os.path.realpath(p) for p in (skip_files or ()))

    # Real paths of the directories on the walk path leading to each directory
    chains: Dict[str, FrozenSet[str]] = {root_abs: frozenset([os.path.realpath(root_abs)])}

    logger.debug(f"Walking '{root_abs}' (symlinks={symlinks})")

    for current, dirs, files in os.walk(root_abs, followlinks=follow, onerror=_raise_read_failure):
        chain = chains.pop(current, frozenset())

        kept_dirs: List[str] = []
        for d in sorted(dirs):
            full = os.path.join(current, d)
            if matches_any(d, exclude_rx):
                continue
            if os.path.islink(full) and not _admit_link(full, symlinks):
                continue
            real = os.path.realpath(full)
            if follow and real in chain:
                raise ReadFailure(full, SymlinkRejected(f"Symbolic link cycle back to '{real}'"))
            chains[full] = chain | {real}
            kept_dirs.append(d)
            yield WalkEntry(to_posix_relpath(full, root_abs), ENTRY_DIR, full)

        # In-place pruning so os.walk only descends into admitted directories
        dirs[:] = kept_dirs

        for file_name in sorted(files):
            full = os.path.join(current, file_name)
            if matches_any(file_name, exclude_rx):
                continue
            if os.path.islink(full) and not _admit_link(full, symlinks):
                continue
            if skipped and os.path.realpath(full) in skipped:
                logger.debug(f"Skipping generated output: {full}")
                continue
            yield WalkEntry(to_posix_relpath(full, root_abs), ENTRY_FILE, full)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _admit_link(path: str, policy: str) -> bool:
    """Apply the symlink policy to one link; False means leave it out."""
    if policy == SYMLINK_REJECT:
        raise ReadFailure(path, SymlinkRejected("Symbolic links are rejected by policy"))
    if policy == SYMLINK_SKIP:
        logger.debug(f"Skipping symbolic link: {path}")
        return False
    return True


def _raise_read_failure(error: OSError) -> None:
    """os.walk error hook: listing failures abort the walk."""
    raise ReadFailure(error.filename or "", error) from error

from __future__ import annotations

"""
Tree Snapshot Builder.

Folds a stream of entries, in any arrival order, into a complete 'Dir' tree.
Directory nodes are created on demand and linked to their parents bottom-up
once every entry has been seen. Files can be read on worker threads; each
insertion then goes through the parent node's own lock.
"""

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Dict, Iterable, List, Optional, Set

from includedir.core.pipeline.components.reader import read_file_bytes
from includedir.core.services.walker import scan_entries
from includedir.domain.entry_models import (
    ENTRY_DIR,
    ENTRY_FILE,
    SYMLINK_FOLLOW,
    Entry,
    WalkEntry,
)
from includedir.domain.errors import DuplicateEntry
from includedir.domain.tree_models import Dir, File, parent_path

logger = logging.getLogger(__name__)


# ==============================================================================
# ASSEMBLER
# ==============================================================================

class TreeAssembler:
    """
    Accumulates entries and produces the finished tree.

    Safe to feed from several threads: the node table is guarded by one lock
    and each 'Dir' serializes its own insertions.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._nodes: Dict[str, Dir] = {"": Dir("")}
        self._declared_dirs: Set[str] = set()
        self._file_paths: Set[str] = set()
        self._finished = False

    def add_directory(self, rel_path: str) -> None:
        """
        Register a directory reported by the walker.

        Raises:
            DuplicateEntry: If the directory or a file at that path was already seen.
        """
        with self._lock:
            self._check_open()
            if rel_path == "" or rel_path in self._declared_dirs or rel_path in self._file_paths:
                raise DuplicateEntry(rel_path)
            self._ensure_dir(rel_path)
            self._declared_dirs.add(rel_path)

    def add_file(self, rel_path: str, contents: bytes) -> File:
        """
        Insert a captured file under its parent directory.

        Raises:
            DuplicateEntry: If a file or directory with that path was already seen.
        """
        node = File(rel_path, contents)
        with self._lock:
            self._check_open()
            if rel_path in self._nodes or rel_path in self._file_paths:
                raise DuplicateEntry(rel_path)
            parent = self._ensure_dir(parent_path(rel_path))
            self._file_paths.add(rel_path)
        parent.add_file(node)
        return node

    def add_entry(self, entry: Entry) -> None:
        if entry.kind == ENTRY_DIR:
            self.add_directory(entry.rel_path)
        else:
            self.add_file(entry.rel_path, entry.contents)

    def finish(self) -> Dir:
        """
        Link every directory into its parent, deepest first, and return the root.

        The assembler cannot be fed after this call.
        """
        with self._lock:
            self._check_open()
            self._finished = True
            paths = sorted(
                (p for p in self._nodes if p),
                key=lambda p: (-p.count("/"), p),
            )
            for p in paths:
                self._nodes[parent_path(p)].add_dir(self._nodes[p])
            root = self._nodes[""]

        logger.debug(f"Assembled tree: {len(self._nodes) - 1} dirs, {len(self._file_paths)} files")
        return root

    def _ensure_dir(self, rel_path: str) -> Dir:
        node = self._nodes.get(rel_path)
        if node is None:
            if rel_path in self._file_paths:
                raise DuplicateEntry(rel_path)
            self._ensure_dir(parent_path(rel_path))
            node = Dir(rel_path)
            self._nodes[rel_path] = node
        return node

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError("TreeAssembler already finished.")


# ==============================================================================
# PUBLIC API
# ==============================================================================

def build_tree(entries: Iterable[Entry]) -> Dir:
    """
    Fold an entry stream into a tree snapshot.

    Args:
        entries: Directory and file entries in any order.

    Returns:
        Dir: The root of the finished tree.

    Raises:
        DuplicateEntry: On the first repeated path.
    """
    assembler = TreeAssembler()
    for entry in entries:
        assembler.add_entry(entry)
    return assembler.finish()


def snapshot_directory(
        root: str,
        symlinks: str = SYMLINK_FOLLOW,
        exclude_patterns: Optional[List[str]] = None,
        workers: int = 1,
        skip_files: Optional[Iterable[str]] = None,
) -> Dir:
    """
    Walk 'root', read every file and return the finished tree.

    Args:
        root: Directory to embed.
        symlinks: Symbolic link policy.
        exclude_patterns: Regexes for entry names to leave out.
        workers: Number of reader threads; 1 reads sequentially.
        skip_files: Files left out of the snapshot (the output module).

    Returns:
        Dir: Root of the snapshot.

    Raises:
        ReadFailure: On the first listing or reading failure.
        DuplicateEntry: If the walk reports the same path twice.
    """
    logger.info(f"Capturing directory snapshot: {root}")
    entries = scan_entries(
        root, symlinks=symlinks, exclude_patterns=exclude_patterns, skip_files=skip_files
    )
    assembler = TreeAssembler()

    if workers <= 1:
        for item in entries:
            _capture(assembler, item)
    else:
        _capture_parallel(assembler, entries, workers)

    tree = assembler.finish()
    logger.info(f"Snapshot complete: {tree.file_count()} files captured.")
    return tree


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _capture(assembler: TreeAssembler, item: WalkEntry) -> None:
    if item.kind == ENTRY_DIR:
        assembler.add_directory(item.rel_path)
    elif item.kind == ENTRY_FILE:
        assembler.add_file(item.rel_path, read_file_bytes(item.abs_path))


def _capture_parallel(assembler: TreeAssembler, entries: Iterable[WalkEntry], workers: int) -> None:
    """Overlap file reads across threads; the first failure cancels the rest."""
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="includedir-read") as executor:
        futures: List[Future] = []
        try:
            for item in entries:
                if item.kind == ENTRY_DIR:
                    assembler.add_directory(item.rel_path)
                else:
                    futures.append(executor.submit(_capture, assembler, item))
        except BaseException:
            for f in futures:
                f.cancel()
            raise

        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [f for f in futures if f in done and f.exception() is not None]
        if failed:
            for f in pending:
                f.cancel()
            # Re-raise the failure of the earliest submitted entry
            raise failed[0].exception()

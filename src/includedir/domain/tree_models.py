from __future__ import annotations

"""
Directory Tree Snapshot Models.

Provides the recursive 'File' and 'Dir' value types that hold an embedded
directory tree. Children are always kept sorted by their path segments so
that two snapshots of an unchanged tree compare equal and render to the
same text, whatever order the filesystem reported them in.
"""

import bisect
import fnmatch
import os
import threading
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from includedir.domain.errors import DuplicateEntry

# -----------------------------------------------------------------------------
# PATH HELPERS
# -----------------------------------------------------------------------------

# Host separators other than "/" that cannot appear inside a segment
_FOREIGN_SEPARATORS = tuple(s for s in (os.sep, os.altsep) if s and s != "/")


def _validate_path(path: str, allow_root: bool) -> None:
    """Reject absolute, parent-relative or malformed relative paths."""
    if not isinstance(path, str):
        raise TypeError(f"Path must be str, received {type(path).__name__}.")
    if path == "":
        if allow_root:
            return
        raise ValueError("File path must not be empty.")
    if path.startswith("/") or any(s in path for s in _FOREIGN_SEPARATORS):
        raise ValueError(f"Path '{path}' must be relative and '/'-separated.")
    for segment in path.split("/"):
        if segment in ("", ".", ".."):
            raise ValueError(f"Path '{path}' contains an invalid segment '{segment}'.")


def parent_path(path: str) -> str:
    """Return the relative path of the directory holding 'path' ('' for the root)."""
    return path.rpartition("/")[0]


def path_key(path: str) -> Tuple[str, ...]:
    """Sort key: lexicographic order over the path segment sequence."""
    return tuple(path.split("/")) if path else ()


# -----------------------------------------------------------------------------
# LEAF NODE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class File:
    """
    A file captured into the snapshot.

    Attributes:
        path: Path relative to the embedding root, '/'-separated.
        contents: Exact bytes read from disk.
    """
    path: str
    contents: bytes

    def __post_init__(self) -> None:
        _validate_path(self.path, allow_root=False)
        if not isinstance(self.contents, bytes):
            if isinstance(self.contents, (bytearray, memoryview)):
                object.__setattr__(self, "contents", bytes(self.contents))
            else:
                raise TypeError(
                    f"File contents must be bytes, received {type(self.contents).__name__}."
                )

    @property
    def name(self) -> str:
        return self.path.rpartition("/")[2]

    def contents_utf8(self) -> Optional[str]:
        """Decode the contents as UTF-8, or None if they are not valid UTF-8."""
        try:
            return self.contents.decode("utf-8")
        except UnicodeDecodeError:
            return None


# -----------------------------------------------------------------------------
# DIRECTORY NODE
# -----------------------------------------------------------------------------

Node = Union[File, "Dir"]


@dataclass
class Dir:
    """
    A directory and its direct children.

    Children are stored as path-sorted tuples. Insertions on the same node are
    serialized by a per-node lock, and a failed insertion leaves the node
    untouched.

    Attributes:
        path: Path relative to the embedding root ('' denotes the root).
        files: Direct child files, sorted by path.
        dirs: Direct child directories, sorted by path.
    """
    path: str = ""
    files: Tuple[File, ...] = ()
    dirs: Tuple["Dir", ...] = ()
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        _validate_path(self.path, allow_root=True)
        files = tuple(self.files)
        dirs = tuple(self.dirs)

        seen = set()
        for child in files + dirs:
            self._check_direct_child(child)
            if child.path in seen:
                raise DuplicateEntry(child.path)
            seen.add(child.path)

        # Explicit normalization of arrival order
        self.files = _sorted_children(files)
        self.dirs = _sorted_children(dirs)

    # -------------------------------------------------------------------------
    # INSERTION
    # -------------------------------------------------------------------------

    def add_file(self, file: File) -> None:
        """
        Insert a direct child file at its sorted position.

        Raises:
            DuplicateEntry: If a file or directory with the same path exists.
            ValueError: If the file is not a direct child of this directory.
        """
        self._check_direct_child(file)
        with self._lock:
            self._check_unique(file.path)
            self.files = _insert_sorted(self.files, file)

    def add_dir(self, child: Dir) -> None:
        """
        Insert an already complete subtree as a direct child.

        Raises:
            DuplicateEntry: If a file or directory with the same path exists.
            ValueError: If the directory is not a direct child of this directory.
        """
        self._check_direct_child(child)
        with self._lock:
            self._check_unique(child.path)
            self.dirs = _insert_sorted(self.dirs, child)

    def _check_direct_child(self, child: Node) -> None:
        if not isinstance(child, (File, Dir)):
            raise TypeError(f"Unsupported child node: {type(child).__name__}.")
        if child.path == "" or parent_path(child.path) != self.path:
            raise ValueError(
                f"'{child.path}' is not a direct child of '{self.path or '<root>'}'."
            )

    def _check_unique(self, path: str) -> None:
        if any(f.path == path for f in self.files) or any(d.path == path for d in self.dirs):
            raise DuplicateEntry(path)

    # -------------------------------------------------------------------------
    # TRAVERSAL AND LOOKUP
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.path.rpartition("/")[2]

    def traverse(self) -> Iterator[Node]:
        """
        Lazily yield every descendant node, depth-first.

        The files of a directory come first, then each subdirectory followed
        by its own descendants. The node itself is not yielded.
        """
        for f in self.files:
            yield f
        for d in self.dirs:
            yield d
            yield from d.traverse()

    def get_dir(self, path: str) -> Optional[Dir]:
        """Find a directory by its root-relative path."""
        target = path.strip("/")
        if target == self.path:
            return self
        for d in self.dirs:
            if target == d.path or target.startswith(d.path + "/"):
                return d.get_dir(target)
        return None

    def get_file(self, path: str) -> Optional[File]:
        """Find a file by its root-relative path."""
        target = path.strip("/")
        holder = self.get_dir(parent_path(target))
        if holder is None:
            return None
        for f in holder.files:
            if f.path == target:
                return f
        return None

    def contains(self, path: str) -> bool:
        return self.get_file(path) is not None or self.get_dir(path) is not None

    def find(self, pattern: str) -> List[Node]:
        """Return descendants whose relative path matches a glob pattern."""
        return [node for node in self.traverse() if fnmatch.fnmatchcase(node.path, pattern)]

    def file_count(self) -> int:
        return sum(1 for node in self.traverse() if isinstance(node, File))


# -----------------------------------------------------------------------------
# ORDERING HELPERS
# -----------------------------------------------------------------------------

def _sorted_children(children: Iterable[Node]) -> tuple:
    return tuple(sorted(children, key=lambda node: path_key(node.path)))


def _insert_sorted(children: tuple, node: Node) -> tuple:
    keys = [path_key(c.path) for c in children]
    idx = bisect.bisect_left(keys, path_key(node.path))
    return children[:idx] + (node,) + children[idx:]

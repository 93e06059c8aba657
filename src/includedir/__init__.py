from __future__ import annotations

"""
includedir: embed whole directory trees into generated Python source.

A build step captures a directory into a 'Dir' snapshot and renders it as a
module that rebuilds the same tree, with every file's bytes held in a
literal, so programs can read those files without touching the filesystem.
"""

from includedir.core.rendering.serializer import render_module, serialize
from includedir.core.services.tree_builder import build_tree, snapshot_directory
from includedir.domain.errors import (
    ConfigurationError,
    DuplicateEntry,
    IncludeDirError,
    ReadFailure,
    WriteFailure,
)
from includedir.domain.tree_models import Dir, File
from includedir.frontend import IncludeDirBuilder, include_dir

__version__ = "0.2.0"

__all__ = [
    "Dir",
    "File",
    "IncludeDirBuilder",
    "include_dir",
    "build_tree",
    "snapshot_directory",
    "serialize",
    "render_module",
    "IncludeDirError",
    "ReadFailure",
    "DuplicateEntry",
    "WriteFailure",
    "ConfigurationError",
]

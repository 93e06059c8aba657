from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a sample directory on disk and a helper that evaluates
   generated source back into a tree.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from includedir.domain.tree_models import Dir, File  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    """
    Create the reference directory on disk.

    Structure:
    /assets
      a.txt        b"hello"
      /sub
        b.bin      b"\\x00\\xff"
    """
    root = tmp_path / "assets"
    root.mkdir()
    (root / "a.txt").write_bytes(b"hello")
    (root / "sub").mkdir()
    (root / "sub" / "b.bin").write_bytes(b"\x00\xff")
    return root


@pytest.fixture
def sample_tree() -> Dir:
    """In-memory equivalent of 'sample_dir'."""
    return Dir(
        "",
        files=(File("a.txt", b"hello"),),
        dirs=(Dir("sub", files=(File("sub/b.bin", b"\x00\xff"),)),),
    )


@pytest.fixture
def evaluate() -> Callable[[str, str], Any]:
    """
    Return a helper executing generated source and fetching the bound value.

    'Dir' and 'File' are provided so that header-less output evaluates too.
    """
    def _evaluate(source: str, name: str) -> Any:
        namespace: Dict[str, Any] = {"Dir": Dir, "File": File}
        exec(compile(source, "<generated>", "exec"), namespace)
        return namespace[name]

    return _evaluate

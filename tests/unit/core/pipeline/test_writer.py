from __future__ import annotations

"""
Unit tests for the Atomic Output Writer.

Verifies:
1. Byte-exact persistence (no newline translation).
2. Parent directory creation.
3. All-or-nothing behaviour on failure.
"""

import os
import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from includedir.core.pipeline.components.writer import write_output
from includedir.domain.errors import WriteFailure


def test_write_output_creates_file_and_parents(tmp_path: Path) -> None:
    target = tmp_path / "build" / "gen" / "assets.py"

    written = write_output("X = 1\n", str(target))

    assert Path(written) == target
    assert target.read_bytes() == b"X = 1\n"


def test_write_output_keeps_lf_newlines(tmp_path: Path) -> None:
    target = tmp_path / "out.py"
    write_output("a\nb\n", str(target))
    assert b"\r" not in target.read_bytes()


def test_write_output_replaces_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "out.py"
    target.write_text("OLD = True\n", encoding="utf-8")

    write_output("NEW = True\n", str(target))

    assert target.read_text(encoding="utf-8") == "NEW = True\n"
    assert [p.name for p in tmp_path.iterdir()] == ["out.py"]


def test_failed_replace_leaves_previous_output(tmp_path: Path) -> None:
    target = tmp_path / "out.py"
    target.write_text("OLD = True\n", encoding="utf-8")

    with patch("os.replace", side_effect=OSError("disk full")):
        with pytest.raises(WriteFailure) as exc_info:
            write_output("NEW = True\n", str(target))

    assert exc_info.value.path.endswith("out.py")
    assert isinstance(exc_info.value.cause, OSError)
    assert target.read_text(encoding="utf-8") == "OLD = True\n"
    assert [p.name for p in tmp_path.iterdir()] == ["out.py"]


def test_unwritable_destination_is_a_write_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(WriteFailure):
        write_output("X = 1\n", str(blocker / "out.py"))


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_written_module_follows_umask(tmp_path: Path) -> None:
    target = tmp_path / "out.py"
    previous = os.umask(0o022)
    try:
        write_output("X = 1\n", str(target))
    finally:
        os.umask(previous)

    assert stat.S_IMODE(target.stat().st_mode) == 0o644

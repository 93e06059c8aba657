from __future__ import annotations

"""
Unit tests for the Directory Walking Service.

Verifies event emission, exclusions, listing failures and the symbolic
link policies.
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from includedir.core.services.tree_builder import snapshot_directory
from includedir.core.services.walker import scan_entries
from includedir.domain.entry_models import ENTRY_DIR, ENTRY_FILE
from includedir.domain.errors import ConfigurationError, ReadFailure

needs_symlinks = pytest.mark.skipif(
    sys.platform == "win32", reason="Symbolic links need privileges on Windows"
)


def _events(root: Path, **kwargs):
    return sorted((e.rel_path, e.kind) for e in scan_entries(str(root), **kwargs))


# -----------------------------------------------------------------------------
# BASIC ENUMERATION
# -----------------------------------------------------------------------------

def test_reports_every_entry_once(sample_dir: Path) -> None:
    assert _events(sample_dir) == [
        ("a.txt", ENTRY_FILE),
        ("sub", ENTRY_DIR),
        ("sub/b.bin", ENTRY_FILE),
    ]


def test_relative_paths_use_forward_slashes(tmp_path: Path) -> None:
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    (deep / "f.txt").write_bytes(b"")

    paths = [e.rel_path for e in scan_entries(str(tmp_path))]

    assert "a/b/c/f.txt" in paths
    assert all("\\" not in p for p in paths)


def test_abs_path_points_to_entry(sample_dir: Path) -> None:
    for e in scan_entries(str(sample_dir)):
        assert os.path.exists(e.abs_path)
        assert e.abs_path.startswith(str(sample_dir))


def test_exclude_patterns_prune_files_and_dirs(sample_dir: Path) -> None:
    (sample_dir / ".git").mkdir()
    (sample_dir / ".git" / "HEAD").write_bytes(b"ref")
    (sample_dir / "notes.tmp").write_bytes(b"")

    events = _events(sample_dir, exclude_patterns=[r"^\.git$", r"\.tmp$"])

    assert [p for p, _ in events] == ["a.txt", "sub", "sub/b.bin"]


def test_bad_exclude_pattern_is_a_configuration_error(sample_dir: Path) -> None:
    with pytest.raises(ConfigurationError):
        list(scan_entries(str(sample_dir), exclude_patterns=["("]))


# -----------------------------------------------------------------------------
# FAILURES
# -----------------------------------------------------------------------------

def test_missing_root_is_a_read_failure(tmp_path: Path) -> None:
    with pytest.raises(ReadFailure) as exc_info:
        list(scan_entries(str(tmp_path / "missing")))
    assert exc_info.value.path.endswith("missing")


def test_root_must_be_a_directory(tmp_path: Path) -> None:
    f = tmp_path / "file.txt"
    f.write_bytes(b"")
    with pytest.raises(ReadFailure):
        list(scan_entries(str(f)))


def test_listing_failure_is_not_swallowed(sample_dir: Path) -> None:
    real_scandir = os.scandir
    blocked = str(sample_dir / "sub")

    def failing_scandir(path="."):
        if os.fspath(path) == blocked:
            raise PermissionError(13, "Permission denied", blocked)
        return real_scandir(path)

    with patch("os.scandir", side_effect=failing_scandir):
        with pytest.raises(ReadFailure) as exc_info:
            list(scan_entries(str(sample_dir)))

    assert exc_info.value.path == blocked


def test_unknown_policy_is_rejected(sample_dir: Path) -> None:
    with pytest.raises(ConfigurationError):
        list(scan_entries(str(sample_dir), symlinks="maybe"))


# -----------------------------------------------------------------------------
# SYMBOLIC LINK POLICIES
# -----------------------------------------------------------------------------

@pytest.fixture
def linked_dir(sample_dir: Path) -> Path:
    os.symlink(sample_dir / "a.txt", sample_dir / "link.txt")
    os.symlink(sample_dir / "sub", sample_dir / "linked_sub", target_is_directory=True)
    return sample_dir


@needs_symlinks
def test_follow_embeds_link_targets(linked_dir: Path) -> None:
    tree = snapshot_directory(str(linked_dir), symlinks="follow")

    assert tree.get_file("link.txt").contents == b"hello"
    assert tree.get_file("linked_sub/b.bin").contents == b"\x00\xff"


@needs_symlinks
def test_skip_leaves_links_out(linked_dir: Path) -> None:
    tree = snapshot_directory(str(linked_dir), symlinks="skip")

    assert not tree.contains("link.txt")
    assert not tree.contains("linked_sub")
    assert tree.contains("sub/b.bin")


@needs_symlinks
def test_reject_raises_read_failure(linked_dir: Path) -> None:
    with pytest.raises(ReadFailure):
        snapshot_directory(str(linked_dir), symlinks="reject")


@needs_symlinks
def test_follow_detects_cycles(sample_dir: Path) -> None:
    os.symlink(sample_dir, sample_dir / "sub" / "back", target_is_directory=True)

    with pytest.raises(ReadFailure) as exc_info:
        snapshot_directory(str(sample_dir), symlinks="follow")

    assert exc_info.value.path.endswith("back")


@needs_symlinks
def test_broken_link_is_a_read_failure(sample_dir: Path) -> None:
    os.symlink(sample_dir / "gone", sample_dir / "dangling")

    with pytest.raises(ReadFailure):
        snapshot_directory(str(sample_dir), symlinks="follow")
    assert snapshot_directory(str(sample_dir), symlinks="skip").file_count() == 2


# -----------------------------------------------------------------------------
# NAME HANDLING AND SKIPPED FILES
# -----------------------------------------------------------------------------

@pytest.mark.skipif(os.sep == "\\", reason="backslash is a path separator on Windows")
def test_backslash_in_file_name_is_embedded(tmp_path: Path) -> None:
    (tmp_path / "a\\b.txt").write_bytes(b"x")

    assert _events(tmp_path) == [("a\\b.txt", ENTRY_FILE)]
    assert snapshot_directory(str(tmp_path)).get_file("a\\b.txt").contents == b"x"


def test_skip_files_leaves_out_generated_output(sample_dir: Path) -> None:
    output = sample_dir / "embedded_assets.py"
    output.write_text("ASSETS = None\n", encoding="utf-8")

    events = _events(sample_dir, skip_files=[str(output)])

    assert ("embedded_assets.py", ENTRY_FILE) not in events
    assert ("a.txt", ENTRY_FILE) in events


def test_skip_files_accepts_paths_that_do_not_exist_yet(sample_dir: Path) -> None:
    events = _events(sample_dir, skip_files=[str(sample_dir / "later.py")])
    assert len(events) == 3

from __future__ import annotations

"""
Atomic Output Writer.

Commits generated source text to its destination all-or-nothing: the text is
written to a sibling temporary file which then replaces the target. A failed
write never leaves a truncated destination behind.
"""

import logging
import os
import tempfile

from includedir.domain.errors import WriteFailure
from includedir.infra.fs import ensure_parent_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def write_output(text: str, destination: str) -> str:
    """
    Atomically write 'text' to 'destination'.

    Newlines are written as-is ('\\n') on every platform so repeated builds
    produce identical bytes.

    Args:
        text: Generated source text.
        destination: Target file path.

    Returns:
        str: Absolute path of the written file.

    Raises:
        WriteFailure: If any step of the write fails.
    """
    target = os.path.abspath(destination)
    tmp_path = ""
    try:
        ensure_parent_dir(target)
        fd, tmp_path = tempfile.mkstemp(
            prefix=".includedir-", suffix=".tmp", dir=os.path.dirname(target)
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as out:
            out.write(text)
        # mkstemp creates 0600; give the module the mode a plain open() would
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, target)
    except OSError as e:
        _discard(tmp_path)
        raise WriteFailure(target, e) from e

    logger.info(f"Generated source written to: {target}")
    return target


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _discard(tmp_path: str) -> None:
    """Remove a leftover temporary file."""
    if tmp_path and os.path.exists(tmp_path):
        try:
            os.remove(tmp_path)
        except OSError as e:
            logger.warning(f"Could not remove temporary file '{tmp_path}': {e}")

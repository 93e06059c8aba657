from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object handed from the embedding engine to its callers
(CLI, builder) and the factory functions that create it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class EmbedResult:
    """
    Outcome of one embedding run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: Class name of the failure ('ReadFailure', ...).
        input_path: Normalized root directory embedded.
        output_path: Destination of the generated module ('' on dry runs).
        variable_name: Identifier bound in the generated source.
        file_count: Number of embedded files.
        dir_count: Number of embedded directories (root excluded).
        total_bytes: Sum of embedded file sizes.
        dry_run: Whether the text was rendered without being written.
        source_text: Rendered module text, kept only on dry runs.
        warnings: Configuration warnings raised during validation.
    """
    ok: bool
    error: str
    error_kind: str

    input_path: str
    output_path: str
    variable_name: str

    file_count: int = 0
    dir_count: int = 0
    total_bytes: int = 0
    dry_run: bool = False

    warnings: List[str] = field(default_factory=list)
    source_text: str = ""

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: BaseException,
        cfg: Dict[str, Any],
        warnings: Optional[List[str]] = None,
) -> EmbedResult:
    """Create a failed result from the exception that aborted the run."""
    return EmbedResult(
        ok=False,
        error=str(error),
        error_kind=type(error).__name__,
        input_path=cfg.get("input_path", ""),
        output_path=cfg.get("output_path", ""),
        variable_name=cfg.get("variable_name", ""),
        warnings=list(warnings or []),
    )


def create_success_result(
        cfg: Dict[str, Any],
        stats: Dict[str, int],
        output_path: str,
        dry_run: bool = False,
        warnings: Optional[List[str]] = None,
        source_text: str = "",
) -> EmbedResult:
    """Create a successful result carrying the snapshot statistics."""
    return EmbedResult(
        ok=True,
        error="",
        error_kind="",
        input_path=cfg.get("input_path", ""),
        output_path=output_path,
        variable_name=cfg.get("variable_name", ""),
        file_count=stats.get("files", 0),
        dir_count=stats.get("dirs", 0),
        total_bytes=stats.get("bytes", 0),
        dry_run=dry_run,
        warnings=list(warnings or []),
        source_text=source_text,
    )

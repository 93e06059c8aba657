from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates one embedding run:
1. Validates configuration and normalizes paths.
2. Captures the directory snapshot.
3. Renders the snapshot into module source text.
4. Commits the text to the destination (skipped on dry runs).

Every failure of the run is one of the includedir error kinds; the engine
turns it into a failed EmbedResult instead of a partial output.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from includedir.core.pipeline.components.writer import write_output
from includedir.core.pipeline.stages.validator import validate_config
from includedir.core.rendering.serializer import render_module
from includedir.core.services.tree_builder import snapshot_directory
from includedir.domain.config import DEFAULT_OUTPUT_NAME
from includedir.domain.errors import ConfigurationError, IncludeDirError
from includedir.domain.pipeline_models import (
    EmbedResult,
    create_error_result,
    create_success_result,
)
from includedir.domain.tree_models import Dir, File
from includedir.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_pipeline(config: Optional[Dict[str, Any]], *, dry_run: bool = False) -> EmbedResult:
    """
    Execute a full embedding run.

    Args:
        config: Raw or partial configuration dictionary.
        dry_run: Render the module but keep it in the result instead of writing it.

    Returns:
        EmbedResult: Status, statistics and destination of the run.
    """
    logger.info("Embedding run started.")
    cfg: Dict[str, Any] = dict(config or {})
    warnings: List[str] = []

    try:
        cfg, warnings = prepare_config(config)
        for warning in warnings:
            logger.warning(f"Configuration Warning: {warning}")

        tree, text = render_snapshot(cfg)
        stats = tree_stats(tree)

        if dry_run:
            logger.info("Dry run: output not written.")
            return create_success_result(
                cfg, stats, output_path="", dry_run=True, warnings=warnings, source_text=text
            )

        written = write_output(text, cfg["output_path"])

    except IncludeDirError as e:
        logger.error(f"Embedding failed: {e}")
        return create_error_result(e, cfg, warnings)

    logger.info(
        f"Embedded {stats['files']} files ({stats['bytes']} bytes) "
        f"from {cfg['input_path']} as '{cfg['variable_name']}'."
    )
    return create_success_result(cfg, stats, output_path=written, warnings=warnings)


def prepare_config(config: Optional[Dict[str, Any]]) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate the configuration and resolve input/output paths.

    Raises:
        ConfigurationError: If the configuration cannot be repaired.
    """
    cfg, warnings = validate_config(config, strict=False)

    if not cfg["input_path"]:
        raise ConfigurationError("input_path", "no root directory given.")

    cwd = os.getcwd()
    cfg["input_path"] = normalize_path(cfg["input_path"], cwd)
    cfg["output_path"] = normalize_path(cfg["output_path"], os.path.join(cwd, DEFAULT_OUTPUT_NAME))
    return cfg, warnings


def render_snapshot(cfg: Dict[str, Any]) -> Tuple[Dir, str]:
    """
    Capture the tree described by a validated configuration and render it.

    The output module is left out of the walk so that rebuilding into the
    embedded root yields the same text every time.

    Returns:
        Tuple[Dir, str]: The snapshot and the module source text.
    """
    tree = snapshot_directory(
        cfg["input_path"],
        symlinks=cfg["symlinks"],
        exclude_patterns=cfg["exclude_patterns"],
        workers=cfg["workers"],
        skip_files=[cfg["output_path"]],
    )
    text = render_module(tree, cfg["variable_name"], include_header=cfg["include_header"])
    return tree, text


def tree_stats(tree: Dir) -> Dict[str, int]:
    """Count files, directories and bytes in a snapshot."""
    stats = {"files": 0, "dirs": 0, "bytes": 0}
    for node in tree.traverse():
        if isinstance(node, File):
            stats["files"] += 1
            stats["bytes"] += len(node.contents)
        else:
            stats["dirs"] += 1
    return stats

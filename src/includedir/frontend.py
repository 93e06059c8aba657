from __future__ import annotations

"""
Build-Step Frontend.

Fluent builder used from build scripts:

    include_dir("assets").as_variable("SRC").to_file("build/assets.py")

Unlike the CLI, the builder raises the includedir error kinds directly so a
failing build step stops with the original exception.
"""

import logging
from typing import Any, Dict

from includedir.core.pipeline.components.writer import write_output
from includedir.core.pipeline.engine import prepare_config, render_snapshot
from includedir.core.services.tree_builder import snapshot_directory
from includedir.domain.config import get_default_config
from includedir.domain.tree_models import Dir

logger = logging.getLogger(__name__)


class IncludeDirBuilder:
    """
    Collects the embedding options for one root directory.

    Every option method returns the builder itself.
    """

    def __init__(self, root: str) -> None:
        self._config: Dict[str, Any] = get_default_config()
        self._config["input_path"] = root

    def __repr__(self) -> str:
        return (
            f"IncludeDirBuilder(root={self._config['input_path']!r}, "
            f"variable={self._config['variable_name']!r})"
        )

    # -------------------------------------------------------------------------
    # OPTIONS
    # -------------------------------------------------------------------------

    def as_variable(self, name: str) -> IncludeDirBuilder:
        """Set the identifier the generated tree is bound to."""
        self._config["variable_name"] = name
        return self

    def with_symlinks(self, policy: str) -> IncludeDirBuilder:
        """Choose the symbolic link policy: 'follow', 'skip' or 'reject'."""
        self._config["symlinks"] = policy
        return self

    def excluding(self, *patterns: str) -> IncludeDirBuilder:
        """Leave out entries whose name matches any of the regex patterns."""
        self._config["exclude_patterns"] = list(self._config["exclude_patterns"]) + list(patterns)
        return self

    def with_workers(self, workers: int) -> IncludeDirBuilder:
        self._config["workers"] = workers
        return self

    def without_header(self) -> IncludeDirBuilder:
        """Emit only the assignment, without banner and import line."""
        self._config["include_header"] = False
        return self

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    # -------------------------------------------------------------------------
    # TERMINAL OPERATIONS
    # -------------------------------------------------------------------------

    def snapshot(self) -> Dir:
        """Capture the tree without rendering it."""
        cfg, _ = prepare_config(self._config)
        return snapshot_directory(
            cfg["input_path"],
            symlinks=cfg["symlinks"],
            exclude_patterns=cfg["exclude_patterns"],
            workers=cfg["workers"],
            skip_files=[cfg["output_path"]],
        )

    def render(self) -> str:
        """Capture and render the tree, returning the module text."""
        cfg, _ = prepare_config(self._config)
        _, text = render_snapshot(cfg)
        return text

    def to_file(self, destination: str) -> str:
        """
        Capture, render and write the module to 'destination'.

        Returns:
            str: Absolute path of the written module.

        Raises:
            ReadFailure, DuplicateEntry, WriteFailure, ConfigurationError.
        """
        cfg, warnings = prepare_config(dict(self._config, output_path=destination))
        for warning in warnings:
            logger.warning(f"Configuration Warning: {warning}")
        _, text = render_snapshot(cfg)
        return write_output(text, cfg["output_path"])


def include_dir(root: str) -> IncludeDirBuilder:
    """Start embedding the directory at 'root'."""
    return IncludeDirBuilder(root)

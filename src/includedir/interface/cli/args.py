from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the embedding engine.
"""

import argparse
from typing import Any, Dict, List, Optional

from includedir.domain.entry_models import SYMLINK_POLICIES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the includedir CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="includedir",
        description="Embed a directory tree into a generated Python module.",
    )

    # --- Path Management ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Root directory to embed.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Destination of the generated module.",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file (CLI flags take precedence).",
    )

    # --- Generated Source ---
    p.add_argument(
        "--var",
        dest="variable_name",
        default=None,
        help="Identifier the embedded tree is bound to (default: ASSETS).",
    )
    p.add_argument(
        "--no-header",
        action="store_true",
        help="Emit only the assignment, without banner and import line.",
    )

    # --- Walk Behaviour ---
    p.add_argument(
        "--symlinks",
        choices=SYMLINK_POLICIES,
        default=None,
        help="Symbolic link policy (default: follow).",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes; matching entry names are not embedded.",
    )
    p.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of threads reading files (default: 1).",
    )

    # --- Runtime and Diagnostics ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated module to stdout instead of writing it.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Override subset; None means "not given".
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "output_path": args.output_path,
        "variable_name": args.variable_name,
        "symlinks": args.symlinks,
        "workers": args.workers,
    }

    if args.exclude_patterns:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.no_header:
        overrides["include_header"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]

from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging initialization, merging of the
configuration sources (defaults, optional JSON file, CLI overrides),
pipeline execution and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from includedir.core.pipeline.engine import run_pipeline
from includedir.core.pipeline.stages.validator import validate_config
from includedir.domain.config import CONFIG_KEYS, get_default_config, load_config
from includedir.domain.errors import ConfigurationError
from includedir.domain.pipeline_models import EmbedResult
from includedir.infra.fs import normalize_path
from includedir.infra.logging import LoggingConfig, configure_logging, get_logger
from includedir.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console stderr, optional rotating file)
    configure_logging(
        LoggingConfig(
            level="DEBUG" if args.debug else "INFO",
            console=True,
            log_file=args.log_file,
        )
    )

    # 3. Resolve configuration hierarchy
    try:
        base_conf = load_config(args.config_file) if args.config_file else get_default_config()
        raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
        clean_conf, warnings = validate_config(raw_conf, strict=False)
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight input verification
    raw_input = clean_conf.get("input_path", "")
    input_path = normalize_path(raw_input, os.getcwd()) if raw_input else ""
    if not input_path or not os.path.isdir(input_path):
        msg = f"Input directory does not exist: {input_path or '<none>'}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_USAGE

    # 5. Pipeline execution phase
    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    elif result.ok and result.dry_run:
        sys.stdout.write(result.source_text)
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    if result.error_kind == ConfigurationError.__name__:
        return EXIT_USAGE
    return EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None overrides of known keys into the base configuration.
    """
    out = dict(base)
    for k in CONFIG_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: EmbedResult) -> None:
    if not result.ok:
        print(f"ERROR [{result.error_kind}]: {result.error}", file=sys.stderr)
        return

    print(f"Embedded '{result.input_path}' as {result.variable_name}")
    print(f"  files: {result.file_count}")
    print(f"  directories: {result.dir_count}")
    print(f"  bytes: {result.total_bytes:,}")
    print(f"  output: {result.output_path}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV string parsing logic.
3. Merge precedence of overrides over base configuration.
"""

import pytest

from includedir.domain.config import get_default_config
from includedir.interface.cli.app import _merge_config
from includedir.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_cli_path_and_name_arguments():
    args = parse_args(["-i", "/in", "-o", "/out.py", "--var", "SRC"])
    overrides = args_to_overrides(args)

    assert overrides["input_path"] == "/in"
    assert overrides["output_path"] == "/out.py"
    assert overrides["variable_name"] == "SRC"


def test_cli_walk_options():
    args = parse_args(["--symlinks", "skip", "--workers", "3", "--exclude", "^\\.git$, node_modules"])
    overrides = args_to_overrides(args)

    assert overrides["symlinks"] == "skip"
    assert overrides["workers"] == 3
    assert overrides["exclude_patterns"] == ["^\\.git$", "node_modules"]


def test_cli_rejects_unknown_symlink_policy():
    with pytest.raises(SystemExit):
        parse_args(["--symlinks", "sometimes"])


def test_cli_defaults_do_not_override():
    overrides = args_to_overrides(parse_args([]))

    assert overrides["input_path"] is None
    assert "include_header" not in overrides
    assert "exclude_patterns" not in overrides

    merged = _merge_config(get_default_config(), overrides)
    assert merged == get_default_config()


def test_cli_no_header_flag():
    overrides = args_to_overrides(parse_args(["--no-header"]))
    assert overrides["include_header"] is False


def test_merge_prefers_overrides():
    base = get_default_config()
    base["variable_name"] = "FROM_FILE"
    merged = _merge_config(base, {"variable_name": "FROM_CLI", "bogus": 1})

    assert merged["variable_name"] == "FROM_CLI"
    assert "bogus" not in merged


def test_cli_log_file_is_not_a_config_override():
    args = parse_args(["--log-file", "logs/includedir.log"])

    assert args.log_file == "logs/includedir.log"
    assert "log_file" not in args_to_overrides(args)

from __future__ import annotations

"""
Configuration Domain Management.

Holds the default embedding configuration and loads optional JSON
configuration files. The configuration is a flat dictionary so CLI
overrides and file values merge with a plain update.
"""

import json
import logging
import os
from typing import Any, Dict

from includedir.domain.entry_models import SYMLINK_FOLLOW
from includedir.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_VARIABLE_NAME = "ASSETS"
DEFAULT_OUTPUT_NAME = "embedded_assets.py"

CONFIG_KEYS = (
    "input_path",
    "output_path",
    "variable_name",
    "symlinks",
    "exclude_patterns",
    "workers",
    "include_header",
)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Fresh dictionary with every known key.
    """
    return {
        "input_path": "",
        "output_path": "",
        "variable_name": DEFAULT_VARIABLE_NAME,
        "symlinks": SYMLINK_FOLLOW,
        "exclude_patterns": [],
        "workers": 1,
        "include_header": True,
    }


# -----------------------------------------------------------------------------
# Persistence
# -----------------------------------------------------------------------------
def load_config(path: str) -> Dict[str, Any]:
    """
    Load a JSON configuration file on top of the defaults.

    Unknown keys are dropped with a warning.

    Args:
        path: Path to a JSON object file.

    Returns:
        Dict[str, Any]: Defaults updated with the file values.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError("config", f"cannot read '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError("config", f"'{path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("config", f"'{path}' must contain a JSON object.")

    config = get_default_config()
    for key, value in data.items():
        if key not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown configuration key '{key}' in {path}")
            continue
        config[key] = value

    # Relative paths in a config file are anchored at the file's directory
    base_dir = os.path.dirname(os.path.abspath(path))
    for key in ("input_path", "output_path"):
        value = config.get(key)
        if isinstance(value, str) and value and not os.path.isabs(os.path.expanduser(value)):
            config[key] = os.path.join(base_dir, value)

    logger.debug(f"Configuration loaded from {path}")
    return config

from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (CLI, JSON files, builder
calls) and the embedding engine. Coerces loose types, fills defaults and
rejects values that cannot be repaired, such as an unusable identifier.
"""

import logging
from typing import Any, Dict, List, Tuple

from includedir.core.pipeline.components.filters import default_exclude_patterns
from includedir.core.rendering.serializer import validate_identifier
from includedir.domain.config import get_default_config
from includedir.domain.entry_models import SYMLINK_POLICIES
from includedir.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise instead of coercing or falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        ConfigurationError: In strict mode on any mismatch, and always for an
                            invalid variable name.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if config is None:
        config = {}
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise ConfigurationError("config", msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        config = {}

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("input_path", "output_path", "variable_name", "symlinks"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["include_header"] = _as_bool(
        merged.get("include_header"), defaults["include_header"], "include_header", warnings, strict
    )
    merged["exclude_patterns"] = _as_list_str(
        merged.get("exclude_patterns"), default_exclude_patterns(), "exclude_patterns", warnings, strict
    )
    merged["workers"] = _as_positive_int(
        merged.get("workers"), defaults["workers"], "workers", warnings, strict
    )

    # Domain-specific normalization
    merged["symlinks"] = _normalize_symlinks(merged["symlinks"], defaults["symlinks"], warnings, strict)
    validate_identifier(merged["variable_name"])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(field: str, msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ConfigurationError(field, msg)
    warnings.append(f"Invalid field '{field}': {msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    _reject(field, f"expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, int) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _reject(field, f"expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    if value is None:
        return list(fallback)

    # CSV strings come from the command line
    if isinstance(value, str) and not strict:
        return [x.strip() for x in value.split(",") if x.strip()]

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str) and item.strip():
                out.append(item.strip())
            elif not isinstance(item, str):
                _reject(f"{field}[{i}]", "expected str.", warnings, strict)
        return out

    _reject(field, f"expected list[str], received {type(value).__name__}.", warnings, strict)
    return list(fallback)


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    if isinstance(value, str) and not strict:
        try:
            value = int(value.strip())
        except ValueError:
            pass
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    _reject(field, f"expected a positive integer, received {value!r}.", warnings, strict)
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_symlinks(policy: str, fallback: str, warnings: List[str], strict: bool) -> str:
    p = policy.strip().lower()
    if p in SYMLINK_POLICIES:
        return p
    _reject("symlinks", f"unknown policy '{policy}', expected one of {', '.join(SYMLINK_POLICIES)}.",
            warnings, strict)
    return fallback

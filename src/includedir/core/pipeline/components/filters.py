from __future__ import annotations

"""
Entry Exclusion Rules.

Regex-based exclusion applied by the walker to file and directory names.
"""

import re
from typing import List

from includedir.domain.errors import ConfigurationError

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_exclude_patterns() -> List[str]:
    """Nothing is excluded by default: the whole tree is embedded."""
    return []

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            raise ConfigurationError("exclude_patterns", f"bad pattern {p!r}: {e}") from e
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """Verify if a name matches at least one compiled regex pattern."""
    return any(rx.search(name) for rx in compiled_patterns)

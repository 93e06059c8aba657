from __future__ import annotations

"""
Tree Serializer.

Renders a completed 'Dir' snapshot into Python source text that assigns a
nested 'Dir(...)' / 'File(...)' constructor expression to a chosen name.
Rendering is a pure function of the tree and the name: no I/O, no state.
"""

import keyword
import logging
from typing import List

from includedir.core.rendering.literals import bytes_literal, str_literal
from includedir.domain.errors import ConfigurationError
from includedir.domain.tree_models import Dir, File

logger = logging.getLogger(__name__)

INDENT = "    "
MODULE_HEADER = (
    "# Generated by includedir. DO NOT EDIT.\n"
    "from includedir import Dir, File\n"
    "\n"
)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_identifier(name: str) -> str:
    """
    Ensure 'name' can be bound at module level.

    Raises:
        ConfigurationError: If the name is not a usable Python identifier.
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise ConfigurationError("variable_name", f"{name!r} is not a valid identifier.")
    if keyword.iskeyword(name):
        raise ConfigurationError("variable_name", f"{name!r} is a reserved keyword.")
    return name


def serialize(root: Dir, variable_name: str) -> str:
    """
    Render the tree as a single assignment statement.

    Args:
        root: Completed tree snapshot.
        variable_name: Identifier the reconstructed tree is bound to.

    Returns:
        str: ASCII source text ending with a newline.
    """
    validate_identifier(variable_name)
    lines: List[str] = []
    _render_dir(root, lines, level=0, lead=f"{variable_name} = ", trail="")
    return "\n".join(lines) + "\n"


def render_module(root: Dir, variable_name: str, include_header: bool = True) -> str:
    """
    Render a standalone module: generated-file banner and imports, then the tree.

    Args:
        root: Completed tree snapshot.
        variable_name: Identifier the reconstructed tree is bound to.
        include_header: Prepend the banner and the 'Dir'/'File' import.

    Returns:
        str: Module source text.
    """
    body = serialize(root, variable_name)
    logger.debug(f"Rendered '{variable_name}' ({len(body)} chars)")
    if not include_header:
        return body
    return MODULE_HEADER + body

# -----------------------------------------------------------------------------
# RECURSIVE RENDERING
# -----------------------------------------------------------------------------

def _render_file(node: File, lines: List[str], level: int) -> None:
    pad = INDENT * level
    lines.append(f"{pad}File({str_literal(node.path)}, {bytes_literal(node.contents)}),")


def _render_dir(node: Dir, lines: List[str], level: int, lead: str, trail: str) -> None:
    pad = INDENT * level
    inner = INDENT * (level + 1)

    lines.append(f"{pad}{lead}Dir(")
    lines.append(f"{inner}{str_literal(node.path)},")

    if node.files:
        lines.append(f"{inner}files=(")
        for f in node.files:
            _render_file(f, lines, level + 2)
        lines.append(f"{inner}),")
    else:
        lines.append(f"{inner}files=(),")

    if node.dirs:
        lines.append(f"{inner}dirs=(")
        for d in node.dirs:
            _render_dir(d, lines, level + 2, lead="", trail=",")
        lines.append(f"{inner}),")
    else:
        lines.append(f"{inner}dirs=(),")

    lines.append(f"{pad}){trail}")

from __future__ import annotations

"""
Literal Rendering Rules.

Maps byte sequences and strings to Python literal source text using a fixed,
context-free table: every byte (or code point) always renders the same way,
so the encoding is a pure function of its input and the produced text is
plain ASCII.
"""

from typing import List

# -----------------------------------------------------------------------------
# ESCAPE TABLES
# -----------------------------------------------------------------------------

def _build_byte_table() -> List[str]:
    table: List[str] = []
    for value in range(256):
        if value == 0x22:
            table.append('\\"')
        elif value == 0x5C:
            table.append("\\\\")
        elif 0x20 <= value <= 0x7E:
            table.append(chr(value))
        else:
            table.append(f"\\x{value:02x}")
    return table


_BYTE_TABLE: List[str] = _build_byte_table()

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def escape_bytes(data: bytes) -> str:
    """Escape raw bytes for the body of a double-quoted bytes literal."""
    return "".join(_BYTE_TABLE[b] for b in data)


def bytes_literal(data: bytes) -> str:
    """
    Render bytes as a 'b"..."' literal that evaluates to exactly 'data'.

    Args:
        data: Arbitrary bytes (NUL, quotes, backslashes, non-UTF-8 included).

    Returns:
        str: ASCII source text of the literal.
    """
    return f'b"{escape_bytes(data)}"'


def escape_str(text: str) -> str:
    """Escape a string for the body of a double-quoted str literal."""
    out: List[str] = []
    for ch in text:
        cp = ord(ch)
        if cp < 0x80:
            out.append(_BYTE_TABLE[cp])
        elif cp < 0x100:
            out.append(f"\\x{cp:02x}")
        elif cp < 0x10000:
            out.append(f"\\u{cp:04x}")
        else:
            out.append(f"\\U{cp:08x}")
    return "".join(out)


def str_literal(text: str) -> str:
    """Render a string as a '"..."' literal (surrogate-escaped names included)."""
    return f'"{escape_str(text)}"'

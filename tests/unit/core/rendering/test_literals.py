from __future__ import annotations

"""
Unit tests for the literal rendering rules.

Every byte value must decode back to itself, and the produced text must be
plain ASCII without raw line breaks.
"""

import ast

import pytest

from includedir.core.rendering.literals import bytes_literal, escape_bytes, str_literal


@pytest.mark.parametrize("value", range(256))
def test_every_single_byte_round_trips(value: int) -> None:
    data = bytes([value])
    literal = bytes_literal(data)

    assert literal.isascii()
    assert "\n" not in literal and "\r" not in literal
    assert ast.literal_eval(literal) == data


def test_escaping_is_context_free() -> None:
    """A byte always maps to the same text, whatever surrounds it."""
    assert escape_bytes(b'"') == '\\"'
    assert escape_bytes(b'a"b') == 'a\\"b'
    assert escape_bytes(b"\\x41") == "\\\\x41"
    assert escape_bytes(b"\x00\xff") == "\\x00\\xff"
    assert escape_bytes(b"") == ""


def test_tricky_sequences_round_trip() -> None:
    data = b'\x00"\\\'\n\r\t\x7f\x80\xfe\xff' + "é".encode("utf-8") + b"\\\\x00"
    assert ast.literal_eval(bytes_literal(data)) == data


@pytest.mark.parametrize("text", [
    "plain.txt",
    'quote".txt',
    "back\\slash",
    "café/naïve",
    "日本/\U0001f600.txt",
    "bad\udc80name",
    "tab\tname",
])
def test_str_literal_round_trips(text: str) -> None:
    literal = str_literal(text)
    assert literal.isascii()
    assert ast.literal_eval(literal) == text

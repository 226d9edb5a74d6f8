"""Character classes for the GML lexical rules.

Every predicate takes a single code point and answers from fixed literal sets
or the interpreter's Unicode database, so the classifier holds no mutable
state and can be shared by concurrent parses.
"""

from __future__ import annotations

import unicodedata

WHITESPACE = frozenset("\t\v\f \u00a0\ufeff")
LINE_TERMINATORS = frozenset("\n\r\u2028\u2029")
QUOTES = frozenset("\"'")
DECIMAL_DIGITS = frozenset("0123456789")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

ZWNJ = "\u200c"
ZWJ = "\u200d"

# Escape character -> decoded text. ``0`` and ``u`` are handled separately.
SINGLE_ESCAPES: dict[str, str] = {
    "'": "'",
    '"': '"',
    "\\": "\\",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_LETTER_CATEGORIES = frozenset({"Lu", "Ll", "Lt", "Lm", "Lo", "Nl"})
_PART_CATEGORIES = frozenset({"Mn", "Mc", "Nd", "Pc"})


def category(ch: str) -> str:
    """Unicode general category of ``ch``, e.g. ``"Lu"``."""
    return unicodedata.category(ch)


def is_whitespace(ch: str) -> bool:
    return ch in WHITESPACE or category(ch) == "Zs"


def is_line_terminator(ch: str) -> bool:
    return ch in LINE_TERMINATORS


def is_identifier_start(ch: str) -> bool:
    return ch == "$" or ch == "_" or category(ch) in _LETTER_CATEGORIES


def is_identifier_part(ch: str) -> bool:
    if is_identifier_start(ch) or ch == ZWNJ or ch == ZWJ:
        return True
    return category(ch) in _PART_CATEGORIES


def is_decimal_digit(ch: str) -> bool:
    return ch in DECIMAL_DIGITS


def is_hex_digit(ch: str) -> bool:
    return ch in HEX_DIGITS

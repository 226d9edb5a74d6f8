"""Shared type definitions for gml-parser.

Enums used across the lexer, the structural parser, the error model and the
graph conversion.
"""

from __future__ import annotations

from enum import Enum, auto


class ValueKind(Enum):
    String = auto()  # "text" or 'text'
    Number = auto()  # -1, 0.5, .5, 5.
    Object = auto()  # [ ... ]


class QuoteStyle(Enum):
    Double = '"'
    Single = "'"


class ErrorKind(Enum):
    # Higher value wins when several failures share the furthest offset.
    Structural = 1
    Encoding = 2
    Lexical = 3


class Rule(Enum):
    """Grammar rules that can be used as a parse entry point."""

    Identifier = "identifier"
    String = "string"
    Number = "number"
    Value = "value"
    Pair = "pair"
    Document = "document"

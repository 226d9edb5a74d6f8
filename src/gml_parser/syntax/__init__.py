"""Parse tree types."""

from gml_parser.syntax.types import (
    Document,
    Identifier,
    Number,
    Object,
    Pair,
    Span,
    StringLiteral,
    Value,
)

__all__ = [
    "Document",
    "Identifier",
    "Number",
    "Object",
    "Pair",
    "Span",
    "StringLiteral",
    "Value",
]

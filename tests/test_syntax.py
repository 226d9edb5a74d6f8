"""Tests for gml_parser.syntax.types.

Verifies construction, equality, immutability and helper methods.
"""

import dataclasses

import pytest

from gml_parser import (
    Document,
    Identifier,
    Number,
    Object,
    Pair,
    QuoteStyle,
    Span,
    StringLiteral,
    ValueKind,
)


# ─── ValueKind ───────────────────────────────────────────────────────────────

def test_value_kinds():
    assert StringLiteral("x").kind == ValueKind.String
    assert Number("1").kind == ValueKind.Number
    assert Object().kind == ValueKind.Object
    assert len(ValueKind) == 3


# ─── Equality ────────────────────────────────────────────────────────────────

def test_spans_do_not_affect_equality():
    assert Identifier("a", Span(0, 1)) == Identifier("a", Span(5, 6))
    assert Number("1", None, Span(0, 1)) == Number("1")
    assert Object((), Span(0, 2)) == Object()


def test_quote_style_does_not_affect_equality():
    assert StringLiteral("x", QuoteStyle.Single) == StringLiteral("x", QuoteStyle.Double)


def test_sign_affects_equality():
    assert Number("1", "-") != Number("1")
    assert Number("1", "+") != Number("1")


def test_frozen():
    pair = Pair(Identifier("a"), Number("1"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        pair.key = Identifier("b")
    with pytest.raises(dataclasses.FrozenInstanceError):
        Object().pairs = ()


# ─── Number ──────────────────────────────────────────────────────────────────

def test_number_str_keeps_sign():
    assert str(Number("5", "-")) == "-5"
    assert str(Number(".5", "+")) == "+.5"
    assert str(Number("0")) == "0"


def test_positive_sign_value():
    assert Number("3", "+").value == 3


# ─── Object / Document ───────────────────────────────────────────────────────

def test_object_helpers():
    obj = Object((Pair(Identifier("a"), Number("1")), Pair(Identifier("a"), Number("2"))))
    assert obj.keys() == ["a", "a"]
    assert obj.get("a") == Number("1")
    assert obj.get_all("a") == [Number("1"), Number("2")]
    assert obj.to_python() == [("a", 1), ("a", 2)]


def test_document_accessors():
    doc = Document(Pair(Identifier("graph"), Object()))
    assert doc.key == "graph"
    assert doc.value == Object()
    assert doc.to_python() == {"graph": []}
    assert doc.to_object() == Object((doc.pair,))


def test_span_slice():
    assert Span(2, 5).slice("a [12]") == "[12"

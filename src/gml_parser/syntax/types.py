"""Parse tree data structures for GML documents.

These types represent the parsed form of the input: tokens (Identifier,
StringLiteral, Number), blocks (Object), key/value pairs (Pair) and the
top-level Document. All of them are frozen; a parse builds a fresh tree
every time.

Spans and quote styles describe where a node came from, not what it is, so
they are left out of equality: two parses of the same text compare equal,
and so do ``"x"`` and ``'x'``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, Optional, Union

from gml_parser.types import QuoteStyle, ValueKind


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` character range in the source text."""

    start: int
    end: int

    def slice(self, src: str) -> str:
        return src[self.start : self.end]


@dataclass(frozen=True)
class Identifier:
    # Escapes are decoded; ``text`` never holds a backslash.
    text: str
    span: Optional[Span] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.text

    def raw(self, src: str) -> str:
        """The identifier exactly as written in ``src``, escapes included."""
        if self.span is None:
            return self.text
        return self.span.slice(src)


@dataclass(frozen=True)
class StringLiteral:
    kind: ClassVar[ValueKind] = ValueKind.String

    text: str
    quote: QuoteStyle = field(default=QuoteStyle.Double, compare=False)
    span: Optional[Span] = field(default=None, compare=False)

    def to_python(self) -> str:
        return self.text


@dataclass(frozen=True)
class Number:
    """A numeric literal kept as text.

    ``text`` holds the digits without the sign, e.g. ``"1"``, ``"0.5"``,
    ``".5"`` or ``"5."``; ``sign`` is ``"+"``, ``"-"`` or None.
    """

    kind: ClassVar[ValueKind] = ValueKind.Number

    text: str
    sign: Optional[str] = None
    span: Optional[Span] = field(default=None, compare=False)

    @property
    def is_integer(self) -> bool:
        return "." not in self.text

    @property
    def value(self) -> int | float:
        magnitude: int | float = int(self.text) if self.is_integer else float(self.text)
        return -magnitude if self.sign == "-" else magnitude

    def to_python(self) -> int | float:
        return self.value

    def __str__(self) -> str:
        return f"{self.sign or ''}{self.text}"


@dataclass(frozen=True)
class Pair:
    key: Identifier
    value: Value

    def to_python(self) -> tuple[str, Any]:
        return (self.key.text, self.value.to_python())


@dataclass(frozen=True)
class Object:
    """A ``[ ... ]`` block: pairs in source order, duplicates kept."""

    kind: ClassVar[ValueKind] = ValueKind.Object

    pairs: tuple[Pair, ...] = ()
    span: Optional[Span] = field(default=None, compare=False)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def keys(self) -> list[str]:
        return [pair.key.text for pair in self.pairs]

    def get(self, key: str) -> Value | None:
        """Return the value of the first pair named ``key``, or None."""
        for pair in self.pairs:
            if pair.key.text == key:
                return pair.value
        return None

    def get_all(self, key: str) -> list[Value]:
        return [pair.value for pair in self.pairs if pair.key.text == key]

    def to_python(self) -> list[tuple[str, Any]]:
        return [pair.to_python() for pair in self.pairs]


Value = Union[StringLiteral, Number, Object]


@dataclass(frozen=True)
class Document:
    """A parsed GML text: exactly one top-level pair."""

    pair: Pair

    @property
    def key(self) -> str:
        return self.pair.key.text

    @property
    def value(self) -> Value:
        return self.pair.value

    def to_object(self) -> Object:
        """Wrap the top-level pair in an outer block."""
        return Object(pairs=(self.pair,))

    def to_python(self) -> dict[str, Any]:
        return {self.key: self.value.to_python()}

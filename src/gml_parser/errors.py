"""Error model for gml-parser.

Every error raised to callers derives from ``GMLError``, itself a
``ValueError``. Syntax errors come in three kinds (lexical, structural,
encoding) and always carry the offset, line and column of the furthest
point the parser reached, plus the names of the rules it expected there.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gml_parser.chars import is_line_terminator
from gml_parser.types import ErrorKind


class GMLError(ValueError):
    """Base class for all errors surfaced to users."""


class GMLSyntaxError(GMLError):
    """Raised when the input is not a well-formed GML document."""

    kind: ErrorKind = ErrorKind.Structural

    def __init__(
        self,
        message: str,
        *,
        offset: int,
        line: int,
        column: int,
        expected: tuple[str, ...] = (),
        rule_stack: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = expected
        self.rule_stack = rule_stack

    def format(self) -> str:
        text = f"{self.line}:{self.column}: {self.message}"
        if self.rule_stack:
            text = f"{text} (in {' > '.join(self.rule_stack)})"
        return text

    def __str__(self) -> str:
        return self.format()


class LexicalError(GMLSyntaxError):
    """Malformed identifier, string or number token."""

    kind = ErrorKind.Lexical


class StructuralError(GMLSyntaxError):
    """Malformed block, missing line terminator or trailing content."""

    kind = ErrorKind.Structural


class EncodingError(GMLSyntaxError):
    """A code point outside the class required at that position."""

    kind = ErrorKind.Encoding


class GraphError(GMLError):
    """Raised when a parse tree does not describe a graph."""


_ERROR_CLASSES: dict[ErrorKind, type[GMLSyntaxError]] = {
    ErrorKind.Lexical: LexicalError,
    ErrorKind.Structural: StructuralError,
    ErrorKind.Encoding: EncodingError,
}


def locate(src: str, offset: int) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` of ``offset`` in ``src``.

    CR LF counts as a single line break.
    """
    line = 1
    line_start = 0
    for i in range(min(offset, len(src))):
        ch = src[i]
        if not is_line_terminator(ch):
            continue
        if ch == "\r" and src.startswith("\n", i + 1):
            continue
        line += 1
        line_start = i + 1
    return line, offset - line_start + 1


def describe_char(src: str, offset: int) -> str:
    if offset >= len(src):
        return "end of input"
    return repr(src[offset])


def join_expected(expected: tuple[str, ...]) -> str:
    if not expected:
        return ""
    if len(expected) == 1:
        return expected[0]
    return f"{', '.join(expected[:-1])} or {expected[-1]}"


def syntax_error(
    src: str,
    offset: int,
    kind: ErrorKind,
    *,
    expected: tuple[str, ...] = (),
    rule_stack: tuple[str, ...] = (),
    message: str | None = None,
) -> GMLSyntaxError:
    """Build the error subclass matching ``kind`` for a failure at ``offset``."""
    if message is None:
        message = f"unexpected {describe_char(src, offset)}"
        if expected:
            message = f"{message}; expected {join_expected(expected)}"
    line, column = locate(src, offset)
    return _ERROR_CLASSES[kind](
        message,
        offset=offset,
        line=line,
        column=column,
        expected=expected,
        rule_stack=rule_stack,
    )


@dataclass
class FailureTracker:
    """Furthest-failure accumulator threaded through one parse.

    Failures before the furthest offset seen so far are dropped; failures at
    that offset add their expectation to the set; a failure further along
    replaces everything.
    """

    offset: int = -1
    expected: list[str] = field(default_factory=list)
    kind: ErrorKind = ErrorKind.Structural
    rule_stack: tuple[str, ...] = ()

    def record(self, offset: int, expected: str, kind: ErrorKind, rule_stack: tuple[str, ...]) -> None:
        if offset < self.offset:
            return
        if offset > self.offset:
            self.offset = offset
            self.expected = []
            self.kind = kind
            self.rule_stack = rule_stack
        elif kind.value > self.kind.value:
            self.kind = kind
            self.rule_stack = rule_stack
        if expected not in self.expected:
            self.expected.append(expected)

    def to_error(self, src: str) -> GMLSyntaxError:
        offset = max(self.offset, 0)
        return syntax_error(
            src,
            offset,
            self.kind,
            expected=tuple(self.expected),
            rule_stack=self.rule_stack,
        )

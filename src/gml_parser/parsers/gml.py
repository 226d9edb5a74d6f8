r"""GML parser — hand-rolled recursive descent over a PEG grammar.

Grammar (whitespace may appear between any two tokens; line terminators are
significant and never count as whitespace):

    document   = line_term* pair line_term* EOI
    pair       = identifier value
    value      = string / number / block
    block      = "[" "]"
               / "[" line_term "]"
               / line_term? "[" line_term pair (line_terms pair)*
                 line_terms? ","? "]"
    line_terms = line_term+

    identifier = id_start id_part*
    id_start   = letter / "$" / "_" / "\" unicode_escape
    id_part    = id_start / mark / decimal / connector / ZWNJ / ZWJ
    string     = '"' (escape / !('"' / "\" / line_term) ANY)* '"'
               / "'" (escape / !("'" / "\" / line_term) ANY)* "'"
    escape     = "\" (line_term / ['"\\bfnrtv] / "0" / unicode_escape)
    number     = ("+" / "-")? (int "." digit* / "." digit+ / int)
    int        = "0" / [1-9] digit*

Every choice is decided by one character of lookahead, so the parser never
backtracks over a completed token.
"""

from __future__ import annotations

from typing import Callable, Union

from gml_parser.chars import QUOTES, is_decimal_digit, is_line_terminator
from gml_parser.config import ParseConfig
from gml_parser.errors import syntax_error
from gml_parser.parsers.lexical import _Cursor
from gml_parser.syntax.types import Document, Identifier, Number, Object, Pair, Span, StringLiteral, Value
from gml_parser.types import ErrorKind, Rule

TreeNode = Union[Document, Pair, Identifier, StringLiteral, Number, Object]

_NUMBER_START = ("+", "-", ".")


class _GmlCursor(_Cursor):
    """Structural rules: pairs, values, blocks and the document."""

    def skip_line_terminators(self, record: bool = True) -> bool:
        """Consume one or more line terminators and the whitespace around them."""
        saved = self.pos
        self.skip_ws()
        count = 0
        while self.consume_line_terminator():
            count += 1
            self.skip_ws()
        if record:
            self.fail("line terminator")
        if not count:
            self.pos = saved
        return count > 0

    # ── Value ─────────────────────────────────────────────────────────────────

    def parse_value(self, depth: int) -> Value | None:
        """Pick the value alternative from the next character."""
        with self.rule("value"):
            ch = self.char()
            if ch in QUOTES:
                return self.parse_string()
            if ch in _NUMBER_START or is_decimal_digit(ch):
                return self.parse_number()
            if ch == "[" or (ch and is_line_terminator(ch)):
                return self.parse_block(depth + 1)
            self.fail("string")
            self.fail("number")
            self.fail("block")
            return None

    # ── Block ─────────────────────────────────────────────────────────────────

    def parse_block(self, depth: int) -> Object | None:
        with self.rule("block"):
            if depth > self.config.max_depth:
                raise syntax_error(
                    self.src,
                    self.pos,
                    ErrorKind.Structural,
                    rule_stack=tuple(self.rules),
                    message=f"blocks nested deeper than {self.config.max_depth} levels",
                )
            start = self.pos
            leading = self.consume_line_terminator()
            self.skip_ws()
            opened = self.pos
            if not self.consume("["):
                self.fail("'['")
                self.pos = start
                return None
            self.skip_ws()
            # Empty forms: "[]" and "[" line_term "]".
            if not leading:
                if self.consume("]"):
                    return Object((), Span(opened, self.pos))
                self.fail("']'")
            if not self.consume_line_terminator():
                self.fail("line terminator")
                self.pos = start
                return None
            self.skip_ws()
            if not leading:
                if self.consume("]"):
                    return Object((), Span(opened, self.pos))
                self.fail("']'")
            pairs = self._block_body(depth)
            if pairs is None:
                self.pos = start
                return None
            return Object(tuple(pairs), Span(opened, self.pos))

    def _block_body(self, depth: int) -> list[Pair] | None:
        """Pairs up to and including the closing bracket of a non-empty block."""
        first = self.parse_pair(depth)
        if first is None:
            return None
        pairs = [first]
        while True:
            saved = self.pos
            if not self.skip_line_terminators():
                break
            pair = self.parse_pair(depth)
            if pair is None:
                self.pos = saved
                break
            pairs.append(pair)
        self.skip_line_terminators()
        self.skip_ws()
        if self.consume(","):
            self.skip_ws()
        else:
            self.fail("','")
        if not self.consume("]"):
            self.fail("']'")
            return None
        return pairs

    # ── Pair ──────────────────────────────────────────────────────────────────

    def parse_pair(self, depth: int) -> Pair | None:
        with self.rule("pair"):
            start = self.pos
            key = self.parse_identifier()
            if key is None:
                return None
            self.skip_ws()
            value = self.parse_value(depth)
            if value is None:
                self.pos = start
                return None
            return Pair(key, value)

    # ── Document ──────────────────────────────────────────────────────────────

    def parse_document(self) -> Document | None:
        with self.rule("document"):
            self.skip_line_terminators(record=False)
            self.skip_ws()
            pair = self.parse_pair(0)
            if pair is None:
                return None
            self.skip_line_terminators()
            self.skip_ws()
            if not self.eof():
                self.fail("end of input")
                return None
            return Document(pair)


_ENTRY_POINTS: dict[Rule, Callable[[_GmlCursor], TreeNode | None]] = {
    Rule.Identifier: _GmlCursor.parse_identifier,
    Rule.String: _GmlCursor.parse_string,
    Rule.Number: _GmlCursor.parse_number,
    Rule.Value: lambda cursor: cursor.parse_value(0),
    Rule.Pair: lambda cursor: cursor.parse_pair(0),
    Rule.Document: _GmlCursor.parse_document,
}


class GmlParser:
    """GML text parser.

    A parser holds only its configuration, so one instance can serve any
    number of parses, from any number of threads.
    """

    def __init__(self, config: ParseConfig | None = None) -> None:
        self.config = config or ParseConfig()

    def parse(self, src: str) -> Document:
        """Parse a whole document. Raises a ``GMLSyntaxError`` subclass."""
        return self.parse_rule(src, Rule.Document)

    def parse_rule(self, src: str, rule: Rule) -> TreeNode:
        """Parse all of ``src`` as a single ``rule``."""
        if not isinstance(src, str):
            raise TypeError(f"expected str, got {type(src).__name__}")
        cursor = _GmlCursor(src=src, config=self.config)
        try:
            node = _ENTRY_POINTS[rule](cursor)
        except RecursionError as e:
            raise syntax_error(
                src,
                cursor.pos,
                ErrorKind.Structural,
                message="blocks nested too deeply for the interpreter stack",
            ) from e
        if node is not None and not cursor.eof():
            cursor.fail("end of input")
            node = None
        if node is None:
            raise cursor.failures.to_error(src)
        return node

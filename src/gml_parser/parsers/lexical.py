"""Cursor primitives and token rules: identifiers, strings and numbers.

Token rules are atomic. Each one either consumes a whole token and returns
it, or records why it stopped and leaves the cursor where it started.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from gml_parser.chars import (
    QUOTES,
    SINGLE_ESCAPES,
    is_decimal_digit,
    is_hex_digit,
    is_identifier_part,
    is_identifier_start,
    is_line_terminator,
    is_whitespace,
)
from gml_parser.config import ParseConfig
from gml_parser.errors import FailureTracker
from gml_parser.syntax.types import Identifier, Number, Span, StringLiteral
from gml_parser.types import ErrorKind, QuoteStyle

_SIGNS = ("+", "-")


def _is_surrogate(ch: str, low: int, high: int) -> bool:
    return low <= ord(ch) <= high


@dataclass
class _Cursor:
    """Stateful parser cursor over the input string."""

    src: str
    config: ParseConfig = field(default_factory=ParseConfig)
    pos: int = 0
    failures: FailureTracker = field(default_factory=FailureTracker)
    rules: list[str] = field(default_factory=list)

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def char(self, ahead: int = 0) -> str:
        """Character at ``pos + ahead``, or ``""`` past the end."""
        i = self.pos + ahead
        return self.src[i] if i < len(self.src) else ""

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def consume(self, s: str) -> bool:
        if self.peek(s):
            self.pos += len(s)
            return True
        return False

    def skip_ws(self) -> None:
        while self.pos < len(self.src) and is_whitespace(self.src[self.pos]):
            self.pos += 1

    def consume_line_terminator(self) -> bool:
        if self.consume("\r\n"):
            return True
        ch = self.char()
        if ch and is_line_terminator(ch):
            self.pos += 1
            return True
        return False

    # ── Failure bookkeeping ───────────────────────────────────────────────────

    @contextmanager
    def rule(self, name: str) -> Iterator[None]:
        self.rules.append(name)
        try:
            yield
        finally:
            self.rules.pop()

    def fail(self, expected: str, kind: ErrorKind = ErrorKind.Structural, at: int | None = None) -> None:
        offset = self.pos if at is None else at
        self.failures.record(offset, expected, kind, tuple(self.rules))

    # ── Escapes ───────────────────────────────────────────────────────────────

    def _unicode_escape(self, at: int) -> str | None:
        """Decode the ``\\uXXXX`` escape whose backslash is at ``at``.

        Does not move the cursor.
        """
        if not self.src.startswith("u", at + 1):
            self.fail("unicode escape", ErrorKind.Lexical, at=at + 1)
            return None
        digits = self.src[at + 2 : at + 6]
        for i, ch in enumerate(digits):
            if not is_hex_digit(ch):
                self.fail("hex digit", ErrorKind.Lexical, at=at + 2 + i)
                return None
        if len(digits) < 4:
            self.fail("hex digit", ErrorKind.Lexical, at=at + 2 + len(digits))
            return None
        return chr(int(digits, 16))

    def _low_surrogate_escape(self) -> str | None:
        """A low-surrogate escape at the cursor, if there is one. Records nothing."""
        if self.char() != "\\" or self.char(1) != "u":
            return None
        digits = self.src[self.pos + 2 : self.pos + 6]
        if len(digits) < 4 or not all(is_hex_digit(ch) for ch in digits):
            return None
        low = chr(int(digits, 16))
        return low if _is_surrogate(low, 0xDC00, 0xDFFF) else None

    def _string_escape(self) -> str | None:
        nxt = self.char(1)
        if nxt and is_line_terminator(nxt):
            # Line continuation: contributes nothing to the value.
            self.pos += 1
            self.consume_line_terminator()
            return ""
        if nxt in SINGLE_ESCAPES:
            self.pos += 2
            return SINGLE_ESCAPES[nxt]
        if nxt == "0":
            self.pos += 2
            return "\0"
        if nxt == "u":
            decoded = self._unicode_escape(self.pos)
            if decoded is None:
                return None
            self.pos += 6
            if _is_surrogate(decoded, 0xD800, 0xDBFF):
                low = self._low_surrogate_escape()
                if low is not None:
                    self.pos += 6
                    return chr(0x10000 + ((ord(decoded) - 0xD800) << 10) + (ord(low) - 0xDC00))
            return decoded
        self.fail("escape sequence", ErrorKind.Lexical, at=self.pos + 1)
        return None

    # ── Identifier ────────────────────────────────────────────────────────────

    def _identifier_char(self, accept: Callable[[str], bool], expected: str) -> str | None:
        ch = self.char()
        if ch == "\\":
            # The decoded character must pass ``accept`` before the escape is consumed.
            decoded = self._unicode_escape(self.pos)
            if decoded is None:
                return None
            if not accept(decoded):
                self.fail(expected, ErrorKind.Encoding)
                return None
            self.pos += 6
            return decoded
        if ch and accept(ch):
            self.pos += 1
            return ch
        return None

    def parse_identifier(self) -> Identifier | None:
        with self.rule("identifier"):
            start = self.pos
            first = self._identifier_char(is_identifier_start, "identifier")
            if first is None:
                self.fail("identifier", ErrorKind.Structural if self.eof() else ErrorKind.Encoding)
                return None
            chars = [first]
            while True:
                ch = self._identifier_char(is_identifier_part, "identifier character")
                if ch is None:
                    break
                chars.append(ch)
            return Identifier("".join(chars), Span(start, self.pos))

    # ── String ────────────────────────────────────────────────────────────────

    def parse_string(self) -> StringLiteral | None:
        with self.rule("string"):
            quote = self.char()
            if quote not in QUOTES:
                self.fail("string")
                return None
            start = self.pos
            self.pos += 1
            buf: list[str] = []
            while True:
                ch = self.char()
                if ch == quote:
                    self.pos += 1
                    break
                if not ch or is_line_terminator(ch):
                    self.fail(f"closing {quote!r}", ErrorKind.Lexical)
                    self.pos = start
                    return None
                if ch == "\\":
                    decoded = self._string_escape()
                    if decoded is None:
                        self.pos = start
                        return None
                    buf.append(decoded)
                    continue
                buf.append(ch)
                self.pos += 1
            return StringLiteral("".join(buf), QuoteStyle(quote), Span(start, self.pos))

    # ── Number ────────────────────────────────────────────────────────────────

    def _digits(self) -> int:
        begin = self.pos
        while is_decimal_digit(self.char()):
            self.pos += 1
        return self.pos - begin

    def parse_number(self) -> Number | None:
        with self.rule("number"):
            start = self.pos
            sign = None
            if self.char() in _SIGNS:
                sign = self.char()
                self.pos += 1
            body = self.pos
            ch = self.char()
            if ch == "0":
                self.pos += 1
            elif is_decimal_digit(ch):
                self._digits()
            elif ch == ".":
                self.pos += 1
                if not self._digits():
                    self.fail("digit", ErrorKind.Lexical)
                    self.pos = start
                    return None
                return Number(self.src[body : self.pos], sign, Span(start, self.pos))
            else:
                if sign is None:
                    self.fail("number")
                else:
                    self.fail("digit", ErrorKind.Lexical)
                    self.fail("'.'", ErrorKind.Lexical)
                self.pos = start
                return None
            if self.consume("."):
                self._digits()
            return Number(self.src[body : self.pos], sign, Span(start, self.pos))

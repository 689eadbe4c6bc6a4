"""bozon lexer: the lexical primitives the grammar is built from."""

from __future__ import annotations

from bozon.ast import Ident, PrefixKind, String
from bozon.errors import ParseError
from bozon.span import Span
from bozon.tokens import STRING_QUOTE, is_ident_char, is_whitespace

# Longest marker first, so ",@" is never split into "," and "@".
PREFIX_MARKERS: tuple[tuple[str, PrefixKind], ...] = (
    (",@", PrefixKind.UNQUOTE_SPLICING),
    ("'", PrefixKind.QUOTE),
    ("`", PrefixKind.QUASI_QUOTE),
    (",", PrefixKind.UNQUOTE),
)


class Lexer:
    """Cursor over source text that recognises one lexical form at a time.

    Each ``lex_*`` method either consumes a complete form and returns it
    with its span, or returns None and leaves the cursor untouched.
    """

    def __init__(self, source: str, pos: int = 0) -> None:
        self._source = source
        self._pos = pos

    @property
    def pos(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    def peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def skip_whitespace(self) -> int:
        """Consume a (possibly empty) run of whitespace; return the new offset."""
        while self._pos < len(self._source) and is_whitespace(self._source[self._pos]):
            self._pos += 1
        return self._pos

    def lex_prefix(self) -> tuple[PrefixKind, Span] | None:
        for marker, kind in PREFIX_MARKERS:
            if self._source.startswith(marker, self._pos):
                start = self._pos
                self._pos += len(marker)
                return kind, Span.from_bounds(start, self._pos)
        return None

    def lex_string(self) -> tuple[String, Span] | None:
        if self.peek() != STRING_QUOTE:
            return None
        start = self._pos
        close = self._source.find(STRING_QUOTE, start + 1)
        if close == -1:
            # Unterminated: leave it for the ident rule
            return None
        span = Span.from_bounds(start, close + 1)
        self._pos = close + 1
        return String(self._source[start + 1 : close]), span

    def lex_ident(self) -> tuple[Ident, Span] | None:
        start = self._pos
        end = start
        while end < len(self._source) and is_ident_char(self._source[end]):
            end += 1
        if end == start:
            return None
        span = Span.from_bounds(start, end)
        self._pos = end
        return Ident(self._source[start:end]), span


def lex_prefix(text: str) -> tuple[PrefixKind, Span]:
    """Lex a prefix marker at the start of *text*."""
    result = Lexer(text).lex_prefix()
    if result is None:
        raise ParseError(0, ("prefix",), text)
    return result


def lex_string(text: str) -> tuple[String, Span]:
    """Lex a string literal at the start of *text*."""
    result = Lexer(text).lex_string()
    if result is None:
        raise ParseError(0, ("string",), text)
    return result


def lex_ident(text: str) -> tuple[Ident, Span]:
    """Lex an identifier at the start of *text*."""
    result = Lexer(text).lex_ident()
    if result is None:
        raise ParseError(0, ("ident",), text)
    return result

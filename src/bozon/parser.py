"""bozon parser: turns source text into a tuple of top-level atoms."""

from __future__ import annotations

from dataclasses import dataclass, field

from bozon.ast import Atom, BracketKind, List, PrefixKind, Program
from bozon.errors import NestingError, ParseError
from bozon.lexer import Lexer
from bozon.span import Span
from bozon.tokens import DELIMITER_PAIRS

DEFAULT_MAX_DEPTH = 256

_BODY_LABELS: tuple[str, ...] = ("list", "string", "ident")
_SEXP_LABELS: tuple[str, ...] = ("prefix", *_BODY_LABELS)
_END_LABEL = "end of input"


@dataclass(slots=True)
class _OpenList:
    """A list whose closing delimiter has not been reached yet."""

    prefix: PrefixKind | None
    prefix_span: Span | None
    start: int
    bracket: BracketKind
    items: list[Atom] = field(default_factory=list)

    def close(self, end: int) -> Atom:
        span = Span.from_bounds(self.start, end)
        if self.prefix_span is not None:
            span = self.prefix_span + span
        return Atom(self.prefix, List(tuple(self.items), self.bracket), span)


class Parser:
    """S-expression parser for one source unit.

    Nested lists are tracked on an explicit stack rather than the Python call
    stack, so input depth is bounded by ``max_depth`` alone. A Parser is
    single-use; ``parse()`` builds a fresh one per call.
    """

    def __init__(self, source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self._source = source
        self._lexer = Lexer(source)
        self._max_depth = max_depth
        self._stack: list[_OpenList] = []
        self._program: list[Atom] = []

    # ------------------------------------------------------------------
    # Program level
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        lexer = self._lexer
        lexer.skip_whitespace()

        while True:
            if self._stack:
                frame = self._stack[-1]
                if lexer.peek() == frame.bracket.close:
                    self._close_list(frame)
                    continue
                follow = (repr(frame.bracket.close),)
            else:
                if lexer.at_end():
                    return tuple(self._program)
                follow = (_END_LABEL,)

            self._parse_sexp(follow)

    def _emit(self, atom: Atom) -> None:
        if self._stack:
            self._stack[-1].items.append(atom)
        else:
            self._program.append(atom)
        self._lexer.skip_whitespace()

    # ------------------------------------------------------------------
    # S-expressions
    # ------------------------------------------------------------------

    def _parse_sexp(self, follow: tuple[str, ...]) -> None:
        """Parse one s-expression, or open a list and leave it on the stack."""
        lexer = self._lexer
        prefix: PrefixKind | None = None
        prefix_span: Span | None = None
        expected = _SEXP_LABELS + follow

        lexed = lexer.lex_prefix()
        if lexed is not None:
            prefix, prefix_span = lexed
            lexer.skip_whitespace()
            # A marker commits to an atom: nothing else may follow it
            expected = _BODY_LABELS

        if lexer.peek() in DELIMITER_PAIRS:
            self._open_list(prefix, prefix_span)
            return

        body = lexer.lex_string() or lexer.lex_ident()
        if body is None:
            raise self._error(expected)

        kind, span = body
        if prefix_span is not None:
            span = prefix_span + span
        self._emit(Atom(prefix, kind, span))

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _open_list(self, prefix: PrefixKind | None, prefix_span: Span | None) -> None:
        start = self._lexer.pos
        if len(self._stack) >= self._max_depth:
            raise NestingError(start, self._max_depth, self._source)
        bracket = BracketKind.for_opener(self._lexer.advance())
        self._stack.append(_OpenList(prefix, prefix_span, start, bracket))
        self._lexer.skip_whitespace()

    def _close_list(self, frame: _OpenList) -> None:
        self._lexer.advance()  # consume closing delimiter
        # Padding after the closer belongs to the list
        end = self._lexer.skip_whitespace()
        self._stack.pop()
        self._emit(frame.close(end))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, expected: tuple[str, ...]) -> ParseError:
        return ParseError(self._lexer.pos, expected, self._source)


def parse(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Program:
    """Convenience function: parse source text and return its top-level atoms."""
    return Parser(source, max_depth).parse()

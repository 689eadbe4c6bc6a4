"""bozon s-expression front end: source text to span-annotated atoms."""

from __future__ import annotations

from bozon.ast import Atom, AtomKind, BracketKind, Ident, List, PrefixKind, Program, String
from bozon.errors import NestingError, ParseError, SpanRangeError
from bozon.parser import DEFAULT_MAX_DEPTH, Parser, parse
from bozon.span import MAX_SPAN_LEN, Span

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_SPAN_LEN",
    "Atom",
    "AtomKind",
    "BracketKind",
    "Ident",
    "List",
    "NestingError",
    "ParseError",
    "Parser",
    "PrefixKind",
    "Program",
    "Span",
    "SpanRangeError",
    "String",
    "parse",
]

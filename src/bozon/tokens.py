"""Lexical vocabulary, source positions, and character classification helpers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

WHITESPACE = frozenset(" \t\n\r")

# Opening delimiter -> closing delimiter
DELIMITER_PAIRS: dict[str, str] = {"(": ")", "{": "}", "[": "]"}
DELIMITERS = frozenset("()[]{}")

STRING_QUOTE = '"'


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


def is_whitespace(ch: str) -> bool:
    return ch in WHITESPACE


def is_ident_char(ch: str) -> bool:
    """Return True if ch may appear in an identifier."""
    return ch not in WHITESPACE and ch not in DELIMITERS


def line_starts(source: str) -> tuple[int, ...]:
    """Return the offset at which each line of *source* begins."""
    starts = [0]
    for idx, ch in enumerate(source):
        if ch == "\n":
            starts.append(idx + 1)
    return tuple(starts)


def position_at(source: str, offset: int, starts: tuple[int, ...] | None = None) -> Position:
    """Convert an offset into a line/column Position.

    Offsets past the end of *source* are clamped to the end.
    """
    offset = max(0, min(offset, len(source)))
    if starts is None:
        starts = line_starts(source)
    line_idx = bisect_right(starts, offset) - 1
    return Position(line_idx + 1, offset - starts[line_idx] + 1, offset)

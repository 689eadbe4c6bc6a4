"""AST node types for parsed bozon programs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bozon.span import Span


class PrefixKind(Enum):
    """Quoting marker attached to the atom that follows it."""

    QUOTE = "'"
    QUASI_QUOTE = "`"
    UNQUOTE = ","
    UNQUOTE_SPLICING = ",@"

    @property
    def marker(self) -> str:
        return self.value


class BracketKind(Enum):
    """Delimiter pair that enclosed a list."""

    ROUND = "()"
    CURLY = "{}"
    SQUARE = "[]"

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def for_opener(cls, ch: str) -> BracketKind:
        for kind in cls:
            if kind.open == ch:
                return kind
        raise ValueError(f"not an opening delimiter: {ch!r}")


@dataclass(frozen=True, slots=True)
class Ident:
    """Bare identifier, e.g. ``+`` or ``define``."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("identifier must contain at least one character")


@dataclass(frozen=True, slots=True)
class String:
    """Double-quoted string literal, content taken verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class List:
    """Bracketed sequence of atoms."""

    items: tuple[Atom, ...]
    bracket: BracketKind


AtomKind = Ident | String | List


@dataclass(frozen=True, slots=True)
class Atom:
    """One syntax node with its optional prefix and source span."""

    prefix: PrefixKind | None
    kind: AtomKind
    span: Span


Program = tuple[Atom, ...]

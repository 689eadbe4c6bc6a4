"""Shared test fixtures and helpers."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from bozon.ast import Atom, List, Program
from bozon.parser import parse


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns its top-level atoms."""

    def _parse(source: str, max_depth: int | None = None) -> Program:
        if max_depth is None:
            return parse(source)
        return parse(source, max_depth)

    return _parse


def shape(atom: Atom) -> tuple:
    """Strip spans from an atom, keeping prefixes, kinds, and nesting."""
    kind = atom.kind
    if isinstance(kind, List):
        return (atom.prefix, kind.bracket, tuple(shape(item) for item in kind.items))
    return (atom.prefix, kind)


def shapes(atoms: Program) -> tuple:
    return tuple(shape(a) for a in atoms)


def walk(atoms: Program) -> Iterator[Atom]:
    """Yield every atom in the tree, parents before children."""
    for atom in atoms:
        yield atom
        if isinstance(atom.kind, List):
            yield from walk(atom.kind.items)


def bounds(atom: Atom) -> tuple[int, int]:
    return atom.span.start, atom.span.end

"""Tests for program and list parsing: structure and spans."""

from __future__ import annotations

import pytest

from bozon.ast import Atom, BracketKind, Ident, List, String
from bozon.span import Span
from tests.conftest import bounds


def _atom(kind, start, end, prefix=None) -> Atom:
    return Atom(prefix, kind, Span.from_bounds(start, end))


class TestEmptyLists:
    def test_round(self, parse_source):
        assert parse_source("()") == (_atom(List((), BracketKind.ROUND), 0, 2),)

    def test_round_with_space(self, parse_source):
        assert parse_source("( )") == (_atom(List((), BracketKind.ROUND), 0, 3),)

    def test_surrounding_whitespace(self, parse_source):
        assert parse_source("\t\r\n (\t\r\n )") == (_atom(List((), BracketKind.ROUND), 4, 10),)

    @pytest.mark.parametrize(
        "source, bracket",
        [("{}", BracketKind.CURLY), ("[]", BracketKind.SQUARE), ("()", BracketKind.ROUND)],
    )
    def test_bracket_kinds(self, parse_source, source, bracket):
        (atom,) = parse_source(source)
        assert atom.kind == List((), bracket)


class TestSimpleLists:
    def test_call(self, parse_source):
        expected = _atom(
            List(
                (
                    _atom(Ident("+"), 1, 2),
                    _atom(Ident("1"), 3, 4),
                    _atom(Ident("1"), 5, 6),
                ),
                BracketKind.ROUND,
            ),
            0,
            7,
        )
        assert parse_source("(+ 1 1)") == (expected,)

    def test_string_child(self, parse_source):
        expected = _atom(
            List((_atom(String("Hello"), 2, 9),), BracketKind.ROUND),
            0,
            10,
        )
        assert parse_source('( "Hello")') == (expected,)

    @pytest.mark.parametrize(
        "source, child, whole",
        [
            ("(1)", (1, 2), (0, 3)),
            ("( 1)", (2, 3), (0, 4)),
            ("(1 )", (1, 2), (0, 4)),
            ("( 1 )", (2, 3), (0, 5)),
        ],
    )
    def test_padding_inside(self, parse_source, source, child, whole):
        (atom,) = parse_source(source)
        (item,) = atom.kind.items
        assert item.kind == Ident("1")
        assert bounds(item) == child
        assert bounds(atom) == whole

    def test_square_and_curly(self, parse_source):
        (atom,) = parse_source("[a {b}]")
        assert atom.kind.bracket is BracketKind.SQUARE
        inner = atom.kind.items[1]
        assert inner.kind == List((_atom(Ident("b"), 4, 5),), BracketKind.CURLY)


class TestNesting:
    def test_nested_spans(self, parse_source):
        (outer,) = parse_source("((a) b)")
        inner, b = outer.kind.items
        assert bounds(outer) == (0, 7)
        # The inner list absorbs the space after its closer
        assert bounds(inner) == (1, 5)
        assert bounds(b) == (5, 6)

    def test_adjacent_elements(self, parse_source):
        (atom,) = parse_source("(a(b)c)")
        kinds = [item.kind for item in atom.kind.items]
        assert kinds[0] == Ident("a")
        assert isinstance(kinds[1], List)
        assert kinds[2] == Ident("c")

    def test_string_then_ident(self, parse_source):
        (atom,) = parse_source('("x"y)')
        s, y = atom.kind.items
        assert s.kind == String("x")
        assert bounds(s) == (1, 4)
        assert y.kind == Ident("y")
        assert bounds(y) == (4, 5)

    def test_quotes_inside_ident(self, parse_source):
        (atom,) = parse_source('(a"b")')
        assert atom.kind.items[0].kind == Ident('a"b"')

    def test_unterminated_string_lexes_as_idents(self, parse_source):
        (atom,) = parse_source('("ab c)')
        assert [item.kind for item in atom.kind.items] == [Ident('"ab'), Ident("c")]
        assert bounds(atom) == (0, 7)

    def test_deep(self, parse_source):
        (atom,) = parse_source("(((x)))")
        depth = 0
        while isinstance(atom.kind, List):
            depth += 1
            (atom,) = atom.kind.items
        assert depth == 3
        assert atom.kind == Ident("x")
        assert bounds(atom) == (3, 4)

    def test_children_inside_parent(self, parse_source):
        source = "(define (f x) {body [x \"y\"]})"
        (root,) = parse_source(source)

        def check(atom: Atom) -> None:
            if isinstance(atom.kind, List):
                for item in atom.kind.items:
                    assert atom.span.start <= item.span.start
                    assert item.span.end <= atom.span.end
                    check(item)

        check(root)
        assert bounds(root) == (0, len(source))


class TestProgram:
    def test_empty(self, parse_source):
        assert parse_source("") == ()

    def test_whitespace_only(self, parse_source):
        assert parse_source("  \n\t\r\n") == ()

    def test_returns_tuple(self, parse_source):
        assert isinstance(parse_source("a"), tuple)

    def test_multiple_idents(self, parse_source):
        a, b = parse_source("a b")
        assert bounds(a) == (0, 1)
        assert bounds(b) == (2, 3)

    def test_adjacent_lists(self, parse_source):
        a, b = parse_source("(a)(b)")
        assert bounds(a) == (0, 3)
        assert bounds(b) == (3, 6)

    def test_list_absorbs_trailing_padding(self, parse_source):
        lst, b = parse_source("(a)  b")
        assert bounds(lst) == (0, 5)
        assert bounds(b) == (5, 6)

    def test_ident_does_not_absorb_padding(self, parse_source):
        (a,) = parse_source("  a  ")
        assert bounds(a) == (2, 3)

    def test_empty_string_span(self, parse_source):
        (atom,) = parse_source('""  ')
        assert atom.kind == String("")
        assert atom.span.length == 2

    def test_multiline_program(self, parse_source):
        atoms = parse_source("(def x 1)\n(def y \"two\nlines\")\n")
        assert len(atoms) == 2
        assert atoms[1].kind.items[2].kind == String("two\nlines")

    def test_deterministic(self, parse_source):
        source = "(a 'b ,@(c) {d} [\"e\"])"
        assert parse_source(source) == parse_source(source)

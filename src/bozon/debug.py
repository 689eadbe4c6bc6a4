"""Human-readable AST dump."""

from __future__ import annotations

import sys
from typing import TextIO

from bozon.ast import Atom, Ident, List, String


def dump_ast(atoms: tuple[Atom, ...], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Program\n")
    for atom in atoms:
        _dump_atom(atom, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_atom(atom: Atom, depth: int, f: TextIO) -> None:
    prefix = f"{atom.prefix.marker} " if atom.prefix is not None else ""
    kind = atom.kind
    if isinstance(kind, Ident):
        f.write(f"{_indent(depth)}{prefix}Ident({kind.text!r}) @{atom.span}\n")
    elif isinstance(kind, String):
        f.write(f"{_indent(depth)}{prefix}String({kind.text!r}) @{atom.span}\n")
    elif isinstance(kind, List):
        f.write(f"{_indent(depth)}{prefix}List {kind.bracket.value} @{atom.span}\n")
        for item in kind.items:
            _dump_atom(item, depth + 1, f)

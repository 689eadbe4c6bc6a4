"""Minimal LSP server for bozon: diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from bozon.errors import ParseError, SpanRangeError
from bozon.parser import parse
from bozon.tokens import position_at

server = LanguageServer("bozon-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _range(source: str, start: int, end: int) -> Range:
    """Convert an offset range to a 0-based LSP range."""
    first = position_at(source, start)
    last = position_at(source, end)
    return Range(
        start=Position(line=first.line - 1, character=first.column - 1),
        end=Position(line=last.line - 1, character=last.column - 1),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    try:
        parse(source)
    except ParseError as exc:
        diagnostics.append(
            Diagnostic(
                range=_range(source, exc.offset, exc.offset + 1),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="bozon",
            )
        )
    except SpanRangeError as exc:
        diagnostics.append(
            Diagnostic(
                range=_range(source, exc.start, exc.end),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="bozon",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()

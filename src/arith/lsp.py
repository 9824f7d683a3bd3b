"""Minimal LSP server for arith: diagnostics only."""

from __future__ import annotations

import logging

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

from arith import __version__
from arith.diagnostics import Severity, check_document

logger = logging.getLogger("arith.lsp")

server = LanguageServer("arith-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)

_SEVERITIES = {
    Severity.ERROR: DiagnosticSeverity.Error,
    Severity.WARNING: DiagnosticSeverity.Warning,
}


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the arith pipeline over every line and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    found = check_document(doc.source)
    logger.debug("%s: %d diagnostic(s)", uri, len(found))

    diagnostics = [
        Diagnostic(
            range=Range(
                start=Position(line=d.span.start.line, character=d.span.start.column),
                end=Position(line=d.span.end.line, character=d.span.end.column),
            ),
            message=d.message,
            severity=_SEVERITIES[d.severity],
            source="arith",
        )
        for d in found
    ]

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

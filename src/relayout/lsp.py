"""Minimal LSP server for relayout templates — diagnostics only."""

from __future__ import annotations

import tomllib
from pathlib import Path

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
from pygls.uris import to_fs_path

from relayout import __version__
from relayout.backend import emit
from relayout.errors import ParseError, RelayoutError, TextGenError
from relayout.lexer import tokenize_document
from relayout.parser import parse
from relayout.table import SymbolTable, from_config

server = LanguageServer("relayout-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def load_table(uri: str) -> SymbolTable:
    """Symbol table from the relayout.toml beside the document, if any.

    An unreadable or malformed config raises OSError or TOMLDecodeError.
    """
    fs_path = to_fs_path(uri)
    if fs_path is None:
        return SymbolTable()
    config_path = Path(fs_path).parent / "relayout.toml"
    if not config_path.is_file():
        return SymbolTable()
    with open(config_path, "rb") as f:
        config = tomllib.load(f)
    return from_config(config, config_path.parent)


def _to_diagnostic(exc: RelayoutError, severity: DiagnosticSeverity) -> Diagnostic:
    if exc.range is not None:
        start = exc.range.start
        end = exc.range.end
        lsp_range = Range(
            start=Position(line=start.line, character=start.column),
            end=Position(line=end.line, character=end.column),
        )
    else:
        # Point errors underline a single character
        line = exc.line or 0
        col = exc.position.column if exc.position is not None else 0
        lsp_range = Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        )
    return Diagnostic(range=lsp_range, message=exc.message, severity=severity, source="relayout")


def _config_diagnostic(exc: Exception) -> Diagnostic:
    """Config failures are reported on the first character of the document."""
    return Diagnostic(
        range=Range(start=Position(line=0, character=0), end=Position(line=0, character=1)),
        message=f"invalid relayout.toml: {exc}",
        severity=DiagnosticSeverity.Error,
        source="relayout",
    )


def _validate(ls: LanguageServer, uri: str, table: SymbolTable | None = None) -> None:
    """Run the relayout pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []
    try:
        if table is None:
            table = load_table(uri)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        diagnostics.append(_config_diagnostic(exc))
    else:
        _check(doc.source, table, diagnostics)

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _check(source: str, table: SymbolTable, diagnostics: list[Diagnostic]) -> None:
    try:
        symbols = parse(tokenize_document(source), table)
        emit(symbols, table)
    except ParseError as exc:
        diagnostics.append(_to_diagnostic(exc, DiagnosticSeverity.Error))
    except TextGenError as exc:
        diagnostics.append(_to_diagnostic(exc, DiagnosticSeverity.Warning))


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()

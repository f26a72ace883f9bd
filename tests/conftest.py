"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from relayout.lexer import tokenize_document
from relayout.parser import parse
from relayout.table import SymbolTable
from relayout.tokens import Position, Punctuation, Range, Word


def word(text: str, column: int, line: int = 0) -> Word:
    """A Word token starting at (line, column)."""
    return Word(text, Range(Position(line, column), Position(line, column + len(text))))


def punct(value: str, column: int, line: int = 0) -> Punctuation:
    return Punctuation(value, Position(line, column))


def span(line: int, start: int, end: int) -> Range:
    """A single-line range [line:start, line:end)."""
    return Range(Position(line, start), Position(line, end))


@pytest.fixture
def parse_source():
    """Return a helper that tokenizes and parses source against a table."""

    def _parse(source: str, table: SymbolTable | None = None):
        return parse(tokenize_document(source), table or SymbolTable())

    return _parse


@pytest.fixture(autouse=True)
def _quiet_logging():
    """Drop any handler a CLI run installed so later tests never log."""
    yield
    from relayout.log import configure_logging

    configure_logging(False)

"""Back end: turns symbols into output tokens with recomputed positions.

Substituted values rarely have the length of the placeholder they replace.
The back end walks the symbols once, left to right, tracking where the
previous token actually ended in the output (``Cursor.output``) and where
the previous symbol ended in the source (``Cursor.source``). Each token
keeps its original gap to its predecessor, measured from the output
position. Lines are never renumbered; a symbol on a later line than the
cursor keeps its source position.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from relayout.ast import Replace, Spread, Symbol, Text, symbol_end
from relayout.errors import FailedToReadFile, NoSuchFile
from relayout.table import SymbolTable
from relayout.tokens import Position, Range, Word

_ORIGIN = Position(0, 0)


@dataclass(frozen=True, slots=True)
class Cursor:
    """Position after the last emitted token, in output and source coordinates."""

    output: Position = _ORIGIN
    source: Position = _ORIGIN


def emit(symbols: list[Symbol], table: SymbolTable) -> list[Word]:
    """Resolve every symbol and return positioned output tokens."""
    tokens: list[Word] = []
    cursor = Cursor()
    for symbol in symbols:
        token = _to_token(symbol, table, cursor)
        tokens.append(token)
        cursor = Cursor(token.range.end, symbol_end(symbol))
    logger.debug("emitted {} tokens", len(tokens))
    return tokens


def _to_token(symbol: Symbol, table: SymbolTable, cursor: Cursor) -> Word:
    if isinstance(symbol, Text):
        return Word(symbol.text, calculate_new_range(cursor.source, cursor.output, symbol.range))
    if isinstance(symbol, Replace):
        text = table.resolve_string(symbol.identifier)
    elif isinstance(symbol, Spread):
        text = read_spread_file(symbol, table.resolve_path(symbol.identifier))
    else:
        raise TypeError(f"unknown symbol: {symbol!r}")
    return Word(text, calculate_replacement_range(cursor.source, cursor.output, symbol.range, text))


def read_spread_file(symbol: Spread, path: Path) -> str:
    """Read and whitespace-trim the file behind a spread placeholder."""
    if not path.is_file():
        raise NoSuchFile(symbol.identifier, path, symbol.range)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        raise FailedToReadFile(symbol.identifier, path, symbol.range) from None
    logger.debug("spread {!r} read {} characters from {}", symbol.identifier, len(content), path)
    return content.strip()


def calculate_new_range(last_source_end: Position, cursor: Position, current: Range) -> Range:
    """Position an unchanged word after the cursor.

    Without drift, or on a line the cursor has not reached, the source
    range is already correct.
    """
    if last_source_end == cursor or current.start.line > cursor.line:
        return current
    return _shifted(last_source_end, cursor, current.start, current.length)


def calculate_replacement_range(
    last_source_end: Position, cursor: Position, placeholder: Range, text: str
) -> Range:
    """Position a substituted value; its end is measured by the value's length.

    Multi-line values are measured by raw character count, newlines included.
    """
    if cursor.line < placeholder.start.line:
        start = placeholder.start
        return Range(start, Position(start.line, start.column + len(text)))
    return _shifted(last_source_end, cursor, placeholder.start, len(text))


def _shifted(last_source_end: Position, cursor: Position, start: Position, length: int) -> Range:
    column = cursor.column + (start.column - last_source_end.column)
    return Range(Position(start.line, column), Position(start.line, column + length))

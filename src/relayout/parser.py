"""Symbol parser: groups a token stream into literal text and placeholders."""

from __future__ import annotations

from typing import cast

from loguru import logger

from relayout.ast import Replace, Spread, Symbol, Text
from relayout.errors import FileNotFound, VariableNotFound
from relayout.table import SymbolTable
from relayout.tokens import Position, Punctuation, Range, Token, Word

# Token shapes, matched longest first: "${...name}" then "${name}"
_SPREAD_PATTERN = ("$", "{", ".", ".", ".", None, "}")
_REPLACE_PATTERN = ("$", "{", None, "}")


class Parser:
    """Longest-match parser over a flat token list.

    Only identifier existence is checked here. Values are looked up, and
    files read, by the back end.
    """

    def __init__(self, tokens: list[Token], table: SymbolTable) -> None:
        self._tokens = tokens
        self._table = table
        self._pos = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return None

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _match(self, pattern: tuple[str | None, ...]) -> list[Token] | None:
        """Return the tokens matching pattern at the cursor, or None.

        A string entry matches that punctuation mark, ``None`` matches a
        word. Matched tokens must be contiguous.
        """
        matched: list[Token] = []
        prev_end: Position | None = None
        for offset, expected in enumerate(pattern):
            tok = self._peek(offset)
            if tok is None:
                return None
            if expected is None:
                if not isinstance(tok, Word):
                    return None
            elif not (isinstance(tok, Punctuation) and tok.value == expected):
                return None
            if prev_end is not None and tok.range.start != prev_end:
                return None
            prev_end = tok.range.end
            matched.append(tok)
        return matched

    # ------------------------------------------------------------------
    # Symbols
    # ------------------------------------------------------------------

    def parse(self) -> list[Symbol]:
        symbols: list[Symbol] = []
        while not self._at_end():
            symbols.append(self._parse_symbol())
        return symbols

    def _parse_symbol(self) -> Symbol:
        matched = self._match(_SPREAD_PATTERN)
        if matched is not None:
            return self._parse_spread(matched)

        matched = self._match(_REPLACE_PATTERN)
        if matched is not None:
            return self._parse_replace(matched)

        tok = self._tokens[self._pos]
        self._pos += 1
        if isinstance(tok, Word):
            return Text(tok.text, tok.range)
        return Text(tok.value, tok.range)

    def _parse_spread(self, matched: list[Token]) -> Spread:
        identifier = cast(Word, matched[5])
        span = Range(matched[0].range.start, matched[-1].range.end)
        if not self._table.has_file(identifier.text):
            raise FileNotFound(identifier.text, span)
        self._pos += len(matched)
        return Spread(identifier.text, span)

    def _parse_replace(self, matched: list[Token]) -> Replace:
        identifier = cast(Word, matched[2])
        span = Range(matched[0].range.start, matched[-1].range.end)
        if not self._table.has_variable(identifier.text):
            raise VariableNotFound(identifier.text, span)
        self._pos += len(matched)
        return Replace(identifier.text, span)


def parse(tokens: list[Token], table: SymbolTable) -> list[Symbol]:
    """Convenience function: parse tokens into symbols."""
    symbols = Parser(tokens, table).parse()
    logger.debug("parsed {} tokens into {} symbols", len(tokens), len(symbols))
    return symbols

"""Symbol types produced by the parser and consumed by the back end."""

from __future__ import annotations

from dataclasses import dataclass

from relayout.tokens import Position, Range


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text passed through unchanged: a word or a lone punctuation mark."""

    text: str
    range: Range


@dataclass(frozen=True, slots=True)
class Replace:
    """``${identifier}`` placeholder; range covers the whole placeholder."""

    identifier: str
    range: Range


@dataclass(frozen=True, slots=True)
class Spread:
    """``${...identifier}`` placeholder, substituted with a file's contents."""

    identifier: str
    range: Range


Symbol = Text | Replace | Spread


def symbol_end(symbol: Symbol) -> Position:
    """Source position immediately after the symbol."""
    return symbol.range.end

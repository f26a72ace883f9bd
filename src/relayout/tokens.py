"""Source coordinates, token types, and character classification helpers."""

from __future__ import annotations

import string
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Source position, 0-based line and column. Ordered by line, then column."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open source range; ``end`` is the first position after the content."""

    start: Position
    end: Position

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"

    @property
    def length(self) -> int:
        return self.end.column - self.start.column


@dataclass(frozen=True, slots=True)
class Word:
    """A run of word characters, or a substituted fragment after the back end."""

    text: str
    range: Range


@dataclass(frozen=True, slots=True)
class Punctuation:
    """A single ASCII punctuation character occupying ``[pos, pos+1)``."""

    value: str
    pos: Position

    @property
    def range(self) -> Range:
        return Range(self.pos, Position(self.pos.line, self.pos.column + 1))


Token = Word | Punctuation


_PUNCTUATION = frozenset(string.punctuation)


def is_punctuation(ch: str) -> bool:
    """Return True if ch is an ASCII punctuation character."""
    return ch in _PUNCTUATION


# str.isspace() also accepts the information separators U+001C..U+001F,
# which are ordinary word characters here.
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def is_whitespace(ch: str) -> bool:
    """Return True if ch has the Unicode White_Space property."""
    return ch.isspace() and ch not in _NOT_WHITESPACE


def token_start(token: Token) -> Position:
    if isinstance(token, Word):
        return token.range.start
    return token.pos


def token_text(token: Token) -> str:
    if isinstance(token, Word):
        return token.text
    return token.value

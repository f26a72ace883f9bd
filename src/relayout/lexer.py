"""Line tokenizer: splits one line of text into Word and Punctuation tokens."""

from __future__ import annotations

from relayout.errors import UnexpectedToken
from relayout.tokens import (
    Position,
    Punctuation,
    Range,
    Token,
    Word,
    is_punctuation,
    is_whitespace,
)


class Lexer:
    """Tokenize a single line of source text.

    A single space separates words and produces no token. Any other
    whitespace character is an error. Each ASCII punctuation character is
    its own token; every other character accumulates into a word.
    """

    def __init__(self, text: str, line: int) -> None:
        self._text = text
        self._line = line
        self._buffer: list[str] = []
        self._start = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        for col, ch in enumerate(self._text):
            if ch == " ":
                self._flush(col)
                self._start = col + 1
            elif is_whitespace(ch):
                raise UnexpectedToken(Position(self._line, col))
            elif is_punctuation(ch):
                self._flush(col)
                self._start = col
                self._buffer.append(ch)
                self._flush(col + 1)
                self._start = col + 1
            else:
                self._buffer.append(ch)
        self._flush(len(self._text))
        return self._tokens

    def _flush(self, end: int) -> None:
        """Emit the buffered characters spanning [self._start, end), if any."""
        if not self._buffer:
            return
        start = Position(self._line, self._start)
        if len(self._buffer) == 1 and is_punctuation(self._buffer[0]):
            self._tokens.append(Punctuation(self._buffer[0], start))
        else:
            text = "".join(self._buffer)
            self._tokens.append(Word(text, Range(start, Position(self._line, end))))
        self._buffer.clear()


def tokenize(line_text: str, line_number: int) -> list[Token]:
    """Convenience function: tokenize one line and return its tokens."""
    return Lexer(line_text, line_number).tokenize()


def split_lines(source: str) -> list[str]:
    """Split text on ``\\n``/``\\r\\n``; a final terminator adds no empty line."""
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def tokenize_document(source: str) -> list[Token]:
    """Tokenize every line of source and return one flat token list."""
    tokens: list[Token] = []
    for number, line in enumerate(split_lines(source)):
        tokens.extend(tokenize(line, number))
    return tokens

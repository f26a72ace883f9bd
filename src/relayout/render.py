"""Reconstructor: plays positioned tokens back into flat text."""

from __future__ import annotations

from collections.abc import Iterable

from relayout.tokens import Token, token_start, token_text


def render(tokens: Iterable[Token]) -> str:
    """Render tokens by padding with newlines and spaces up to each start position.

    Newlines embedded in a token's text are written verbatim and do not
    move the line/column counters beyond the text's raw length.
    """
    line = 0
    column = 0
    parts: list[str] = []
    for token in tokens:
        start = token_start(token)
        if line < start.line:
            parts.append("\n" * (start.line - line))
            line = start.line
            column = 0
        if column < start.column:
            parts.append(" " * (start.column - column))
            column = start.column
        text = token_text(token)
        parts.append(text)
        column += len(text)
    return "".join(parts)

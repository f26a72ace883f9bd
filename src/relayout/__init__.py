"""Layout-preserving text substitution: ``${name}`` and ``${...file}`` placeholders."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from relayout.table import SymbolTable
    from relayout.tokens import Token

__version__ = "0.1.0"

logger.disable("relayout")


def substitute(source: str, table: SymbolTable) -> str:
    """Tokenize, parse, emit, and render source text."""
    from relayout.lexer import tokenize_document

    return _run(tokenize_document(source), table)


def substitute_file(path: str | Path, table: SymbolTable) -> str:
    """Like substitute(), reading the document from path."""
    return _run(tokenize_file(path), table)


def tokenize_file(path: str | Path) -> list[Token]:
    """Read a document and tokenize each of its lines."""
    from relayout.lexer import tokenize

    tokens: list[Token] = []
    for number, line in enumerate(read_document(path)):
        tokens.extend(tokenize(line, number))
    logger.debug("tokenized {} into {} tokens", path, len(tokens))
    return tokens


def read_document(path: str | Path) -> list[str]:
    """Read a document's lines, UTF-8 decoded, without their terminators."""
    from relayout.errors import FailedToOpenFile, FailedToReadLine, InvalidFilePath

    path = Path(path)
    if not path.is_file():
        raise InvalidFilePath()
    try:
        f = open(path, "rb")
    except OSError:
        raise FailedToOpenFile() from None
    lines: list[str] = []
    with f:
        for number, raw in enumerate(f):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                raise FailedToReadLine(number) from None
            lines.append(line.removesuffix("\n").removesuffix("\r"))
    return lines


def _run(tokens: list[Token], table: SymbolTable) -> str:
    from relayout.backend import emit
    from relayout.parser import parse
    from relayout.render import render

    return render(emit(parse(tokens, table), table))

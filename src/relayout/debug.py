"""--debug token and symbol dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from relayout.ast import Replace, Spread, Symbol, Text
from relayout.tokens import Punctuation, Token, Word


def dump_tokens(tokens: list[Token], *, file: TextIO | None = None) -> None:
    """Print one line per token to *file* (default: the current stderr)."""
    if file is None:
        file = sys.stderr
    file.write("Tokens\n")
    for tok in tokens:
        if isinstance(tok, Word):
            file.write(f"  Word({tok.text!r}) {tok.range}\n")
        elif isinstance(tok, Punctuation):
            file.write(f"  Punctuation({tok.value!r}) {tok.pos}\n")


def dump_symbols(symbols: list[Symbol], *, file: TextIO | None = None) -> None:
    """Print one line per symbol to *file* (default: the current stderr)."""
    if file is None:
        file = sys.stderr
    file.write("Symbols\n")
    for sym in symbols:
        if isinstance(sym, Text):
            file.write(f"  Text({sym.text!r}) {sym.range}\n")
        elif isinstance(sym, Replace):
            file.write(f"  Replace ${{{sym.identifier}}} {sym.range}\n")
        elif isinstance(sym, Spread):
            file.write(f"  Spread ${{...{sym.identifier}}} {sym.range}\n")

"""Error types carrying the source position they refer to."""

from __future__ import annotations

from pathlib import Path

from relayout.tokens import Position, Range


class RelayoutError(Exception):
    """Base class; every pipeline failure aborts the run with one of these."""

    def __init__(
        self,
        message: str,
        position: Position | None = None,
        range: Range | None = None,
        line: int | None = None,
    ) -> None:
        self.message = message
        self.range = range
        self.position = position if position is not None or range is None else range.start
        self.line = line if line is not None or self.position is None else self.position.line
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        """Render as ``<file>:<line>:<column> : <message>`` (0-based, as stored)."""
        if self.position is not None:
            return f"{filename}:{self.position} : {self.message}"
        if self.line is not None:
            return f"{filename}:{self.line} : {self.message}"
        return f"{filename} : {self.message}"


# ---------------------------------------------------------------------------
# Front end: input reading, tokenizing, parsing
# ---------------------------------------------------------------------------


class ParseError(RelayoutError):
    """Raised before any substitution happens."""


class UnexpectedToken(ParseError):
    def __init__(self, position: Position) -> None:
        super().__init__("Unexpected token", position=position)


class InvalidFilePath(ParseError):
    def __init__(self) -> None:
        super().__init__("Invalid file path")


class FailedToOpenFile(ParseError):
    def __init__(self) -> None:
        super().__init__("Failed to open file")


class FailedToReadLine(ParseError):
    def __init__(self, line: int) -> None:
        super().__init__("Failed to read line", line=line)


class VariableNotFound(ParseError):
    def __init__(self, identifier: str, range: Range) -> None:
        self.identifier = identifier
        super().__init__(f"Variable '{identifier}' not found", range=range)


class FileNotFound(ParseError):
    def __init__(self, identifier: str, range: Range) -> None:
        self.identifier = identifier
        super().__init__(f"File reference '{identifier}' not found", range=range)


# ---------------------------------------------------------------------------
# Back end: substitution
# ---------------------------------------------------------------------------


class TextGenError(RelayoutError):
    """Raised while producing output tokens."""


class NoSuchFile(TextGenError):
    def __init__(self, identifier: str, path: Path, range: Range) -> None:
        self.identifier = identifier
        self.path = path
        super().__init__(f"No such file: {path}", range=range)


class FailedToReadFile(TextGenError):
    def __init__(self, identifier: str, path: Path, range: Range) -> None:
        self.identifier = identifier
        self.path = path
        super().__init__(f"Failed to read file: {path}", range=range)

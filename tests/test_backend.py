"""Test position recomputation in the back end."""

from __future__ import annotations

from pathlib import Path

import pytest

from relayout.backend import Cursor, calculate_new_range, calculate_replacement_range, emit
from relayout.errors import FailedToReadFile, NoSuchFile
from relayout.lexer import tokenize_document
from relayout.parser import parse
from relayout.render import render
from relayout.table import SymbolTable
from relayout.tokens import Position, Range

from conftest import span


def _emit(source: str, table: SymbolTable):
    return emit(parse(tokenize_document(source), table), table)


def _run(source: str, table: SymbolTable) -> str:
    return render(_emit(source, table))


# ---------------------------------------------------------------------------
# calculate_new_range
# ---------------------------------------------------------------------------


class TestCalculateNewRange:
    def test_same_for_new_line(self):
        for line in (6, 10):
            expected = span(line, 0, 4)
            assert calculate_new_range(Position(5, 6), Position(5, 4), expected) == expected

    def test_same_for_no_change(self):
        expected = span(5, 6, 6)
        assert calculate_new_range(Position(5, 6), Position(5, 6), expected) == expected

    def test_cursor_ahead(self):
        actual = calculate_new_range(Position(5, 6), Position(5, 10), span(5, 6, 7))
        assert actual == span(5, 10, 11)

    def test_cursor_behind(self):
        actual = calculate_new_range(Position(5, 6), Position(5, 4), span(5, 6, 7))
        assert actual == span(5, 4, 5)

    def test_gap_preserved(self):
        actual = calculate_new_range(Position(0, 6), Position(0, 9), span(0, 8, 11))
        assert actual == span(0, 11, 14)


class TestCalculateReplacementRange:
    def test_unvisited_line_keeps_source_column(self):
        actual = calculate_replacement_range(Position(0, 3), Position(0, 9), span(2, 4, 8), "abcdef")
        assert actual == span(2, 4, 10)

    def test_no_drift_keeps_source_column(self):
        actual = calculate_replacement_range(Position(0, 5), Position(0, 5), span(0, 6, 13), "world")
        assert actual == span(0, 6, 11)

    def test_follows_drift(self):
        actual = calculate_replacement_range(Position(0, 4), Position(0, 8), span(0, 5, 9), "B")
        assert actual == span(0, 9, 10)

    def test_multiline_text_measured_by_raw_length(self):
        actual = calculate_replacement_range(Position(0, 0), Position(0, 0), span(0, 0, 7), "ab\ncd")
        assert actual == Range(Position(0, 0), Position(0, 5))


def test_cursor_starts_at_origin():
    cursor = Cursor()
    assert cursor.output == Position(0, 0)
    assert cursor.source == Position(0, 0)


# ---------------------------------------------------------------------------
# Replace
# ---------------------------------------------------------------------------


class TestReplace:
    def test_replace_preserves_trailing_layout(self):
        assert _run("Hello ${var1}!", SymbolTable({"var1": "world"})) == "Hello world!"

    def test_shorter_value_shifts_left(self):
        tokens = _emit("a ${v}b c", SymbolTable({"v": "XYZ"}))
        assert [t.text for t in tokens] == ["a", "XYZ", "b", "c"]
        assert tokens[1].range == span(0, 2, 5)
        assert tokens[2].range == span(0, 5, 6)
        # c was at column 8; shifted by len("XYZ") - len("${v}")
        assert tokens[3].range == span(0, 8 + len("XYZ") - len("${v}"), 8)

    def test_longer_value_shifts_right(self):
        tokens = _emit("a ${v}b c", SymbolTable({"v": "LONGER"}))
        assert tokens[2].range == span(0, 8, 9)
        assert tokens[3].range == span(0, 10, 11)
        assert render(tokens) == "a LONGERb c"

    def test_empty_value(self):
        assert _run("a ${v} b", SymbolTable({"v": ""})) == "a  b"

    def test_second_placeholder_follows_first(self):
        table = SymbolTable({"a": "AAAAAAAA", "b": "B"})
        assert _run("${a} ${b}", table) == "AAAAAAAA B"

    def test_drift_does_not_cross_lines(self):
        table = SymbolTable({"v": "XYZ"})
        assert _run("x ${v} y\nnext ${v} z", table) == "x XYZ y\nnext XYZ z"

    def test_placeholder_opening_a_line(self):
        table = SymbolTable({"v": "LONGVALUE"})
        tokens = _emit("abc ${v}\n${v} d", table)
        assert tokens[2].range == span(1, 0, 9)
        assert tokens[3].range == span(1, 10, 11)
        assert render(tokens) == "abc LONGVALUE\nLONGVALUE d"

    def test_indentation_preserved(self):
        table = SymbolTable({"name": "Ada"})
        assert _run("greet:\n    ${name} ok", table) == "greet:\n    Ada ok"


class TestNoPlaceholders:
    def test_positions_unchanged(self):
        source = "Hello, world!\n  indented (line) here.\n\nlast"
        tokens = tokenize_document(source)
        emitted = emit(parse(tokens, SymbolTable()), SymbolTable())
        assert [t.range for t in emitted] == [t.range for t in tokens]

    def test_no_symbols(self):
        assert emit([], SymbolTable()) == []


# ---------------------------------------------------------------------------
# Spread
# ---------------------------------------------------------------------------


@pytest.fixture
def spread_file(tmp_path: Path) -> Path:
    path = tmp_path / "snippet.txt"
    path.write_text("  Foo Bar\nBaz\n\n", encoding="utf-8")
    return path


class TestSpread:
    def test_inlines_trimmed_content(self, spread_file: Path):
        table = SymbolTable(files={"file1": spread_file})
        assert _run("${...file1}", table) == "Foo Bar\nBaz"

    def test_following_line_resumes(self, spread_file: Path):
        table = SymbolTable(files={"file1": spread_file})
        assert _run("${...file1}\nnext", table) == "Foo Bar\nBaz\nnext"

    def test_same_line_token_uses_raw_length(self, spread_file: Path):
        # The embedded newline counts as one column: "B" lands after all
        # 11 raw characters rather than after "Baz".
        table = SymbolTable(files={"file1": spread_file})
        tokens = _emit("A ${...file1} B", table)
        assert tokens[1].text == "Foo Bar\nBaz"
        assert tokens[1].range == span(0, 2, 13)
        assert tokens[2].range == span(0, 14, 15)
        assert render(tokens) == "A Foo Bar\nBaz B"

    def test_missing_file(self, tmp_path: Path):
        table = SymbolTable(files={"file1": tmp_path / "absent.txt"})
        with pytest.raises(NoSuchFile) as exc_info:
            _emit("A ${...file1} B", table)
        assert exc_info.value.range == span(0, 2, 13)
        assert exc_info.value.identifier == "file1"

    def test_directory_is_not_a_file(self, tmp_path: Path):
        table = SymbolTable(files={"dir": tmp_path})
        with pytest.raises(NoSuchFile):
            _emit("${...dir}", table)

    def test_undecodable_file(self, tmp_path: Path):
        path = tmp_path / "binary.bin"
        path.write_bytes(b"\xff\xfe\x00bad")
        table = SymbolTable(files={"bin": path})
        with pytest.raises(FailedToReadFile) as exc_info:
            _emit("x ${...bin}", table)
        assert exc_info.value.range == span(0, 2, 11)

    def test_spread_and_replace_on_one_line(self, tmp_path: Path):
        path = tmp_path / "name.txt"
        path.write_text("Grace\n", encoding="utf-8")
        table = SymbolTable({"greeting": "Hi"}, {"name": path})
        assert _run("${greeting}, ${...name}!", table) == "Hi, Grace!"

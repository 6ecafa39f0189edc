"""Tests for SourceBuffer."""

from __future__ import annotations

from pathlib import Path

import pytest

from goimpl.core.errors import ErrorCode, ResourceError
from goimpl.editor.buffer import SourceBuffer


class TestSourceBuffer:
    def test_from_path_splits_lines(self, foo_file: Path) -> None:
        buffer = SourceBuffer.from_path(foo_file)

        assert buffer.lines[0] == "package foo"
        assert buffer.lines[4] == "type Foo struct {"
        assert buffer.path == foo_file
        assert buffer.directory == foo_file.resolve().parent

    def test_text_round_trips(self, foo_file: Path) -> None:
        buffer = SourceBuffer.from_path(foo_file)

        assert buffer.text == foo_file.read_text()

    def test_missing_trailing_newline_preserved(self) -> None:
        buffer = SourceBuffer.from_text("package p")

        assert buffer.text == "package p"

    def test_node_at_returns_type_identifier(self, foo_file: Path) -> None:
        buffer = SourceBuffer.from_path(foo_file)

        node = buffer.node_at(4, 6)

        assert node is not None
        assert node.type == "type_identifier"
        assert buffer.node_text(node) == "Foo"

    @pytest.mark.parametrize(("row", "col"), [(-1, 0), (100, 0)])
    def test_node_at_out_of_range(self, foo_file: Path, row: int, col: int) -> None:
        assert SourceBuffer.from_path(foo_file).node_at(row, col) is None

    def test_node_at_uses_byte_columns(self) -> None:
        buffer = SourceBuffer.from_text('package p\n\nvar s = "é"; type Ünï struct{}\n')

        node = buffer.node_at(2, 20)

        assert node is not None
        assert buffer.node_text(node) == "Ünï"

    def test_insert_lines_reparses(self, foo_file: Path) -> None:
        buffer = SourceBuffer.from_path(foo_file)
        before = buffer.tree

        buffer.insert_lines(6, ["", "func (f *Foo) Close() error {", "\treturn nil", "}"])

        assert buffer.modified
        assert buffer.lines[7:11] == ["", "func (f *Foo) Close() error {", "\treturn nil", "}"]
        assert buffer.tree is not before
        assert not buffer.tree.root_node.has_error

    def test_save_writes_and_clears_modified(self, foo_file: Path) -> None:
        buffer = SourceBuffer.from_path(foo_file)
        buffer.insert_lines(-1, ["// header"])

        buffer.save()

        assert foo_file.read_text().startswith("// header\npackage foo\n")
        assert not buffer.modified

    def test_save_without_path_raises(self) -> None:
        with pytest.raises(ValueError):
            SourceBuffer.from_text("package p\n").save()


class TestLineEndings:
    def test_crlf_file_saved_with_crlf(self, tmp_path: Path) -> None:
        # Given
        path = tmp_path / "main.go"
        path.write_bytes(b"package main\r\n\r\ntype Foo struct{}\r\n\r\nfunc main() {}\r\n")
        buffer = SourceBuffer.from_path(path)

        # When
        buffer.insert_lines(2, ["", "func (fo *Foo) Close() error {", "\tpanic(1)", "}"])
        buffer.save()

        # Then
        out = path.read_bytes()
        assert buffer.newline == "\r\n"
        assert out == (
            b"package main\r\n\r\ntype Foo struct{}\r\n"
            b"\r\nfunc (fo *Foo) Close() error {\r\n\tpanic(1)\r\n}\r\n"
            b"\r\nfunc main() {}\r\n"
        )

    def test_crlf_lines_hold_no_carriage_returns(self, tmp_path: Path) -> None:
        path = tmp_path / "main.go"
        path.write_bytes(b"package main\r\n\r\ntype Foo struct{}\r\n")

        buffer = SourceBuffer.from_path(path)

        assert buffer.lines == ["package main", "", "type Foo struct{}"]
        node = buffer.node_at(2, 5)
        assert node is not None and buffer.node_text(node) == "Foo"

    def test_unchanged_crlf_file_round_trips_bytes(self, tmp_path: Path) -> None:
        raw = b"package main\r\n\r\ntype Foo struct{}"
        path = tmp_path / "main.go"
        path.write_bytes(raw)

        SourceBuffer.from_path(path).save()

        assert path.read_bytes() == raw

    def test_unicode_line_separator_in_string_is_not_a_break(self, tmp_path: Path) -> None:
        # Given: U+2028 inside a string literal on line 3
        source = 'package main\n\nvar s = "a\u2028b"\n\ntype Foo struct{}\n'
        path = tmp_path / "main.go"
        path.write_bytes(source.encode("utf-8"))

        # When
        buffer = SourceBuffer.from_path(path)
        node = buffer.node_at(4, 5)

        # Then
        assert len(buffer.lines) == 5
        assert node is not None and node.type == "type_identifier"
        buffer.save()
        assert path.read_bytes() == source.encode("utf-8")

    @pytest.mark.parametrize(
        "char", ["\x0b", "\x0c", "\x1c", "\x1e", "\x85", "\u2028", "\u2029"]
    )
    def test_other_splitlines_breaks_stay_inside_lines(self, char: str) -> None:
        buffer = SourceBuffer.from_text(f"package p\n\n// a{char}b\ntype T int\n")

        assert buffer.lines[2] == f"// a{char}b"
        assert buffer.lines[3] == "type T int"


class TestFromPathErrors:
    def test_invalid_utf8_is_resource_error(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.go"
        path.write_bytes(b"package p\n\n// caf\xe9\ntype T int\n")

        with pytest.raises(ResourceError) as exc_info:
            SourceBuffer.from_path(path)

        assert exc_info.value.code == ErrorCode.RESOURCE_READ_ERROR
        assert "UTF-8" in exc_info.value.message

    def test_directory_is_resource_error(self, tmp_path: Path) -> None:
        with pytest.raises(ResourceError):
            SourceBuffer.from_path(tmp_path)

"""Tests for the receiver-at-cursor precondition."""

from __future__ import annotations

from pathlib import Path

import pytest

from goimpl.core.errors import ErrorCode, PreconditionError
from goimpl.editor.buffer import SourceBuffer
from goimpl.editor.cursor import is_receiver_node, receiver_at_cursor


class TestReceiverAtCursor:
    def test_cursor_on_type_name(self, foo_file: Path) -> None:
        buffer = SourceBuffer.from_path(foo_file)

        node = receiver_at_cursor(buffer, 4, 5)

        assert buffer.node_text(node) == "Foo"
        assert is_receiver_node(node)

    def test_cursor_on_generic_type_name(self) -> None:
        buffer = SourceBuffer.from_text("package p\n\ntype Set[T comparable] struct{}\n")

        node = receiver_at_cursor(buffer, 2, 6)

        assert buffer.node_text(node) == "Set"

    def test_cursor_in_grouped_declaration(self) -> None:
        buffer = SourceBuffer.from_text("package p\n\ntype (\n\tA struct{}\n\tB int\n)\n")

        node = receiver_at_cursor(buffer, 4, 1)

        assert buffer.node_text(node) == "B"

    @pytest.mark.parametrize(
        ("row", "col"),
        [
            (0, 0),  # package keyword
            (4, 0),  # "type" keyword
            (5, 3),  # field type io.Writer
            (8, 6),  # function name
            (50, 0),  # past the end
        ],
    )
    def test_cursor_elsewhere_fails(self, foo_file: Path, row: int, col: int) -> None:
        buffer = SourceBuffer.from_path(foo_file)

        with pytest.raises(PreconditionError) as exc_info:
            receiver_at_cursor(buffer, row, col)

        assert exc_info.value.code == ErrorCode.PRECONDITION_FAILED
        assert exc_info.value.message == "No type identifier found under cursor"

    def test_type_used_in_signature_is_not_receiver(self, foo_file: Path) -> None:
        buffer = SourceBuffer.from_path(foo_file)
        # "func NewFoo() *Foo {" -- the Foo in the result type
        node = buffer.node_at(8, 15)

        assert node is not None
        assert node.type == "type_identifier"
        assert not is_receiver_node(node)

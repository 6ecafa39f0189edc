"""Write generated stubs below the receiver's type declaration."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from goimpl.core.errors import InsertionError

if TYPE_CHECKING:
    from tree_sitter import Node

    from goimpl.editor.buffer import SourceBuffer

logger = structlog.get_logger()


def insertion_row(receiver_node: Node) -> int:
    """End row (0-based) of the declaration enclosing the receiver name.

    Raises:
        InsertionError: the receiver has no parent or no enclosing declaration.
    """
    spec = receiver_node.parent
    if spec is None:
        raise InsertionError.anchor_missing("parent")
    decl = spec.parent
    if decl is None:
        raise InsertionError.anchor_missing("enclosing declaration")
    return decl.end_point[0]


class ResultInserter:
    def insert(self, buffer: SourceBuffer, receiver_node: Node, lines: Sequence[str]) -> int:
        """Insert a blank line and then ``lines`` after the declaration end.

        Returns the row the blank separator line was written to. The row is
        computed before any mutation, so ``receiver_node`` may come from the
        tree the buffer holds right now.
        """
        end_row = insertion_row(receiver_node)
        buffer.insert_lines(end_row, ["", *lines])
        logger.info("stubs_inserted", after_row=end_row, count=len(lines))
        return end_row + 1

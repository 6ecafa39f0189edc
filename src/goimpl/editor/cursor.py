"""Cursor precondition: the receiver type identifier under the cursor."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from goimpl.config.constants import NO_TYPE_IDENTIFIER_MESSAGE
from goimpl.core.errors import PreconditionError

if TYPE_CHECKING:
    from tree_sitter import Node

    from goimpl.editor.buffer import SourceBuffer

logger = structlog.get_logger()


def is_receiver_node(node: Node | None) -> bool:
    """type_identifier -> type_spec -> type_declaration."""
    if node is None or node.type != "type_identifier":
        return False
    spec = node.parent
    if spec is None or spec.type != "type_spec":
        return False
    decl = spec.parent
    return decl is not None and decl.type == "type_declaration"


def receiver_at_cursor(buffer: SourceBuffer, row: int, col: int) -> Node:
    """Return the receiver type name node at a 0-based position.

    Raises:
        PreconditionError: the cursor is not on the name of a type declaration.
    """
    node = buffer.node_at(row, col)
    if not is_receiver_node(node):
        logger.info(
            "cursor_precondition_failed",
            row=row,
            col=col,
            node_type=node.type if node is not None else None,
        )
        raise PreconditionError.no_type_identifier(NO_TYPE_IDENTIFIER_MESSAGE, row, col)
    assert node is not None
    return node

"""In-process editor surface: source buffer and cursor lookup."""

from goimpl.editor.buffer import SourceBuffer
from goimpl.editor.cursor import is_receiver_node, receiver_at_cursor

__all__ = [
    "SourceBuffer",
    "is_receiver_node",
    "receiver_at_cursor",
]

"""Tree-sitter parsing and structural queries for Go."""

from goimpl.parsing.queries import SyntaxQueryEngine, render_type_parameters
from goimpl.parsing.scratch import ParsedBuffer, ScratchBufferLoader
from goimpl.parsing.treesitter import GoParser, ParseResult, get_parser

__all__ = [
    "GoParser",
    "ParseResult",
    "ParsedBuffer",
    "ScratchBufferLoader",
    "SyntaxQueryEngine",
    "get_parser",
    "render_type_parameters",
]

"""Structural patterns over Go syntax trees.

Three fixed patterns drive interface discovery:

1. ``INTERFACE_DECL_QUERY`` -- a ``type_spec`` inside a ``type_declaration``
   whose type is an interface type. One match per spec, so grouped
   declarations (``type ( A interface{}; B interface{} )``) yield one
   candidate each.
2. ``GENERIC_INTERFACE_QUERY`` -- within a candidate, a ``type_spec`` with a
   name, an explicit type-parameter list and an interface type. No match
   means the interface is not generic.
3. ``TYPE_PARAM_NAME_QUERY`` -- within a type-parameter list, every
   parameter name identifier. ``[K, V any]`` yields ``K`` and ``V``.

Capture conventions:
- @spec   -- the type_spec node
- @name   -- the type name / parameter name
- @params -- the type_parameter_list node
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from goimpl.parsing.treesitter import GoParser, get_parser

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

INTERFACE_DECL_QUERY = """
(type_declaration
    (type_spec
        type: (interface_type)) @spec)
"""

GENERIC_INTERFACE_QUERY = """
(type_spec
    name: (type_identifier) @name
    type_parameters: (type_parameter_list) @params
    type: (interface_type)) @spec
"""

TYPE_PARAM_NAME_QUERY = """
(type_parameter_declaration
    name: (identifier) @name)
"""


def render_type_parameters(names: Sequence[str]) -> str:
    """Render a type-parameter list as Go type arguments.

    >>> render_type_parameters(["T", "K comparable"])
    '[T, K comparable]'
    >>> render_type_parameters([])
    ''
    """
    if not names:
        return ""
    return "[" + ", ".join(names) + "]"


def _same_node(a: Node, b: Node) -> bool:
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


class SyntaxQueryEngine:
    """Runs the three interface patterns against parsed Go trees."""

    def __init__(self, parser: GoParser | None = None) -> None:
        self._parser = parser or get_parser()

    def _captures(self, query_string: str, node: Node) -> dict[str, list[Node]]:
        from tree_sitter import QueryCursor

        cursor = QueryCursor(self._parser.query(query_string))
        return cursor.captures(node)

    def _matches(self, query_string: str, node: Node) -> list[dict[str, Node]]:
        """Execute a query and return captures grouped by match."""
        from tree_sitter import QueryCursor

        cursor = QueryCursor(self._parser.query(query_string))
        results: list[dict[str, Node]] = []
        for _pattern_idx, captures_dict in cursor.matches(node):
            match: dict[str, Node] = {}
            for capture_name, nodes in captures_dict.items():
                if nodes:
                    match[capture_name] = nodes[0]
            if match:
                results.append(match)
        return results

    @staticmethod
    def _in_source_order(nodes: list[Node]) -> list[Node]:
        seen: set[tuple[int, int]] = set()
        ordered: list[Node] = []
        for node in sorted(nodes, key=lambda n: n.start_byte):
            key = (node.start_byte, node.end_byte)
            if key in seen:
                continue
            seen.add(key)
            ordered.append(node)
        return ordered

    def find_interface_declarations(self, tree: Tree) -> list[Node]:
        """Every interface type_spec in the tree, in source order."""
        captures = self._captures(INTERFACE_DECL_QUERY, tree.root_node)
        return self._in_source_order(captures.get("spec", []))

    def find_generic_name_and_params(self, decl: Node) -> tuple[str, Node] | None:
        """Name and type_parameter_list of a generic interface spec.

        Returns None when ``decl`` declares a non-generic interface.
        """
        for match in self._matches(GENERIC_INTERFACE_QUERY, decl):
            spec = match.get("spec")
            name = match.get("name")
            params = match.get("params")
            if spec is None or name is None or params is None:
                continue
            if not _same_node(spec, decl):
                continue
            return _node_text(name), params
        return None

    def extract_type_parameter_names(self, params: Node) -> list[str]:
        """Parameter names of a type_parameter_list in declaration order."""
        captures = self._captures(TYPE_PARAM_NAME_QUERY, params)
        return [_node_text(n) for n in self._in_source_order(captures.get("name", []))]


def _node_text(node: Node) -> str:
    text = node.text
    return text.decode("utf-8", errors="replace") if text is not None else ""

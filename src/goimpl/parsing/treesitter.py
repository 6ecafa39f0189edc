"""Tree-sitter parsing for Go sources.

Loads the Go grammar from the ``tree_sitter_go`` wheel and parses byte
content into a ``ParseResult``. Queries compiled against the same
``Language`` object are cached on the parser.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Any

import tree_sitter
from tree_sitter import Query as _TSQuery

GO_GRAMMAR_MODULE = "tree_sitter_go"


@dataclass
class ParseResult:
    """Result of parsing a buffer."""

    tree: Any  # Tree-sitter Tree (not serializable)
    root_node: Any  # Tree-sitter Node

    @property
    def has_errors(self) -> bool:
        """True when the tree holds ERROR or MISSING nodes."""
        return bool(self.root_node.has_error)


@dataclass
class GoParser:
    """
    Tree-sitter parser bound to the Go grammar.

    Usage::

        parser = GoParser()
        result = parser.parse(b"package main\\n")
        query = parser.query("(type_declaration) @decl")
    """

    _parser: Any = field(default=None, repr=False)
    _language: Any = field(default=None, repr=False)
    _queries: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._language = self._load_language()
        self._parser = tree_sitter.Parser(self._language)

    @staticmethod
    def _load_language() -> Any:
        try:
            lang_module = importlib.import_module(GO_GRAMMAR_MODULE)
        except ImportError as err:
            raise ValueError(f"Grammar not installed: {GO_GRAMMAR_MODULE}") from err
        return tree_sitter.Language(lang_module.language())

    @property
    def language(self) -> Any:
        return self._language

    def query(self, query_string: str) -> Any:
        """Compile and cache a query against the Go grammar."""
        if query_string not in self._queries:
            self._queries[query_string] = _TSQuery(self._language, query_string)
        return self._queries[query_string]

    def parse(self, content: bytes) -> ParseResult:
        """Parse Go source bytes. Never raises on syntax errors."""
        tree = self._parser.parse(content)
        return ParseResult(tree=tree, root_node=tree.root_node)


_default_parser: GoParser | None = None


def get_parser() -> GoParser:
    """Process-wide parser; grammar loading and query compilation happen once."""
    global _default_parser
    if _default_parser is None:
        _default_parser = GoParser()
    return _default_parser

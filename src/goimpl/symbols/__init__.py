"""Workspace symbol search for interface declarations."""

from goimpl.symbols.models import (
    FlatSymbol,
    InterfaceSymbol,
    SourceRange,
    TreeSymbol,
    parse_symbol,
)
from goimpl.symbols.resolver import SymbolResolver, SymbolSearchBackend, collect_interfaces

__all__ = [
    "FlatSymbol",
    "InterfaceSymbol",
    "SourceRange",
    "SymbolResolver",
    "SymbolSearchBackend",
    "TreeSymbol",
    "collect_interfaces",
    "parse_symbol",
]

"""Tests for symbol variants and picker entries."""

from __future__ import annotations

from pathlib import Path

from goimpl.symbols.models import (
    FlatSymbol,
    InterfaceSymbol,
    SourceRange,
    TreeSymbol,
    parse_symbol,
)

RANGE = {"start": {"line": 9, "character": 5}, "end": {"line": 9, "character": 11}}


class TestParseSymbol:
    def test_flat_symbol(self) -> None:
        raw = {
            "name": "Writer",
            "kind": 11,
            "containerName": "io",
            "location": {"uri": "file:///usr/lib/go/src/io/io.go", "range": RANGE},
        }

        symbol = parse_symbol(raw)

        assert isinstance(symbol, FlatSymbol)
        assert symbol.kind == "Interface"
        assert symbol.container_name == "io"
        assert symbol.range == SourceRange(9, 5, 9, 11)

    def test_tree_symbol_with_children(self) -> None:
        raw = {
            "name": "Outer",
            "kind": 23,
            "selectionRange": RANGE,
            "children": [
                {"name": "Inner", "kind": 11, "selectionRange": RANGE},
                {"name": "broken"},
            ],
        }

        symbol = parse_symbol(raw)

        assert isinstance(symbol, TreeSymbol)
        assert symbol.kind == "Struct"
        assert [c.name for c in symbol.children] == ["Inner"]

    def test_empty_container_is_none(self) -> None:
        raw = {"name": "I", "kind": 11, "containerName": "", "selectionRange": RANGE}

        symbol = parse_symbol(raw)

        assert symbol is not None
        assert symbol.container_name is None

    def test_unknown_kind_code(self) -> None:
        symbol = parse_symbol({"name": "X", "kind": 99, "selectionRange": RANGE})

        assert symbol is not None
        assert symbol.kind == "Unknown"

    def test_unrecognised_shapes(self) -> None:
        assert parse_symbol("Writer") is None
        assert parse_symbol({"kind": 11, "selectionRange": RANGE}) is None
        assert parse_symbol({"name": "X", "kind": 11}) is None
        assert parse_symbol({"name": "X", "kind": 11, "location": {"range": RANGE}}) is None


class TestInterfaceSymbol:
    def test_entry_contract(self) -> None:
        symbol = InterfaceSymbol(
            name="Writer",
            filename=Path("/usr/lib/go/src/io/io.go"),
            range=SourceRange(9, 5, 9, 11),
            container_name="io",
        )

        entry = symbol.to_entry()

        assert entry == {
            "symbol_name": "Writer",
            "filename": "/usr/lib/go/src/io/io.go",
            "lnum": 10,
            "col": 6,
            "kind": "Interface",
            "text": "[Interface] Writer",
            "value": {"containerName": "io"},
        }

    def test_entry_without_container(self) -> None:
        symbol = InterfaceSymbol("Store", Path("store.go"), SourceRange(0, 0, 0, 0))

        assert symbol.to_entry()["value"] == {"containerName": None}

"""Symbol search result shapes.

A workspace/symbol response arrives either flat (``SymbolInformation``:
location carries the file) or hierarchical (``DocumentSymbol``: a
buffer-relative ``selectionRange`` plus optional ``children``). Both are
parsed into a closed variant before any filtering happens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from goimpl.lsp.protocol import symbol_kind_name, uri_to_path


@dataclass(frozen=True)
class SourceRange:
    """0-based LSP range."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @classmethod
    def from_lsp(cls, raw: Any) -> SourceRange | None:
        if not isinstance(raw, dict):
            return None
        start = raw.get("start")
        end = raw.get("end", start)
        if not isinstance(start, dict) or not isinstance(end, dict):
            return None
        try:
            return cls(
                start_line=int(start.get("line", 0)),
                start_col=int(start.get("character", 0)),
                end_line=int(end.get("line", 0)),
                end_col=int(end.get("character", 0)),
            )
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class FlatSymbol:
    """SymbolInformation: carries its own file location."""

    name: str
    kind: str
    container_name: str | None
    uri: str
    range: SourceRange


@dataclass(frozen=True)
class TreeSymbol:
    """DocumentSymbol: positioned relative to the requesting buffer."""

    name: str
    kind: str
    container_name: str | None
    selection_range: SourceRange
    children: tuple[TreeSymbol, ...] = field(default=())


RawSymbol = FlatSymbol | TreeSymbol


def parse_symbol(raw: Any) -> RawSymbol | None:
    """Classify one raw symbol. Unrecognised shapes yield None."""
    if not isinstance(raw, dict):
        return None
    name = raw.get("name")
    if not isinstance(name, str):
        return None
    kind = symbol_kind_name(raw.get("kind"))
    container = raw.get("containerName")
    container_name = container if isinstance(container, str) and container else None

    location = raw.get("location")
    if isinstance(location, dict):
        rng = SourceRange.from_lsp(location.get("range"))
        uri = location.get("uri")
        if rng is None or not isinstance(uri, str):
            return None
        return FlatSymbol(name=name, kind=kind, container_name=container_name, uri=uri, range=rng)

    selection = SourceRange.from_lsp(raw.get("selectionRange"))
    if selection is not None:
        children: list[TreeSymbol] = []
        children_raw = raw.get("children")
        if isinstance(children_raw, list):
            for child_raw in children_raw:
                child = parse_symbol(child_raw)
                if isinstance(child, TreeSymbol):
                    children.append(child)
        return TreeSymbol(
            name=name,
            kind=kind,
            container_name=container_name,
            selection_range=selection,
            children=tuple(children),
        )
    return None


@dataclass(frozen=True)
class InterfaceSymbol:
    """An interface the user can pick. Identity is (filename, name)."""

    name: str
    filename: Path
    range: SourceRange
    container_name: str | None = None

    @property
    def lnum(self) -> int:
        return self.range.start_line + 1

    @property
    def col(self) -> int:
        return self.range.start_col + 1

    @property
    def text(self) -> str:
        return f"[Interface] {self.name}"

    def to_entry(self) -> dict[str, Any]:
        """Picker entry; ``symbol_name``/``filename``/``value.containerName`` are a fixed contract."""
        return {
            "symbol_name": self.name,
            "filename": str(self.filename),
            "lnum": self.lnum,
            "col": self.col,
            "kind": "Interface",
            "text": self.text,
            "value": {"containerName": self.container_name},
        }

"""Impl operations - from a receiver under the cursor to inserted stubs."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from goimpl.core.errors import InsertionError
from goimpl.editor.cursor import receiver_at_cursor
from goimpl.impl.generics import GenericsInspector
from goimpl.impl.insert import ResultInserter
from goimpl.impl.models import ImplOutcome
from goimpl.impl.stubgen import StubGenerator

if TYPE_CHECKING:
    from tree_sitter import Node

    from goimpl.editor.buffer import SourceBuffer
    from goimpl.symbols.resolver import SymbolResolver

logger = structlog.get_logger()


def interface_name_from_entry(entry: dict[str, Any]) -> str:
    """Last dotted component of ``symbol_name`` (``sort.Interface`` -> ``Interface``)."""
    return str(entry.get("symbol_name", "")).split(".")[-1]


def package_qualifier_from_entry(entry: dict[str, Any]) -> str | None:
    value = entry.get("value")
    if not isinstance(value, dict):
        return None
    container = value.get("containerName")
    return container if isinstance(container, str) and container else None


class ImplOps:
    """One invocation of the stub pipeline for one receiver.

    Built with ``at_cursor`` so the cursor precondition is checked before any
    search or subprocess happens. ``select`` runs generics lookup, generation
    and insertion strictly in that order.
    """

    def __init__(
        self,
        buffer: SourceBuffer,
        receiver_node: Node,
        resolver: SymbolResolver,
        *,
        inspector: GenericsInspector | None = None,
        generator: StubGenerator | None = None,
        inserter: ResultInserter | None = None,
    ) -> None:
        self._buffer = buffer
        self._receiver = receiver_node
        self._resolver = resolver
        self._inspector = inspector or GenericsInspector()
        self._generator = generator or StubGenerator()
        self._inserter = inserter or ResultInserter()

    @classmethod
    def at_cursor(
        cls,
        buffer: SourceBuffer,
        row: int,
        col: int,
        resolver: SymbolResolver,
        *,
        inspector: GenericsInspector | None = None,
        generator: StubGenerator | None = None,
        inserter: ResultInserter | None = None,
    ) -> ImplOps:
        """Raises PreconditionError when the cursor is not on a type name."""
        node = receiver_at_cursor(buffer, row, col)
        return cls(
            buffer,
            node,
            resolver,
            inspector=inspector,
            generator=generator,
            inserter=inserter,
        )

    @property
    def receiver_name(self) -> str:
        return self._buffer.node_text(self._receiver)

    async def entries(self, query: str) -> list[dict[str, Any]]:
        symbols = await self._resolver.search(query)
        return [symbol.to_entry() for symbol in symbols]

    def cancel_search(self) -> None:
        self._resolver.cancel()

    async def select(self, entry: dict[str, Any]) -> ImplOutcome:
        interface_name = interface_name_from_entry(entry)
        qualifier = package_qualifier_from_entry(entry)
        log = logger.bind(
            receiver=self.receiver_name, interface=interface_name, package=qualifier
        )
        outcome = ImplOutcome(
            inserted=False, interface_name=interface_name, package_qualifier=qualifier
        )
        if not interface_name:
            log.warning("impl_entry_without_name")
            return outcome

        filename = entry.get("filename")
        if filename:
            outcome.type_parameters = await self._inspector.resolve_type_parameters(
                Path(filename), interface_name
            )

        lines = await self._generator.generate(
            self._receiver,
            self._buffer.directory,
            interface_name,
            package_qualifier=qualifier,
            type_parameters=outcome.type_parameters,
        )
        if not lines:
            log.info("impl_nothing_to_insert")
            return outcome

        try:
            outcome.insert_row = self._inserter.insert(self._buffer, self._receiver, lines)
        except InsertionError as e:
            log.warning("impl_insert_failed", **e.to_dict())
            return outcome

        outcome.inserted = True
        outcome.lines = list(lines)
        log.info("impl_done", lines=len(lines), type_parameters=outcome.type_parameters)
        return outcome

"""Cancelable, debounced workspace symbol search filtered to interfaces."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

import structlog

from goimpl.config.constants import INTERFACE_KIND
from goimpl.core.cancellation import CancellationToken
from goimpl.core.errors import LspError, SearchError
from goimpl.lsp.protocol import uri_to_path
from goimpl.symbols.models import FlatSymbol, InterfaceSymbol, TreeSymbol, parse_symbol

logger = structlog.get_logger()


class SymbolSearchBackend(Protocol):
    """Anything that answers workspace/symbol (``LspClient`` in production)."""

    async def workspace_symbol(
        self, query: str, token: CancellationToken
    ) -> list[dict[str, Any]]: ...


def collect_interfaces(raw_symbols: Iterable[Any], buffer_path: Path) -> list[InterfaceSymbol]:
    """Keep interface-kind symbols from either response shape.

    Tree-shaped symbols are positioned in the requesting buffer, so they are
    attributed to ``buffer_path``. Children are visited depth-first right
    after their parent; each symbol is emitted at most once.
    """
    items: list[InterfaceSymbol] = []

    def visit(symbol: FlatSymbol | TreeSymbol) -> None:
        if isinstance(symbol, FlatSymbol):
            if symbol.kind == INTERFACE_KIND:
                items.append(
                    InterfaceSymbol(
                        name=symbol.name,
                        filename=uri_to_path(symbol.uri),
                        range=symbol.range,
                        container_name=symbol.container_name,
                    )
                )
            return
        if symbol.kind == INTERFACE_KIND:
            items.append(
                InterfaceSymbol(
                    name=symbol.name,
                    filename=buffer_path,
                    range=symbol.selection_range,
                    container_name=symbol.container_name,
                )
            )
        for child in symbol.children:
            visit(child)

    for raw in raw_symbols:
        parsed = parse_symbol(raw)
        if parsed is None:
            logger.debug("symbol_shape_unrecognized", raw_type=type(raw).__name__)
            continue
        visit(parsed)
    return items


class SymbolResolver:
    """Workspace interface search where the last issued query wins.

    Each ``search`` call bumps a monotonic request id and cancels the token
    of the previous in-flight search. Results are only returned when the
    request id is still the latest once the backend answers; a superseded
    call returns an empty list instead of its (stale) results.
    """

    def __init__(
        self,
        backend: SymbolSearchBackend,
        buffer_path: Path,
        *,
        timeout_sec: float = 5.0,
        debounce_sec: float = 0.0,
    ) -> None:
        self._backend = backend
        self._buffer_path = buffer_path
        self._timeout_sec = timeout_sec
        self._debounce_sec = debounce_sec
        self._latest_request_id = 0
        self._inflight: CancellationToken | None = None

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    def _is_stale(self, request_id: int) -> bool:
        return request_id != self._latest_request_id

    def cancel(self) -> None:
        """Cancel whatever search is in flight (e.g. the picker closed)."""
        self._latest_request_id += 1
        if self._inflight is not None:
            self._inflight.cancel()
            self._inflight = None

    async def search(self, query: str) -> list[InterfaceSymbol]:
        self._latest_request_id += 1
        request_id = self._latest_request_id
        if self._inflight is not None:
            self._inflight.cancel()
        token = CancellationToken()
        self._inflight = token
        log = logger.bind(query=query, request_id=request_id)

        try:
            if self._debounce_sec > 0:
                await asyncio.sleep(self._debounce_sec)
                if self._is_stale(request_id):
                    log.debug("symbol_search_debounced")
                    return []

            try:
                raw = await asyncio.wait_for(
                    self._backend.workspace_symbol(query, token), timeout=self._timeout_sec
                )
            except asyncio.TimeoutError:
                token.cancel()
                err = SearchError.timeout(query, self._timeout_sec)
                log.warning("symbol_search_timeout", **err.to_dict())
                return []
            except LspError as e:
                if self._is_stale(request_id):
                    log.debug("symbol_search_superseded")
                    return []
                log.warning("symbol_search_failed", **e.to_dict())
                return []
            except Exception as e:
                log.warning(
                    "symbol_search_failed", error=str(e), error_type=type(e).__name__
                )
                return []

            if self._is_stale(request_id):
                log.debug("symbol_search_stale_response_dropped")
                return []

            interfaces = collect_interfaces(raw or [], self._buffer_path)
            log.debug("symbol_search_done", raw_count=len(raw or []), interfaces=len(interfaces))
            return interfaces
        finally:
            if self._inflight is token:
                self._inflight = None

"""Explicit cancellation tokens for in-flight requests."""

from __future__ import annotations

from collections.abc import Callable

import structlog

logger = structlog.get_logger()


class CancellationToken:
    """One-shot cancellation signal.

    Callbacks registered with ``on_cancel`` run exactly once, synchronously,
    when ``cancel()`` is first called. Registering on an already-cancelled
    token runs the callback immediately.
    """

    __slots__ = ("_cancelled", "_callbacks")

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def on_cancel(self, callback: Callable[[], None]) -> None:
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("cancel_callback_failed")

"""Asynchronous language server client over stdio.

One reader task demultiplexes the server's output: responses resolve the
pending future with the matching id, server-to-client requests get a
``null`` result, notifications are logged and dropped. Nothing here
blocks the event loop and no threads are started.
"""

from __future__ import annotations

import asyncio
import contextlib
import itertools
import os
from pathlib import Path
from typing import Any

import structlog

from goimpl.config.constants import LSP_CLOSE_TIMEOUT_SEC, LSP_REQUEST_CANCELLED
from goimpl.core.cancellation import CancellationToken
from goimpl.core.errors import LspError
from goimpl.lsp.protocol import client_capabilities, encode_message, read_message

logger = structlog.get_logger()


class LspClient:
    """Minimal LSP client: lifecycle plus request/notify with cancellation.

    Usage::

        client = LspClient(["gopls"], module_root)
        await client.start()
        symbols = await client.workspace_symbol("Writer", CancellationToken())
        await client.close()
    """

    def __init__(self, command: list[str], root: Path) -> None:
        self._command = list(command)
        self._root = root.resolve()
        self._ids = itertools.count(1)
        self._pending: dict[int, tuple[str, asyncio.Future[Any]]] = {}
        self._proc: asyncio.subprocess.Process | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._write_lock = asyncio.Lock()
        self._background: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def running(self) -> bool:
        return self._proc is not None and self._proc.returncode is None and not self._closed

    async def start(self, timeout_sec: float | None = None) -> dict[str, Any]:
        """Spawn the server and complete the initialize handshake."""
        self._proc = await asyncio.create_subprocess_exec(
            *self._command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
            cwd=self._root,
        )
        logger.debug("lsp_server_started", command=self._command, pid=self._proc.pid)
        self._reader_task = asyncio.create_task(self._read_loop())

        params = {
            "processId": os.getpid(),
            "rootUri": self._root.as_uri(),
            "workspaceFolders": [{"uri": self._root.as_uri(), "name": self._root.name}],
            "capabilities": client_capabilities(),
        }
        result = await asyncio.wait_for(self.request("initialize", params), timeout=timeout_sec)
        await self.notify("initialized", {})
        return result if isinstance(result, dict) else {}

    async def close(self) -> None:
        """shutdown + exit, then make sure the process is gone."""
        if self._closed:
            return
        proc = self._proc
        if proc is not None and proc.returncode is None:
            with contextlib.suppress(LspError, asyncio.TimeoutError, OSError):
                await asyncio.wait_for(self.request("shutdown", None), LSP_CLOSE_TIMEOUT_SEC)
                await self.notify("exit", None)
        self._closed = True

        if proc is not None and proc.returncode is None:
            try:
                await asyncio.wait_for(proc.wait(), LSP_CLOSE_TIMEOUT_SEC)
            except asyncio.TimeoutError:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        if self._reader_task is not None and not self._reader_task.done():
            self._reader_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._reader_task
        self._fail_pending(LspError.server_exited(proc.returncode if proc else None))
        logger.debug("lsp_server_closed")

    async def request(
        self,
        method: str,
        params: Any,
        token: CancellationToken | None = None,
    ) -> Any:
        """Send a request and wait for its result.

        Raises:
            LspError: error response, cancellation via ``token``, or server exit.
        """
        if self._closed or self._proc is None:
            raise LspError.server_exited(self._proc.returncode if self._proc else None)

        request_id = next(self._ids)
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[request_id] = (method, future)

        if token is not None:
            token.on_cancel(lambda: self._cancel_request(request_id))

        try:
            await self._send({"jsonrpc": "2.0", "id": request_id, "method": method, "params": params})
            return await future
        except asyncio.CancelledError:
            # Caller gave up (timeout or task cancel); tell the server too.
            if self.running:
                self._spawn(self._send_cancel(request_id))
            raise
        finally:
            self._pending.pop(request_id, None)

    async def notify(self, method: str, params: Any) -> None:
        await self._send({"jsonrpc": "2.0", "method": method, "params": params})

    async def workspace_symbol(self, query: str, token: CancellationToken) -> list[dict[str, Any]]:
        """``workspace/symbol``; a null result is an empty list."""
        result = await self.request("workspace/symbol", {"query": query}, token)
        if not isinstance(result, list):
            return []
        return [item for item in result if isinstance(item, dict)]

    def _cancel_request(self, request_id: int) -> None:
        entry = self._pending.get(request_id)
        if entry is None:
            return
        method, future = entry
        if not future.done():
            future.set_exception(LspError.request_cancelled(method, request_id))
        if self.running:
            self._spawn(self._send_cancel(request_id))
        logger.debug("lsp_request_cancelled", method=method, request_id=request_id)

    def _spawn(self, coro: Any) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _send_cancel(self, request_id: int) -> None:
        await self._send_quietly(
            {"jsonrpc": "2.0", "method": "$/cancelRequest", "params": {"id": request_id}}
        )

    async def _send_quietly(self, msg: dict[str, Any]) -> None:
        with contextlib.suppress(LspError, OSError):
            await self._send(msg)

    async def _send(self, msg: dict[str, Any]) -> None:
        proc = self._proc
        if proc is None or proc.stdin is None or proc.returncode is not None:
            raise LspError.server_exited(proc.returncode if proc else None)
        async with self._write_lock:
            try:
                proc.stdin.write(encode_message(msg))
                await proc.stdin.drain()
            except (BrokenPipeError, ConnectionResetError) as e:
                raise LspError.server_exited(proc.returncode) from e

    async def _read_loop(self) -> None:
        assert self._proc is not None and self._proc.stdout is not None
        reader = self._proc.stdout
        try:
            while True:
                msg = await read_message(reader)
                if msg is None:
                    break
                await self._dispatch(msg)
        except LspError as e:
            logger.error("lsp_read_failed", **e.to_dict())
        finally:
            self._fail_pending(LspError.server_exited(self._proc.returncode))

    async def _dispatch(self, msg: dict[str, Any]) -> None:
        method = msg.get("method")
        msg_id = msg.get("id")

        if method is None and msg_id is not None:
            entry = self._pending.get(msg_id)
            if entry is None:
                # Late reply to a request we already gave up on.
                logger.debug("lsp_stale_response", request_id=msg_id)
                return
            req_method, future = entry
            if future.done():
                return
            error = msg.get("error")
            if error is not None:
                if isinstance(error, dict) and error.get("code") == LSP_REQUEST_CANCELLED:
                    future.set_exception(LspError.request_cancelled(req_method, msg_id))
                else:
                    future.set_exception(
                        LspError.response_error(req_method, error if isinstance(error, dict) else {})
                    )
            else:
                future.set_result(msg.get("result"))
            return

        if method is not None and msg_id is not None:
            logger.debug("lsp_server_request", method=method)
            await self._send_quietly({"jsonrpc": "2.0", "id": msg_id, "result": None})
            return

        logger.debug("lsp_notification", method=method)

    def _fail_pending(self, error: LspError) -> None:
        for _method, future in list(self._pending.values()):
            if not future.done():
                future.set_exception(error)

"""Throwaway parse buffers for files other than the one being edited.

A scratch buffer is created per lookup, holds the file content and its
syntax tree, and must be released on every exit path. ``ScratchBufferLoader``
keeps a registry of live handles so leaks are observable.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from goimpl.core.errors import ResourceError
from goimpl.parsing.treesitter import GoParser, ParseResult, get_parser

logger = structlog.get_logger()


@dataclass
class ParsedBuffer:
    """Scratch buffer: file bytes plus, once parsed, their syntax tree."""

    handle: int
    path: Path
    content: bytes = b""
    _result: ParseResult | None = field(default=None, repr=False)
    _released: bool = field(default=False, repr=False)

    @property
    def released(self) -> bool:
        return self._released

    @property
    def tree(self) -> Any:
        if self._released:
            raise ResourceError.buffer_released(self.handle)
        if self._result is None:
            raise ValueError(f"Scratch buffer {self.handle} has not been parsed")
        return self._result.tree

    def parse(self, parser: GoParser) -> ParseResult:
        if self._released:
            raise ResourceError.buffer_released(self.handle)
        self._result = parser.parse(self.content)
        return self._result


class ScratchBufferLoader:
    """Loads files into scratch buffers and tracks which are still alive."""

    def __init__(self, parser: GoParser | None = None) -> None:
        self._parser = parser or get_parser()
        self._ids = itertools.count(1)
        self._live: dict[int, ParsedBuffer] = {}

    @property
    def live_count(self) -> int:
        return len(self._live)

    def load_file(self, path: Path) -> ParsedBuffer:
        """Read ``path`` fully into a new, unparsed scratch buffer.

        Raises:
            ResourceError: file missing, unreadable, or empty. The buffer
                created for the attempt is released before raising.
        """
        buf = ParsedBuffer(handle=next(self._ids), path=path)
        self._live[buf.handle] = buf
        try:
            try:
                buf.content = path.read_bytes()
            except FileNotFoundError as e:
                raise ResourceError.file_not_found(str(path)) from e
            except OSError as e:
                raise ResourceError.read_error(str(path), str(e)) from e
            if not buf.content:
                logger.warning("scratch_file_empty", path=str(path))
                raise ResourceError.empty(str(path))
        except BaseException:
            self.release(buf)
            raise
        logger.debug("scratch_buffer_loaded", handle=buf.handle, path=str(path), size=len(buf.content))
        return buf

    def parse(self, buf: ParsedBuffer) -> ParseResult:
        result = buf.parse(self._parser)
        if result.has_errors:
            # Queries still run; matches inside ERROR subtrees are simply absent
            logger.warning("scratch_file_has_syntax_errors", path=str(buf.path))
        return result

    def release(self, buf: ParsedBuffer) -> None:
        """Drop the buffer. Safe to call more than once."""
        if buf.released:
            return
        buf._released = True
        buf._result = None
        buf.content = b""
        self._live.pop(buf.handle, None)
        logger.debug("scratch_buffer_released", handle=buf.handle)

    @contextmanager
    def open(self, path: Path) -> Iterator[ParsedBuffer]:
        """Load and parse ``path``; the buffer is released when the block exits."""
        buf = self.load_file(path)
        try:
            self.parse(buf)
            yield buf
        finally:
            self.release(buf)

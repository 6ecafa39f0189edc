"""File-backed source buffer with a live Go syntax tree."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from goimpl.core.errors import ResourceError
from goimpl.parsing.treesitter import GoParser, ParseResult, get_parser

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

logger = structlog.get_logger()


class SourceBuffer:
    """Lines of one Go file plus its syntax tree.

    Rows and columns are 0-based throughout. The tree is rebuilt lazily
    after each mutation; nodes taken from an earlier tree are stale once
    the buffer changes.
    """

    def __init__(
        self,
        lines: Sequence[str],
        path: Path | None = None,
        *,
        parser: GoParser | None = None,
        trailing_newline: bool = True,
        newline: str = "\n",
    ) -> None:
        self._lines = list(lines)
        self._path = path
        self._parser = parser or get_parser()
        self._trailing_newline = trailing_newline
        self._newline = newline
        self._result: ParseResult | None = None
        self._modified = False

    @classmethod
    def from_path(cls, path: Path, *, parser: GoParser | None = None) -> SourceBuffer:
        """Read ``path`` as UTF-8 without newline translation.

        Raises:
            ResourceError: the file cannot be read or is not valid UTF-8.
        """
        try:
            text = path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise ResourceError.read_error(str(path), f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise ResourceError.read_error(str(path), str(e)) from e
        return cls.from_text(text, path, parser=parser)

    @classmethod
    def from_text(
        cls, text: str, path: Path | None = None, *, parser: GoParser | None = None
    ) -> SourceBuffer:
        """Split on ``\\n`` only, never on the other breaks ``str.splitlines`` knows.

        The first line ending decides whether the buffer is CRLF or LF, and
        saving writes every line with it.
        """
        first = text.find("\n")
        newline = "\r\n" if first > 0 and text[first - 1] == "\r" else "\n"
        trailing_newline = text.endswith("\n") or not text
        lines = text.split("\n")
        if trailing_newline and text:
            lines.pop()
        if newline == "\r\n":
            lines = [ln[:-1] if ln.endswith("\r") else ln for ln in lines]
        return cls(
            lines if text else [],
            path,
            parser=parser,
            trailing_newline=trailing_newline,
            newline=newline,
        )

    @property
    def newline(self) -> str:
        return self._newline

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def directory(self) -> Path:
        """Directory holding the file (the Go package directory)."""
        if self._path is None:
            return Path.cwd()
        return self._path.resolve().parent

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def modified(self) -> bool:
        return self._modified

    @property
    def text(self) -> str:
        body = self._newline.join(self._lines)
        if self._trailing_newline and self._lines:
            body += self._newline
        return body

    @property
    def tree(self) -> Tree:
        if self._result is None:
            self._result = self._parser.parse(self.text.encode("utf-8"))
        return self._result.tree

    def node_at(self, row: int, col: int) -> Node | None:
        """Smallest named node spanning the position, like an editor's node-at-cursor."""
        if row < 0 or row >= len(self._lines):
            return None
        point = (row, _byte_column(self._lines[row], col))
        return self.tree.root_node.named_descendant_for_point_range(point, point)

    @staticmethod
    def node_text(node: Node) -> str:
        text = node.text
        return text.decode("utf-8", errors="replace") if text is not None else ""

    def insert_lines(self, after_row: int, lines: Sequence[str]) -> None:
        """Insert ``lines`` directly below row ``after_row`` (-1 inserts at the top)."""
        index = max(0, min(after_row + 1, len(self._lines)))
        self._lines[index:index] = list(lines)
        self._result = None
        self._modified = True
        logger.debug("buffer_lines_inserted", at=index, count=len(lines))

    def save(self, path: Path | None = None) -> Path:
        target = path or self._path
        if target is None:
            raise ValueError("Buffer has no path to save to")
        target.write_bytes(self.text.encode("utf-8"))
        self._modified = False
        return target


def _byte_column(line: str, col: int) -> int:
    """Tree-sitter points use byte columns; editors report characters."""
    return len(line[: max(col, 0)].encode("utf-8"))

"""LSP wire framing and protocol tables."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

from goimpl.config.constants import UNKNOWN_KIND
from goimpl.core.errors import LspError

# SymbolKind values defined by the Language Server Protocol. Servers may still
# send codes outside the advertised valueSet; lookups default to "Unknown".
SYMBOL_KINDS: dict[int, str] = {
    1: "File",
    2: "Module",
    3: "Namespace",
    4: "Package",
    5: "Class",
    6: "Method",
    7: "Property",
    8: "Field",
    9: "Constructor",
    10: "Enum",
    11: "Interface",
    12: "Function",
    13: "Variable",
    14: "Constant",
    15: "String",
    16: "Number",
    17: "Boolean",
    18: "Array",
    19: "Object",
    20: "Key",
    21: "Null",
    22: "EnumMember",
    23: "Struct",
    24: "Event",
    25: "Operator",
    26: "TypeParameter",
}


def symbol_kind_name(code: Any) -> str:
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN_KIND
    return SYMBOL_KINDS.get(code, UNKNOWN_KIND)


def uri_to_path(uri: str) -> Path:
    """Convert a ``file://`` URI to a local path. Non-URIs pass through."""
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return Path(uri)
    path = unquote(parsed.path)
    # file:///C:/x on Windows parses to "/C:/x"
    if len(path) >= 3 and path[0] == "/" and path[2] == ":":
        path = path[1:]
    return Path(path)


def encode_message(msg: dict[str, Any]) -> bytes:
    data = json.dumps(msg, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    header = f"Content-Length: {len(data)}\r\n\r\n".encode("ascii")
    return header + data


async def read_message(reader: asyncio.StreamReader) -> dict[str, Any] | None:
    """Read one framed message. Returns None on a clean EOF between messages."""
    content_length: int | None = None
    while True:
        line = await reader.readline()
        if not line:
            if content_length is None:
                return None
            raise LspError.protocol_error("stream closed inside headers")
        if line in (b"\r\n", b"\n"):
            break
        key, sep, value = line.decode("ascii", errors="replace").partition(":")
        if not sep:
            raise LspError.protocol_error(f"bad header line {line!r}")
        if key.strip().lower() == "content-length":
            try:
                content_length = int(value.strip())
            except ValueError as e:
                raise LspError.protocol_error(f"bad Content-Length {value.strip()!r}") from e

    if content_length is None:
        raise LspError.protocol_error("missing Content-Length")

    try:
        body = await reader.readexactly(content_length)
    except asyncio.IncompleteReadError as e:
        raise LspError.protocol_error("stream closed inside body") from e
    try:
        msg = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LspError.protocol_error(str(e)) from e
    if not isinstance(msg, dict):
        raise LspError.protocol_error("message is not an object")
    return msg


def client_capabilities() -> dict[str, Any]:
    value_set = sorted(SYMBOL_KINDS)
    return {
        "workspace": {
            "symbol": {"symbolKind": {"valueSet": value_set}},
        },
        "textDocument": {
            "documentSymbol": {
                "symbolKind": {"valueSet": value_set},
                "hierarchicalDocumentSymbolSupport": True,
            },
        },
        "window": {"workDoneProgress": False},
    }

"""Language server client used for workspace symbol search."""

from goimpl.lsp.client import LspClient
from goimpl.lsp.protocol import (
    SYMBOL_KINDS,
    encode_message,
    read_message,
    symbol_kind_name,
    uri_to_path,
)

__all__ = [
    "LspClient",
    "SYMBOL_KINDS",
    "encode_message",
    "read_message",
    "symbol_kind_name",
    "uri_to_path",
]

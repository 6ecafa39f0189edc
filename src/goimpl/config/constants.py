"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are protocol constraints and contracts with external tools.

For configurable values, see models.py.
"""

# =============================================================================
# Stub generator (impl) output contract
# =============================================================================
# impl has no structured exit protocol. A first output line containing one of
# these markers means the interface could not be resolved as given.

IMPL_NOT_FOUND_MARKERS = ("unrecognized interface:", "couldn't find")
"""Substrings of the first output line that classify a run as not-found."""

# =============================================================================
# Receiver expression
# =============================================================================

RECEIVER_PREFIX_LEN = 2
"""Receiver variable name is the lowercased first N characters of the type name."""

RECEIVER_FALLBACK_NAME = "r"
"""Receiver variable name used when the derived prefix is empty."""

# =============================================================================
# Symbol search
# =============================================================================

INTERFACE_KIND = "Interface"
UNKNOWN_KIND = "Unknown"

# =============================================================================
# LSP protocol
# =============================================================================

LSP_REQUEST_CANCELLED = -32800
"""JSON-RPC error code a server returns for a request cancelled by the client."""

LSP_CLOSE_TIMEOUT_SEC = 2.0
"""Wait for shutdown/exit before the server process is terminated."""

# =============================================================================
# User-facing messages
# =============================================================================

NO_TYPE_IDENTIFIER_MESSAGE = "No type identifier found under cursor"

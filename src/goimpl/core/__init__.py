"""Core module exports."""

from goimpl.core.cancellation import CancellationToken
from goimpl.core.errors import (
    ConfigError,
    ErrorCode,
    GenerationError,
    GoImplError,
    InsertionError,
    LspError,
    PreconditionError,
    ResourceError,
    SearchError,
)
from goimpl.core.logging import (
    clear_invocation_id,
    configure_logging,
    get_invocation_id,
    set_invocation_id,
)

__all__ = [
    # Cancellation
    "CancellationToken",
    # Errors
    "ConfigError",
    "ErrorCode",
    "GenerationError",
    "GoImplError",
    "InsertionError",
    "LspError",
    "PreconditionError",
    "ResourceError",
    "SearchError",
    # Logging
    "clear_invocation_id",
    "configure_logging",
    "get_invocation_id",
    "set_invocation_id",
]

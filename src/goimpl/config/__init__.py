"""Config module exports."""

from goimpl.config.loader import load_config
from goimpl.config.models import (
    GoImplConfig,
    ImplToolConfig,
    LoggingConfig,
    LogOutputConfig,
    LspConfig,
    SearchConfig,
)

__all__ = [
    "load_config",
    "GoImplConfig",
    "ImplToolConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "LspConfig",
    "SearchConfig",
]

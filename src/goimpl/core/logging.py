"""structlog setup for goimpl.

Every event passes through the same processor chain and is then rendered
once per configured output (console text or JSON lines), each output with
its own level. Events carry the id of the command invocation that emitted
them. The first file output is remembered so the CLI can point the user
at it when a run ends without inserting anything.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from goimpl.config.models import LoggingConfig, LogOutputConfig

_invocation_id: ContextVar[str | None] = ContextVar("invocation_id", default=None)
_log_file: Path | None = None


def get_invocation_id() -> str | None:
    return _invocation_id.get()


def set_invocation_id(invocation_id: str | None = None) -> str:
    """Bind an id to the current invocation, generating one if not given."""
    iid = invocation_id or uuid4().hex[:12]
    _invocation_id.set(iid)
    return iid


def clear_invocation_id() -> None:
    _invocation_id.set(None)


def get_log_file_path() -> Path | None:
    """File the first file output writes to, or None for console-only logging."""
    return _log_file


def _stamp_invocation(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    iid = _invocation_id.get()
    if iid is not None:
        event_dict.setdefault("invocation_id", iid)
    return event_dict


def _level_number(name: str | None, fallback: int) -> int:
    if not name:
        return fallback
    return logging.getLevelNamesMapping().get(name.upper(), fallback)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Install handlers for ``config.outputs``.

    Without ``config`` a single stderr output is set up from ``level`` and
    ``json_format``. Calling again replaces the previous handlers.
    """
    global _log_file
    from goimpl.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    base_level = _level_number(config.level, logging.INFO)
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _stamp_invocation,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(base_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    root.setLevel(base_level)
    # asyncio logs every slow callback at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _log_file = None
    for output in config.outputs:
        handler = _open_destination(output.destination)
        handler.setLevel(_level_number(output.level, base_level))
        handler.setFormatter(_formatter_for(output, pre_chain))
        root.addHandler(handler)
        if isinstance(handler, logging.FileHandler) and _log_file is None:
            _log_file = Path(output.destination)


def _open_destination(destination: str) -> logging.Handler:
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _formatter_for(
    output: LogOutputConfig, pre_chain: list[structlog.types.Processor]
) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        on_terminal = output.destination in ("stderr", "stdout") and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(
            colors=on_terminal, pad_event_to=0, pad_level=False
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)

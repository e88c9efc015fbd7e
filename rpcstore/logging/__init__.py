"""Stdlib logging with JSON output and per-call context fields."""

from .config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    configure_logging,
    get_logger,
)
from .context import (
    bind_context,
    clear_context,
    get_context,
    log_context,
    rpc_call_context,
)

__all__ = [
    "ContextFilter",
    "JsonFormatter",
    "PlainFormatter",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_context",
    "get_logger",
    "log_context",
    "rpc_call_context",
]

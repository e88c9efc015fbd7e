"""Stdout logging setup for rpcstore services and clients."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from . import fields
from .context import bind_context, get_context

# Transport libraries that log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


class ContextFilter(logging.Filter):
    """Attach the bound call context to each record as ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = get_context()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line: core fields, bound context, then any traceback."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            fields.TIMESTAMP: datetime.fromtimestamp(record.created, UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
            **_record_context(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Console formatter with bound context in a trailing ``[key=value ...]``."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} [{pairs}]"


def _record_context(record: logging.LogRecord) -> dict[str, str]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
    environment: str | None = None,
) -> None:
    """Route all records to one stdout handler, replacing earlier handlers.

    ``service`` and ``environment`` are bound into the logging context so
    they appear on every record.
    """
    resolved = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(resolved)

    if resolved > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    bind_context(**{fields.SERVICE: service or None, fields.ENVIRONMENT: environment or None})


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a stdlib logger; handlers are installed by :func:`configure_logging`."""
    return logging.getLogger(name)

"""Per-call logging context.

The dispatcher binds the method name and request id of each JSON-RPC call
here; :class:`rpcstore.logging.ContextFilter` copies the bound fields onto
every record emitted while the call runs.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

from . import fields

_Fields = tuple[tuple[str, str], ...]

_BOUND: ContextVar[_Fields] = ContextVar("rpcstore_log_fields", default=())


def _merge(values: Mapping[str, object]) -> _Fields:
    """Return the bound fields updated with non-``None`` ``values``."""
    merged = dict(_BOUND.get())
    merged.update((str(key), str(value)) for key, value in values.items() if value is not None)
    return tuple(merged.items())


def get_context() -> dict[str, str]:
    """Return the fields bound in the current context."""
    return dict(_BOUND.get())


def bind_context(**values: object) -> None:
    """Bind ``values`` for the rest of the current context; ``None`` is skipped."""
    if values:
        _BOUND.set(_merge(values))


def clear_context(*keys: str) -> None:
    """Drop ``keys``, or every bound field when none are given."""
    if not keys:
        _BOUND.set(())
        return
    _BOUND.set(tuple((key, value) for key, value in _BOUND.get() if key not in keys))


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of a block."""
    token = _BOUND.set(_merge(values))
    try:
        yield
    finally:
        _BOUND.reset(token)


@contextmanager
def rpc_call_context(method: str, request_id: object) -> Iterator[None]:
    """Bind the method name and request id of one RPC call."""
    with log_context({fields.RPC_METHOD: method, fields.RPC_ID: request_id}):
        yield

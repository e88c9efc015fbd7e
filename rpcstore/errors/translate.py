"""Bidirectional mapping between storage errors and stable RPC error codes.

JSON-RPC collapses exceptions into a code and a message. The service side
assigns reserved codes to the storage errors callers need to act on, and the
client side rebuilds the matching exception types from those codes. Every
other error crosses the boundary as an opaque :class:`RpcError`.
"""

from __future__ import annotations

from types import TracebackType

from rpcstore.jsonrpc.errors import RpcError, error_code

from . import codes
from .types import (
    CapabilityUnsupportedError,
    KeyExistsError,
    KeyNotFoundError,
)


def filter_error(exc: Exception) -> Exception:
    """Assign a stable RPC code to ``exc`` when it is a semantic store error."""
    if isinstance(exc, KeyNotFoundError):
        return RpcError(message=exc.message, code=codes.KEY_NOT_FOUND)
    if isinstance(exc, KeyExistsError):
        return RpcError(message=exc.message, code=codes.KEY_EXISTS)
    if isinstance(exc, CapabilityUnsupportedError):
        return RpcError(message=exc.message, code=codes.NO_CONTENT_ADDRESSING)
    return exc


def unfilter_error(exc: Exception) -> Exception:
    """Rebuild the semantic store error for an RPC error carrying a stable code."""
    code = error_code(exc)
    if code == codes.KEY_NOT_FOUND:
        return KeyNotFoundError()
    if code == codes.KEY_EXISTS:
        return KeyExistsError()
    if code == codes.NO_CONTENT_ADDRESSING:
        return CapabilityUnsupportedError()
    return exc


class _ErrorMapping:
    """Context manager re-raising mapped errors from its block.

    Errors the mapping leaves unchanged propagate as raised; ``__exit__``
    never assigns attributes on them.
    """

    _catches: type[Exception] = Exception

    def _map(self, exc: Exception) -> Exception:
        raise NotImplementedError

    def __enter__(self) -> None:
        return None

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        if not isinstance(exc, self._catches):
            return False
        mapped = self._map(exc)
        if mapped is exc:
            return False
        raise mapped from exc


class translated_errors(_ErrorMapping):
    """Re-raise semantic store errors from the block as coded RPC errors."""

    def _map(self, exc: Exception) -> Exception:
        return filter_error(exc)


class restored_errors(_ErrorMapping):
    """Re-raise coded RPC errors from the block as semantic store errors."""

    _catches = RpcError

    def _map(self, exc: Exception) -> Exception:
        return unfilter_error(exc)

"""Service adapting JSON-RPC requests to a local blob store.

Every service exports the methods named in :class:`rpcstore.protocol.Method`.
The content-addressing methods ``cas.put`` and ``cas.key`` are always
exported; when the wrapped store does not implement content addressing they
fail with code ``-102`` instead of touching the store.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from rpcstore.blob import BlobStore, ContentAddressableStore, StopListing
from rpcstore.errors import (
    CapabilityUnsupportedError,
    filter_error,
    translated_errors,
)
from rpcstore.jsonrpc import INVALID_PARAMS, MethodMap, RpcError
from rpcstore.logging import get_logger
from rpcstore.protocol import (
    DEFAULT_PAGE_LIMIT,
    DataRequest,
    KeyRequest,
    ListReply,
    ListRequest,
    Method,
    PutRequest,
    encode_bytes,
)

_LOGGER = get_logger(__name__)

TRequest = TypeVar("TRequest", bound=BaseModel)


@dataclass(frozen=True)
class PlainBackend:
    """Backend reference for a store without content addressing."""

    store: BlobStore


@dataclass(frozen=True)
class ContentAddressableBackend:
    """Backend reference for a store that also derives keys from content."""

    store: ContentAddressableStore


Backend = PlainBackend | ContentAddressableBackend


def resolve_backend(store: BlobStore) -> Backend:
    """Classify ``store`` by capability."""
    if isinstance(store, ContentAddressableStore):
        return ContentAddressableBackend(store=store)
    return PlainBackend(store=store)


class Service:
    """Exposes one blob store as a table of JSON-RPC methods.

    The service holds no per-call state, so its handlers are safe to invoke
    concurrently.
    """

    def __init__(self, store: BlobStore) -> None:
        self._backend = resolve_backend(store)
        self._methods = MethodMap(
            {
                Method.GET.value: _handler(KeyRequest, self.get, encode_bytes),
                Method.PUT.value: _handler(PutRequest, self.put),
                Method.DELETE.value: _handler(KeyRequest, self.delete),
                Method.SIZE.value: _handler(KeyRequest, self.size),
                Method.LEN.value: _no_params_handler(self.len),
                Method.LIST.value: _handler(ListRequest, self.list, ListReply.to_wire),
                Method.CAS_PUT.value: _handler(DataRequest, self.cas_put, encode_bytes),
                Method.CAS_KEY.value: _handler(DataRequest, self.cas_key, encode_bytes),
            }
        )
        _LOGGER.info(
            "blob store service ready: store_type=%s content_addressable=%s",
            type(store).__name__,
            self.has_cas,
        )

    @property
    def has_cas(self) -> bool:
        """Report whether the wrapped store implements content addressing."""
        return isinstance(self._backend, ContentAddressableBackend)

    def methods(self) -> MethodMap:
        """Return the method table for registration with a dispatcher."""
        return self._methods

    def get(self, request: KeyRequest) -> bytes:
        """Handle the get method."""
        with translated_errors():
            return self._backend.store.get(request.key)

    def put(self, request: PutRequest) -> None:
        """Handle the put method."""
        with translated_errors():
            self._backend.store.put(request.key, request.data, replace=request.replace)

    def delete(self, request: KeyRequest) -> None:
        """Handle the delete method."""
        with translated_errors():
            self._backend.store.delete(request.key)

    def size(self, request: KeyRequest) -> int:
        """Handle the size method."""
        with translated_errors():
            return self._backend.store.size(request.key)

    def len(self) -> int:
        """Handle the len method."""
        with translated_errors():
            return self._backend.store.len()

    def list(self, request: ListRequest) -> ListReply:
        """Handle the list method, returning at most one page of keys."""
        limit = request.count if request.count > 0 else DEFAULT_PAGE_LIMIT
        keys: list[bytes] = []
        next_key: list[bytes] = []

        def collect(key: bytes) -> None:
            if len(keys) == limit:
                next_key.append(key)
                raise StopListing
            keys.append(key)

        with translated_errors():
            self._backend.store.list(request.start, collect)
        return ListReply(keys=keys, next=next_key[0] if next_key else None)

    def cas_put(self, request: DataRequest) -> bytes:
        """Handle the cas.put method."""
        backend = self._require_cas()
        with translated_errors():
            return backend.store.cas_put(
                request.data, prefix=request.prefix or b"", suffix=request.suffix or b""
            )

    def cas_key(self, request: DataRequest) -> bytes:
        """Handle the cas.key method."""
        backend = self._require_cas()
        with translated_errors():
            return backend.store.cas_key(
                request.data, prefix=request.prefix or b"", suffix=request.suffix or b""
            )

    def _require_cas(self) -> ContentAddressableBackend:
        """Return the content-addressable backend or fail with a coded error."""
        if not isinstance(self._backend, ContentAddressableBackend):
            raise filter_error(CapabilityUnsupportedError())
        return self._backend


def _handler(
    model: type[TRequest],
    fn: Callable[[TRequest], Any],
    encode: Callable[[Any], Any] | None = None,
) -> Callable[[Any], Any]:
    """Wrap ``fn`` to validate wire params into ``model`` and encode its result."""

    def handle(params: Any) -> Any:
        try:
            request = model.model_validate(params if params is not None else {})
        except ValidationError as exc:
            raise RpcError(
                message=f"invalid parameters: {exc.error_count()} validation error(s)",
                code=INVALID_PARAMS,
                data=[
                    f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                    for error in exc.errors()
                ],
            ) from exc
        result = fn(request)
        return encode(result) if encode is not None and result is not None else result

    return handle


def _no_params_handler(fn: Callable[[], Any]) -> Callable[[Any], Any]:
    """Wrap ``fn`` for a method that accepts no parameters."""

    def handle(params: Any) -> Any:
        if params not in (None, {}, []):
            raise RpcError(message="method takes no parameters", code=INVALID_PARAMS)
        return fn()

    return handle

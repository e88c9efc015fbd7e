"""Blob store proxies that delegate to a remote service over JSON-RPC."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from rpcstore.blob import ListCallback, StopListing
from rpcstore.errors import restored_errors
from rpcstore.jsonrpc import SERVER_INFO_METHOD, RpcClient
from rpcstore.logging import get_logger
from rpcstore.options import StoreOptions
from rpcstore.protocol import (
    DataRequest,
    KeyRequest,
    ListReply,
    ListRequest,
    Method,
    PutRequest,
    decode_bytes,
)

_LOGGER = get_logger(__name__)


class Store:
    """Implements the blob store protocol by calling a remote service.

    Errors with stable codes come back as the matching store errors; all
    other failures surface as :class:`~rpcstore.jsonrpc.RpcError` or
    :class:`~rpcstore.jsonrpc.RpcTransportError`. Nothing is retried.
    """

    def __init__(self, client: RpcClient, options: StoreOptions | None = None) -> None:
        self._client = client
        self._options = StoreOptions() if options is None else options

    @property
    def options(self) -> StoreOptions:
        """Return the addressing and pagination options of this proxy."""
        return self._options

    def get(self, key: bytes) -> bytes:
        """Return the payload stored under ``key``."""
        result = self._call(Method.GET, KeyRequest(key=self._key(key)).to_wire())
        return decode_bytes(result)

    def put(self, key: bytes, data: bytes, *, replace: bool = False) -> None:
        """Store ``data`` under ``key``, overwriting only when ``replace`` is set."""
        request = PutRequest(key=self._key(key), data=data, replace=replace)
        self._call(Method.PUT, request.to_wire())

    def delete(self, key: bytes) -> None:
        """Remove ``key`` and its payload."""
        self._call(Method.DELETE, KeyRequest(key=self._key(key)).to_wire())

    def size(self, key: bytes) -> int:
        """Return the payload size in bytes for ``key``."""
        return int(self._call(Method.SIZE, KeyRequest(key=self._key(key)).to_wire()))

    def len(self) -> int:
        """Return the number of stored keys.

        With a key prefix the count covers only keys inside the prefix, which
        takes a full walk of that key range.
        """
        if not self._options.key_prefix:
            return int(self._call(Method.LEN))
        return sum(1 for _ in self.keys())

    def list(self, start: bytes, fn: ListCallback) -> None:
        """Call ``fn`` for each key ``>= start`` in ascending order.

        Raising :class:`StopListing` from ``fn`` ends the walk without another
        call to the service.
        """
        for key in self.keys(start):
            try:
                fn(key)
            except StopListing:
                return

    def keys(self, start: bytes = b"") -> Iterator[bytes]:
        """Yield keys ``>= start`` in ascending order, one page per call.

        Pages are fetched lazily, so abandoning the iterator stops the walk.
        """
        prefix = self._options.key_prefix
        cursor = prefix + start
        while True:
            reply = ListReply.model_validate(
                self._call(
                    Method.LIST,
                    ListRequest(start=cursor, count=self._options.page_limit).to_wire(),
                )
            )
            if not reply.keys:
                return
            for key in reply.keys:
                if not key.startswith(prefix):
                    return
                yield key[len(prefix) :]
            if not reply.next:
                return
            cursor = reply.next

    def server_info(self) -> list[str]:
        """Return the method names exported by the remote endpoint."""
        info = self._client.call(SERVER_INFO_METHOD)
        return list(info.get("methods", [])) if isinstance(info, dict) else []

    def close(self) -> None:
        """Close the underlying RPC client."""
        self._client.close()

    def __enter__(self) -> Store:
        """Enter context manager scope."""
        return self

    def __exit__(self, *_: object) -> None:
        """Exit context manager scope and close the client."""
        self.close()

    def _method(self, method: Method) -> str:
        """Return the wire name of ``method`` with the method prefix applied."""
        return self._options.method_prefix + method.value

    def _key(self, key: bytes) -> bytes:
        """Return the storage key for logical ``key``."""
        return self._options.key_prefix + key

    def _strip_key(self, key: bytes) -> bytes:
        """Return the logical key for storage ``key``."""
        prefix = self._options.key_prefix
        return key[len(prefix) :] if key.startswith(prefix) else key

    def _call(self, method: Method, params: Any = None) -> Any:
        """Issue one call, restoring semantic store errors from stable codes."""
        name = self._method(method)
        _LOGGER.debug("calling rpc method: method=%s", name)
        with restored_errors():
            return self._client.call(name, params)


class CASStore(Store):
    """Store proxy with content-addressed put and key derivation.

    The calls fail with :class:`~rpcstore.errors.CapabilityUnsupportedError`
    when the remote store does not implement content addressing.
    """

    def cas_put(self, data: bytes) -> bytes:
        """Store ``data`` under its content-derived key and return that key."""
        return self._cas_call(Method.CAS_PUT, data)

    def cas_key(self, data: bytes) -> bytes:
        """Return the content-derived key for ``data`` without storing it."""
        return self._cas_call(Method.CAS_KEY, data)

    def _cas_call(self, method: Method, data: bytes) -> bytes:
        """Issue one CAS call inside the key prefix and return the logical key."""
        prefix = self._options.key_prefix
        request = DataRequest(data=data, prefix=prefix or None)
        return self._strip_key(decode_bytes(self._call(method, request.to_wire())))

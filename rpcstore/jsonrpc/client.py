"""JSON-RPC clients: an in-process loopback and an httpx-based HTTP client."""

from __future__ import annotations

import itertools
import json
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from rpcstore.logging import get_logger

from .errors import RpcTransportError
from .handler import Assigner, Dispatcher, make_request, result_from_response

_LOGGER = get_logger(__name__)


class RpcClient(Protocol):
    """Issues JSON-RPC calls and returns decoded results."""

    def call(self, method: str, params: Any = None) -> Any:
        """Call ``method`` and return its result, raising ``RpcError`` on failure."""

    def close(self) -> None:
        """Release transport resources."""


class LoopbackClient:
    """Client bound directly to an in-process dispatcher.

    Every request and reply is round-tripped through JSON text, so callers
    observe exactly the encoding a remote peer would.
    """

    def __init__(self, assigner: Assigner) -> None:
        self._dispatcher = Dispatcher(assigner)
        self._ids = itertools.count(1)
        self._closed = False

    def call(self, method: str, params: Any = None) -> Any:
        """Call ``method`` through the local dispatcher."""
        if self._closed:
            raise RpcTransportError(message="client is closed", method=method)
        wire = json.dumps(make_request(method, params, next(self._ids)))
        reply = self._dispatcher.dispatch(json.loads(wire))
        return result_from_response(json.loads(json.dumps(reply)))

    def close(self) -> None:
        """Mark the client closed; later calls fail."""
        self._closed = True

    def __enter__(self) -> LoopbackClient:
        """Enter context manager scope."""
        return self

    def __exit__(self, *_: object) -> None:
        """Exit context manager scope and close the client."""
        self.close()


class HttpRpcClient:
    """Client posting JSON-RPC envelopes to one HTTP endpoint."""

    def __init__(
        self,
        *,
        base_url: str = "",
        rpc_path: str = "/rpc",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Create one RPC client with an injected or newly built ``httpx.Client``."""
        self._rpc_path = rpc_path
        self._ids = itertools.count(1)
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            transport=transport,
        )

    def call(self, method: str, params: Any = None) -> Any:
        """POST one request envelope and decode the response envelope."""
        request = make_request(method, params, next(self._ids))
        try:
            response = self._client.post(self._rpc_path, json=request)
        except httpx.RequestError as exc:
            url = str(exc.request.url) if exc.request is not None else self._rpc_path
            raise RpcTransportError(
                message=f"rpc {method} failed to reach {url}",
                method=method,
                url=url,
                retryable=True,
                cause=exc,
            ) from exc

        if response.is_error:
            status_code = response.status_code
            raise RpcTransportError(
                message=f"rpc {method} got HTTP {status_code} from {response.request.url}",
                method=method,
                url=str(response.request.url),
                retryable=status_code >= 500 or status_code == 429,
                status_code=status_code,
            )

        try:
            envelope = response.json()
        except ValueError as exc:
            raise RpcTransportError(
                message=f"rpc {method} returned a non-JSON body",
                method=method,
                url=str(response.request.url),
                status_code=response.status_code,
                cause=exc,
            ) from exc

        _LOGGER.debug("rpc %s completed: status=%s", method, response.status_code)
        return result_from_response(envelope)

    def close(self) -> None:
        """Close the underlying HTTP client when owned."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpRpcClient:
        """Enter context manager scope."""
        return self

    def __exit__(self, *_: object) -> None:
        """Exit context manager scope and close the client."""
        self.close()

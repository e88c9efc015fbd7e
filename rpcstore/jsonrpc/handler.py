"""Method tables and request dispatch for the JSON-RPC transport."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from rpcstore.logging import fields, get_logger, log_context, rpc_call_context

from .errors import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    RpcError,
)

_LOGGER = get_logger(__name__)

JSONRPC_VERSION = "2.0"
SERVER_INFO_METHOD = "rpc.serverInfo"

Handler = Callable[[Any], Any]
"""Callable taking decoded ``params`` and returning a JSON-compatible result."""


class Assigner(Protocol):
    """Resolves method names to handlers."""

    def assign(self, method: str) -> Handler | None:
        """Return the handler for ``method``, or ``None`` if it is unknown."""

    def names(self) -> list[str]:
        """Return the sorted names of all resolvable methods."""


class MethodMap(dict[str, Handler]):
    """Flat mapping of method names to handlers."""

    def assign(self, method: str) -> Handler | None:
        return self.get(method)

    def names(self) -> list[str]:
        return sorted(self)


class ServiceMap:
    """Groups assigners under namespaces addressed as ``<namespace>.<method>``.

    Several stores can share one transport by registering each service under
    its own namespace; clients then prefix their method names to match.
    """

    def __init__(self, services: Mapping[str, Assigner]) -> None:
        self._services = dict(services)

    def assign(self, method: str) -> Handler | None:
        namespace, separator, name = method.partition(".")
        if not separator:
            return None
        service = self._services.get(namespace)
        if service is None:
            return None
        return service.assign(name)

    def names(self) -> list[str]:
        return sorted(
            f"{namespace}.{name}"
            for namespace, service in self._services.items()
            for name in service.names()
        )


def make_request(method: str, params: Any, request_id: int | None) -> dict[str, Any]:
    """Build one JSON-RPC request envelope; ``None`` id makes a notification."""
    request: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": method}
    if params is not None:
        request["params"] = params
    if request_id is not None:
        request["id"] = request_id
    return request


def error_response(error: RpcError, request_id: Any = None) -> dict[str, Any]:
    """Build one JSON-RPC error response envelope."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_wire()}


def parse_error_response(detail: str = "invalid JSON") -> dict[str, Any]:
    """Build the response for a request body that is not valid JSON."""
    return error_response(RpcError(message=f"parse error: {detail}", code=PARSE_ERROR))


class Dispatcher:
    """Decodes request envelopes, invokes handlers and encodes replies.

    Handlers signal failures by raising. :class:`RpcError` keeps its code;
    any other exception becomes an opaque server error carrying only its
    message.
    """

    def __init__(self, assigner: Assigner) -> None:
        self._assigner = assigner

    def method_names(self) -> list[str]:
        """Return every resolvable method name, including built-ins."""
        return sorted([*self._assigner.names(), SERVER_INFO_METHOD])

    def dispatch(self, request: Any) -> dict[str, Any] | None:
        """Handle one decoded request; return ``None`` for notifications."""
        if not isinstance(request, dict):
            return error_response(
                RpcError(message="request must be a JSON object", code=INVALID_REQUEST)
            )

        request_id = request.get("id")
        method = request.get("method")
        if request.get("jsonrpc") != JSONRPC_VERSION or not isinstance(method, str):
            return error_response(
                RpcError(message="invalid request envelope", code=INVALID_REQUEST),
                request_id,
            )

        with rpc_call_context(method, request_id):
            try:
                result = self._invoke(method, request.get("params"))
            except RpcError as exc:
                with log_context({fields.ERROR_CODE: exc.code}):
                    _LOGGER.debug("rpc call failed: %s", exc.message)
                reply = error_response(exc, request_id)
            except Exception as exc:  # noqa: BLE001
                _LOGGER.warning(
                    "rpc handler raised: exception_type=%s",
                    type(exc).__name__,
                    exc_info=exc,
                )
                reply = error_response(
                    RpcError(message=str(exc) or type(exc).__name__), request_id
                )
            else:
                reply = {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}

        if "id" not in request:
            return None
        return reply

    def _invoke(self, method: str, params: Any) -> Any:
        """Resolve and run one method."""
        if method == SERVER_INFO_METHOD:
            return {"methods": self.method_names()}
        handler = self._assigner.assign(method)
        if handler is None:
            raise RpcError(message=f"no such method {method!r}", code=METHOD_NOT_FOUND)
        return handler(params)


def result_from_response(response: Any) -> Any:
    """Return the result of one response envelope, raising its error if any."""
    if not isinstance(response, dict):
        raise RpcError(message="response must be a JSON object", code=INTERNAL_ERROR)
    if "error" in response and response["error"] is not None:
        raise RpcError.from_wire(response["error"])
    if "result" not in response:
        raise RpcError(message="response carries neither result nor error", code=INTERNAL_ERROR)
    return response["result"]

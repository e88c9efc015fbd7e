"""Tests for JSON-RPC envelope handling and method resolution."""

from __future__ import annotations

import logging

import pytest

from rpcstore.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    SERVER_ERROR,
    Dispatcher,
    LoopbackClient,
    MethodMap,
    RpcError,
    ServiceMap,
)
from rpcstore.jsonrpc.handler import result_from_response


def _echo_methods() -> MethodMap:
    """Return a small method table for dispatcher tests."""

    def boom(_: object) -> None:
        raise RuntimeError("exploded")

    def coded(_: object) -> None:
        raise RpcError(message="teapot", code=-418, data={"hint": "short and stout"})

    return MethodMap({"echo": lambda params: params, "boom": boom, "coded": coded})


def test_dispatch_returns_result_envelope() -> None:
    """Successful calls should echo the request id with a result."""
    reply = Dispatcher(_echo_methods()).dispatch(
        {"jsonrpc": "2.0", "id": 7, "method": "echo", "params": {"a": 1}}
    )

    assert reply == {"jsonrpc": "2.0", "id": 7, "result": {"a": 1}}


def test_unknown_method_maps_to_method_not_found() -> None:
    """Unresolvable names should produce the reserved method-not-found code."""
    reply = Dispatcher(_echo_methods()).dispatch({"jsonrpc": "2.0", "id": 1, "method": "nope"})

    assert reply is not None
    assert reply["error"]["code"] == METHOD_NOT_FOUND


@pytest.mark.parametrize(
    "request_body",
    [
        ["not", "an", "object"],
        {"id": 1, "method": "echo"},
        {"jsonrpc": "1.0", "id": 1, "method": "echo"},
        {"jsonrpc": "2.0", "id": 1, "method": 42},
    ],
)
def test_malformed_envelopes_map_to_invalid_request(request_body: object) -> None:
    """Envelopes missing the version or a string method should be rejected."""
    reply = Dispatcher(_echo_methods()).dispatch(request_body)

    assert reply is not None
    assert reply["error"]["code"] == INVALID_REQUEST


def test_notifications_get_no_reply() -> None:
    """Requests without an id should run but produce no response."""
    calls: list[object] = []
    methods = MethodMap({"note": calls.append})

    reply = Dispatcher(methods).dispatch({"jsonrpc": "2.0", "method": "note", "params": [1]})

    assert reply is None
    assert calls == [[1]]


def test_coded_errors_keep_code_and_data() -> None:
    """Handler RpcErrors should reach the envelope unchanged."""
    reply = Dispatcher(_echo_methods()).dispatch({"jsonrpc": "2.0", "id": 2, "method": "coded"})

    assert reply is not None
    assert reply["error"] == {
        "code": -418,
        "message": "teapot",
        "data": {"hint": "short and stout"},
    }


def test_unclassified_errors_become_opaque_server_errors(caplog: pytest.LogCaptureFixture) -> None:
    """Other handler exceptions should carry only their message and be logged."""
    with caplog.at_level(logging.WARNING, logger="rpcstore.jsonrpc.handler"):
        reply = Dispatcher(_echo_methods()).dispatch({"jsonrpc": "2.0", "id": 3, "method": "boom"})

    assert reply is not None
    assert reply["error"] == {"code": SERVER_ERROR, "message": "exploded"}
    assert any("exception_type=RuntimeError" in record.getMessage() for record in caplog.records)


def test_server_info_lists_registered_and_builtin_methods() -> None:
    """The built-in introspection method should list every resolvable name."""
    reply = Dispatcher(_echo_methods()).dispatch(
        {"jsonrpc": "2.0", "id": 4, "method": "rpc.serverInfo"}
    )

    assert reply is not None
    assert reply["result"] == {"methods": ["boom", "coded", "echo", "rpc.serverInfo"]}


def test_service_map_resolves_namespaced_methods() -> None:
    """A service map should route ``ns.method`` to the namespace's table."""
    services = ServiceMap({"one": _echo_methods(), "two": MethodMap({"ping": lambda _: "pong"})})

    assert services.assign("two.ping") is not None
    assert services.assign("ping") is None
    assert services.assign("three.ping") is None
    assert services.assign("one.ping") is None
    assert services.names() == ["one.boom", "one.coded", "one.echo", "two.ping"]


def test_loopback_client_round_trips_through_json() -> None:
    """The loopback client should return results and raise coded errors."""
    client = LoopbackClient(_echo_methods())

    assert client.call("echo", {"k": [1, "two"]}) == {"k": [1, "two"]}
    with pytest.raises(RpcError) as exc_info:
        client.call("coded")
    assert exc_info.value.code == -418


@pytest.mark.parametrize(
    "response",
    [
        "not a dict",
        {"jsonrpc": "2.0", "id": 1},
    ],
)
def test_malformed_responses_raise_internal_error(response: object) -> None:
    """Responses without a result or error should not be mistaken for success."""
    with pytest.raises(RpcError) as exc_info:
        result_from_response(response)

    assert exc_info.value.code == INTERNAL_ERROR


def test_null_result_is_a_valid_success() -> None:
    """A present ``null`` result should decode to ``None``."""
    assert result_from_response({"jsonrpc": "2.0", "id": 1, "result": None}) is None

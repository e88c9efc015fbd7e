"""Minimal JSON-RPC 2.0 transport used by rpcstore services and proxies."""

from .client import HttpRpcClient, LoopbackClient, RpcClient
from .errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR,
    RpcError,
    RpcTransportError,
    error_code,
)
from .handler import (
    SERVER_INFO_METHOD,
    Assigner,
    Dispatcher,
    Handler,
    MethodMap,
    ServiceMap,
)
from .server import create_rpc_app, run_app

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "SERVER_ERROR",
    "SERVER_INFO_METHOD",
    "Assigner",
    "Dispatcher",
    "Handler",
    "HttpRpcClient",
    "LoopbackClient",
    "MethodMap",
    "RpcClient",
    "RpcError",
    "RpcTransportError",
    "ServiceMap",
    "create_rpc_app",
    "error_code",
    "run_app",
]

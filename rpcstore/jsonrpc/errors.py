"""Typed errors and reserved codes for the JSON-RPC transport."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Reserved JSON-RPC 2.0 codes.
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Implementation-defined code for handler failures that carry no code.
SERVER_ERROR = -32000


@dataclass(frozen=True)
class RpcError(Exception):
    """Error reply carried in a JSON-RPC response envelope."""

    message: str
    code: int = SERVER_ERROR
    data: Any = None

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message

    def to_wire(self) -> dict[str, Any]:
        """Encode this error as a JSON-RPC error object."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error

    @classmethod
    def from_wire(cls, error: Any) -> RpcError:
        """Decode one JSON-RPC error object, tolerating malformed shapes."""
        if not isinstance(error, dict):
            return cls(message=f"malformed error object: {error!r}", code=INTERNAL_ERROR)
        code = error.get("code")
        return cls(
            message=str(error.get("message", "")),
            code=code if isinstance(code, int) else INTERNAL_ERROR,
            data=error.get("data"),
        )


@dataclass(frozen=True)
class RpcTransportError(Exception):
    """Failure to deliver a call or read its reply."""

    message: str
    method: str
    url: str = ""
    retryable: bool = False
    status_code: int = 0
    cause: Exception | None = None

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


def error_code(exc: BaseException | None) -> int | None:
    """Return the JSON-RPC code carried by ``exc``, or ``None`` if it has none."""
    if isinstance(exc, RpcError):
        return exc.code
    return None

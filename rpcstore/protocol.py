"""Wire protocol shared by the blob store service and its client proxies.

Method names and message shapes live here so both sides of the boundary
import the same definitions.

Method      JSON request and response messages
"get"       {"key":"<storage-key>"}
            "<blob-content>"

"put"       {"key":"<storage-key>","data":"<blob-content>","replace":bool}
            null

"delete"    {"key":"<storage-key>"}
            null

"size"      {"key":"<storage-key>"}
            <integer>

"len"       null
            <integer>

"list"      {"start":"<storage-key>","count":<integer>}
            {"keys":["<storage-key>",...],"next":"<storage-key>"}

"cas.put"   {"data":"<blob-content>","prefix":"<bytes>","suffix":"<bytes>"}
            "<storage-key>"

"cas.key"   {"data":"<blob-content>","prefix":"<bytes>","suffix":"<bytes>"}
            "<storage-key>"

Keys and blob contents are base64 strings with padding, for example
``"a2V5Zm9v"``. The ``next`` field of a list reply is omitted on the last
page, and the CAS ``prefix``/``suffix`` fields are optional.
"""

from __future__ import annotations

import base64
import binascii
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

DEFAULT_PAGE_LIMIT = 64


class Method(str, Enum):
    """RPC method names exported by the blob store service."""

    GET = "get"
    PUT = "put"
    DELETE = "delete"
    SIZE = "size"
    LEN = "len"
    LIST = "list"
    CAS_PUT = "cas.put"
    CAS_KEY = "cas.key"


def encode_bytes(value: bytes) -> str:
    """Encode one byte string for the wire."""
    return base64.b64encode(value).decode("ascii")


def decode_bytes(value: Any) -> bytes:
    """Decode one wire byte string; ``None`` decodes as empty."""
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise ValueError(f"expected base64 string, got {type(value).__name__}")
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 data: {exc}") from exc


WireBytes = Annotated[
    bytes,
    BeforeValidator(decode_bytes),
    PlainSerializer(encode_bytes, return_type=str, when_used="json"),
]


class _WireModel(BaseModel):
    """Base wire message with strict field checking."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        """Encode this message as JSON-compatible params or result."""
        return self.model_dump(mode="json", exclude_none=True)


class KeyRequest(_WireModel):
    """Request for the get, delete and size methods."""

    key: WireBytes


class PutRequest(_WireModel):
    """Request for the put method."""

    key: WireBytes
    data: WireBytes
    replace: bool = False


class DataRequest(_WireModel):
    """Request for the cas.put and cas.key methods."""

    data: WireBytes
    prefix: WireBytes | None = None
    suffix: WireBytes | None = None


class ListRequest(_WireModel):
    """Request for the list method; a non-positive count selects the default."""

    start: WireBytes = b""
    count: int = 0


class ListReply(_WireModel):
    """Reply from the list method; ``next`` is set iff more keys remain."""

    keys: list[WireBytes] = Field(default_factory=list)
    next: WireBytes | None = None

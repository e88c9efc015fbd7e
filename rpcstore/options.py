"""Client-side options for blob store proxies."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rpcstore.protocol import DEFAULT_PAGE_LIMIT


class StoreOptions(BaseModel):
    """Addressing and pagination settings for one store proxy.

    ``method_prefix`` is prepended to every RPC method name, for services
    registered under a namespace. ``key_prefix`` is prepended to every storage
    key, so several logical stores can share one backend. ``page_limit`` is
    the number of keys requested per list call; ``0`` lets the service choose.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    method_prefix: str = ""
    key_prefix: bytes = b""
    page_limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=0)

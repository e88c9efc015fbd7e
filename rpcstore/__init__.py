"""Blob store access across a JSON-RPC boundary.

A :class:`Service` wraps a local blob store and exports its operations as RPC
methods; a :class:`Store` or :class:`CASStore` proxy implements the same store
protocol on the client side by calling those methods.
"""

from rpcstore.blob import BlobStore, ContentAddressableStore, StopListing
from rpcstore.errors import (
    BlobStoreError,
    CapabilityUnsupportedError,
    KeyExistsError,
    KeyNotFoundError,
    is_key_exists,
    is_key_not_found,
)
from rpcstore.options import StoreOptions
from rpcstore.protocol import DEFAULT_PAGE_LIMIT, Method
from rpcstore.service import Service
from rpcstore.store import CASStore, Store

__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "BlobStore",
    "BlobStoreError",
    "CASStore",
    "CapabilityUnsupportedError",
    "ContentAddressableStore",
    "KeyExistsError",
    "KeyNotFoundError",
    "Method",
    "Service",
    "StopListing",
    "Store",
    "StoreOptions",
    "is_key_exists",
    "is_key_not_found",
]

"""Public storage error API for rpcstore."""

from . import codes
from .translate import filter_error, restored_errors, translated_errors, unfilter_error
from .types import (
    BlobStoreError,
    CapabilityUnsupportedError,
    KeyExistsError,
    KeyNotFoundError,
    is_key_exists,
    is_key_not_found,
)

__all__ = [
    "BlobStoreError",
    "CapabilityUnsupportedError",
    "KeyExistsError",
    "KeyNotFoundError",
    "codes",
    "filter_error",
    "is_key_exists",
    "is_key_not_found",
    "restored_errors",
    "translated_errors",
    "unfilter_error",
]

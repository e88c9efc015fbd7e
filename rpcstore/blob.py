"""Transport-neutral protocols for blob storage backends."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


class StopListing(Exception):
    """Raised by a list callback to end enumeration without error."""


ListCallback = Callable[[bytes], None]


@runtime_checkable
class BlobStore(Protocol):
    """Protocol for key/value stores of opaque byte payloads.

    Missing keys raise :class:`~rpcstore.errors.KeyNotFoundError`, and a
    non-replacing put of an existing key raises
    :class:`~rpcstore.errors.KeyExistsError`.
    """

    def get(self, key: bytes) -> bytes:
        """Return the payload stored under ``key``."""

    def put(self, key: bytes, data: bytes, *, replace: bool = False) -> None:
        """Store ``data`` under ``key``, overwriting only when ``replace`` is set."""

    def delete(self, key: bytes) -> None:
        """Remove ``key`` and its payload."""

    def size(self, key: bytes) -> int:
        """Return the payload size in bytes for ``key``."""

    def list(self, start: bytes, fn: ListCallback) -> None:
        """Call ``fn`` for each key ``>= start`` in ascending byte order.

        Enumeration ends without error when ``fn`` raises :class:`StopListing`;
        any other exception from ``fn`` propagates.
        """

    def len(self) -> int:
        """Return the number of stored keys."""

    def close(self) -> None:
        """Release resources held by the store."""


@runtime_checkable
class ContentAddressableStore(BlobStore, Protocol):
    """Blob store that derives keys from payload content."""

    def cas_put(self, data: bytes, *, prefix: bytes = b"", suffix: bytes = b"") -> bytes:
        """Store ``data`` under ``prefix + digest + suffix`` and return that key."""

    def cas_key(self, data: bytes, *, prefix: bytes = b"", suffix: bytes = b"") -> bytes:
        """Return the key ``cas_put`` would use for ``data`` without storing it."""

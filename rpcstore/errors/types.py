"""Semantic error types shared by blob stores, services and proxies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BlobStoreError(Exception):
    """Base error type for blob store failures."""

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(frozen=True)
class KeyNotFoundError(BlobStoreError):
    """The requested key is not present in the store."""

    message: str = "key not found"
    key: bytes | None = None


@dataclass(frozen=True)
class KeyExistsError(BlobStoreError):
    """A non-replacing put targeted a key that is already present."""

    message: str = "key exists"
    key: bytes | None = None


@dataclass(frozen=True)
class CapabilityUnsupportedError(BlobStoreError):
    """The store does not implement content addressing."""

    message: str = "store does not implement content addressing"


def is_key_not_found(exc: BaseException | None) -> bool:
    """Report whether ``exc`` denotes a missing key."""
    return isinstance(exc, KeyNotFoundError)


def is_key_exists(exc: BaseException | None) -> bool:
    """Report whether ``exc`` denotes an existing key."""
    return isinstance(exc, KeyExistsError)

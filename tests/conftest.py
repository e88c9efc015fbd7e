"""Shared fixtures for the rpcstore test suite."""

from __future__ import annotations

import pytest

from rpcstore import CASStore, Service, StoreOptions
from rpcstore.jsonrpc import LoopbackClient
from tests.helpers.memory_store import HashCASStore, MemoryStore


@pytest.fixture
def memory_store() -> MemoryStore:
    """Return an empty plain in-memory backend."""
    return MemoryStore()


@pytest.fixture
def cas_backend() -> HashCASStore:
    """Return an empty content-addressable in-memory backend."""
    return HashCASStore()


@pytest.fixture
def remote(memory_store: MemoryStore) -> CASStore:
    """Return a proxy reaching ``memory_store`` through a loopback service."""
    return CASStore(LoopbackClient(Service(memory_store).methods()), StoreOptions())


@pytest.fixture
def remote_cas(cas_backend: HashCASStore) -> CASStore:
    """Return a proxy reaching ``cas_backend`` through a loopback service."""
    return CASStore(LoopbackClient(Service(cas_backend).methods()), StoreOptions())

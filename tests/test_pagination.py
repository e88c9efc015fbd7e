"""Paginated enumeration across the RPC boundary."""

from __future__ import annotations

import random

import pytest

from rpcstore import Service, StopListing, Store, StoreOptions
from tests.helpers.memory_store import MemoryStore, RecordingClient


def _recording_store(keys: list[bytes], page_limit: int) -> tuple[Store, RecordingClient]:
    """Build a proxy over a backend seeded with ``keys``."""
    backend = MemoryStore()
    for key in keys:
        backend.put(key, b"")
    client = RecordingClient(Service(backend).methods())
    return Store(client, StoreOptions(page_limit=page_limit)), client


@pytest.mark.parametrize("page_limit", [0, 1, 2, 3, 7, 64, 1000])
def test_full_walk_visits_every_key_once_in_order(page_limit: int) -> None:
    """A full walk should see all keys exactly once, whatever the page size."""
    rng = random.Random(20201014)
    keys = list({rng.randbytes(rng.randint(0, 6)) for _ in range(150)})
    store, _client = _recording_store(keys, page_limit)
    seen: list[bytes] = []

    store.list(b"", seen.append)

    assert seen == sorted(keys)


def test_walk_uses_one_call_per_page() -> None:
    """Three keys with a page limit of two should take exactly two list calls."""
    store, client = _recording_store([b"a", b"b", b"c"], page_limit=2)
    seen: list[bytes] = []

    store.list(b"", seen.append)

    assert seen == [b"a", b"b", b"c"]
    assert client.calls == ["list", "list"]


def test_default_page_limit_requests_sixty_four_keys() -> None:
    """Without an explicit limit the proxy should fetch 64-key pages."""
    keys = [b"k%03d" % index for index in range(130)]
    store, client = _recording_store(keys, page_limit=StoreOptions().page_limit)
    seen: list[bytes] = []

    store.list(b"", seen.append)

    assert seen == keys
    assert len(client.calls) == 3


def test_stop_listing_after_first_key_ends_walk_without_more_calls() -> None:
    """StopListing should end delivery immediately with no further RPC calls."""
    store, client = _recording_store([b"a", b"b", b"c", b"d"], page_limit=2)
    seen: list[bytes] = []

    def take_one(key: bytes) -> None:
        seen.append(key)
        raise StopListing

    store.list(b"", take_one)

    assert seen == [b"a"]
    assert client.calls == ["list"]


def test_walk_resumes_from_start_key() -> None:
    """A walk may resume from any previously observed cursor."""
    store, _client = _recording_store([b"a", b"b", b"c", b"d"], page_limit=2)

    assert list(store.keys(b"c")) == [b"c", b"d"]
    assert list(store.keys(b"bb")) == [b"c", b"d"]
    assert list(store.keys(b"z")) == []


def test_abandoned_key_iterator_fetches_no_more_pages() -> None:
    """Pages should be fetched lazily by the key iterator."""
    store, client = _recording_store([b"a", b"b", b"c", b"d", b"e"], page_limit=2)

    iterator = store.keys()
    assert [next(iterator), next(iterator)] == [b"a", b"b"]
    iterator.close()

    assert client.calls == ["list"]

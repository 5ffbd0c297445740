"""Tests for the fetch result cache."""

import threading
from datetime import datetime, timezone

import pytest

from wiki.engine import FetchCache

FIXED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def cache() -> FetchCache:
    return FetchCache(clock=lambda: FIXED)


def test_get_missing_returns_none(cache):
    assert cache.get("https://example.com") is None
    assert len(cache) == 0


def test_put_then_get(cache):
    entry = cache.put("https://example.com/a", {"name": "A"})

    assert entry.fetched_at == FIXED
    assert cache.get("https://example.com/a") is entry
    assert "https://example.com/a" in cache


def test_put_replaces_whole_entry(cache):
    first = cache.put("https://example.com/a", ["old"])
    second = cache.put("https://example.com/a", ["new"])

    assert cache.get("https://example.com/a") is second
    assert first.value == ["old"]
    assert len(cache) == 1


def test_clear_one(cache):
    cache.put("https://example.com/a", 1)
    cache.put("https://example.com/b", 2)

    assert cache.clear_one("https://example.com/a") is True
    assert cache.clear_one("https://example.com/a") is False
    assert cache.get("https://example.com/b").value == 2


def test_clear_all(cache):
    cache.put("https://example.com/a", 1)
    cache.put("https://example.com/b", 2)

    assert cache.clear_all() == 2
    assert len(cache) == 0
    assert cache.clear_all() == 0


def test_snapshot_is_detached(cache):
    cache.put("https://example.com/a", 1)
    snapshot = cache.snapshot()

    cache.put("https://example.com/b", 2)
    cache.clear_one("https://example.com/a")

    assert snapshot.count == 1
    assert snapshot.addresses == ("https://example.com/a",)
    assert snapshot.timestamps["https://example.com/a"] == FIXED
    with pytest.raises(TypeError):
        snapshot.timestamps["https://example.com/c"] = FIXED  # type: ignore[index]


def test_snapshot_as_dict(cache):
    cache.put("https://example.com/a", 1)

    assert cache.snapshot().as_dict() == {
        "count": 1,
        "addresses": ["https://example.com/a"],
        "timestamps": {"https://example.com/a": FIXED.isoformat()},
    }


def test_concurrent_puts(cache):
    def writer(offset: int) -> None:
        for i in range(100):
            cache.put(f"https://example.com/{offset}/{i}", i)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 800
    assert cache.snapshot().count == 800

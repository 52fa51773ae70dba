import logging

import pytest

from gemini_marketing.cache import CacheStats, ResponseCache

pytestmark = pytest.mark.unit


class ExplodingStore(dict):
    def get(self, key, default=None):
        raise OSError("backend unavailable")

    def __setitem__(self, key, value):
        raise OSError("backend unavailable")


def test_value_is_served_until_expiry(fake_clock):
    cache = ResponseCache(60, clock=fake_clock)
    cache.set("k", {"a": 1})

    fake_clock.advance(59.9)
    assert cache.get("k") == {"a": 1}

    fake_clock.advance(0.1)
    assert cache.get("k") is None


def test_expired_entry_is_evicted_on_lookup(fake_clock):
    cache = ResponseCache(10, clock=fake_clock)
    cache.set("k", 1)
    fake_clock.advance(10)

    assert cache.get("k") is None
    assert len(cache) == 0


def test_per_entry_ttl_overrides_default(fake_clock):
    cache = ResponseCache(3600, clock=fake_clock)
    cache.set("short", "x", ttl_seconds=5)
    cache.set("long", "y")

    fake_clock.advance(6)

    assert cache.get("short") is None
    assert cache.get("long") == "y"


def test_stats_count_only_live_entries(fake_clock):
    cache = ResponseCache(100, clock=fake_clock)
    cache.set("a", 1, ttl_seconds=1)
    cache.set("b", 2)
    cache.get("b")
    cache.get("missing")

    fake_clock.advance(2)

    assert cache.stats() == CacheStats(entry_count=1, hits=1, misses=1)
    assert cache.stats().to_dict() == {"entry_count": 1, "hits": 1, "misses": 1}


def test_clear_drops_entries_and_counters(fake_clock):
    cache = ResponseCache(100, clock=fake_clock)
    cache.set("a", 1)
    cache.get("a")

    cache.clear()

    assert cache.get("a") is None
    assert cache.stats() == CacheStats(entry_count=0, hits=0, misses=1)


def test_non_positive_default_ttl_is_rejected():
    with pytest.raises(ValueError):
        ResponseCache(0)


def test_backend_failures_fail_open(fake_clock, caplog):
    cache = ResponseCache(100, clock=fake_clock, store=ExplodingStore())

    with caplog.at_level(logging.WARNING, logger="gemini_marketing.cache"):
        cache.set("k", 1)
        assert cache.get("k") is None

    assert "Cache write failed" in caplog.text
    assert "Cache read failed" in caplog.text

"""Tests for the in-memory cache."""

from ratesview.infrastructure import cache as cache_module
from ratesview.infrastructure.cache import MemoryCache, QueryCache


class TestMemoryCache:
    def test_get_missing(self):
        assert MemoryCache().get("nope") is None

    def test_set_and_get(self):
        cache = MemoryCache()
        cache.set("k", {"v": 1})
        assert cache.get("k") == {"v": 1}
        assert cache.exists("k")

    def test_zero_ttl_never_expires(self, monkeypatch):
        cache = MemoryCache()
        cache.set("k", "v", ttl=0)
        monkeypatch.setattr(cache_module.time, "time", lambda: 10**12)
        assert cache.get("k") == "v"

    def test_ttl_expiry(self, monkeypatch):
        now = [1000.0]
        monkeypatch.setattr(cache_module.time, "time", lambda: now[0])
        cache = MemoryCache(default_ttl=5)
        cache.set("k", "v")
        now[0] += 4
        assert cache.get("k") == "v"
        now[0] += 2
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_cleanup_expired(self, monkeypatch):
        now = [1000.0]
        monkeypatch.setattr(cache_module.time, "time", lambda: now[0])
        cache = MemoryCache()
        cache.set("short", 1, ttl=1)
        cache.set("forever", 2)
        now[0] += 10
        assert cache.cleanup_expired() == 1
        assert cache.get("forever") == 2

    def test_delete_and_clear(self):
        cache = MemoryCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        cache.delete("missing")
        assert not cache.exists("a")
        cache.clear()
        assert len(cache) == 0


class TestQueryCache:
    def test_last_write_wins(self):
        cache = QueryCache()
        cache.write("sig", {"rates": [1]})
        cache.write("sig", {"rates": [2]})
        assert cache.read("sig") == {"rates": [2]}

    def test_signatures_are_independent(self):
        cache = QueryCache()
        cache.write("a", {"x": 1})
        cache.write("b", {"x": 2})
        assert cache.read("a") == {"x": 1}
        assert cache.read("b") == {"x": 2}

    def test_write_copies_payload(self):
        cache = QueryCache()
        data = {"rates": [{"currency": "USD"}]}
        cache.write("sig", data)
        data["rates"].append({"currency": "XXX"})

        read = cache.read("sig")
        assert read == {"rates": [{"currency": "USD"}]}
        read["rates"].clear()
        assert cache.read("sig") == {"rates": [{"currency": "USD"}]}

    def test_write_drops_expired_entries(self, monkeypatch):
        now = [1000.0]
        monkeypatch.setattr(cache_module.time, "time", lambda: now[0])
        cache = QueryCache(default_ttl=5)
        cache.write("stale", {"rates": []})
        now[0] += 10
        cache.write("fresh", {"rates": []})

        assert len(cache) == 1
        assert cache.read("fresh") == {"rates": []}

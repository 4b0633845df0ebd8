"""
Tests for the conversion cache.
"""

import threading

from xml_json_converter.cache import ConversionCache


class TestConversionCache:
    def test_get_missing(self, cache):
        assert cache.get("nope") is None

    def test_set_and_get(self, cache):
        cache.set("k", "{}")
        assert cache.get("k") == "{}"
        assert "k" in cache
        assert len(cache) == 1

    def test_overwrite(self, cache):
        cache.set("k", "old")
        cache.set("k", "new")
        assert cache.get("k") == "new"
        assert len(cache) == 1

    def test_expiry(self, cache, clock):
        cache.set("k", "v")
        clock.advance(299)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_purge_expired(self, cache, clock):
        cache.set("old", "1")
        clock.advance(200)
        cache.set("fresh", "2")
        clock.advance(150)
        assert cache.purge_expired() == 1
        assert cache.get("fresh") == "2"
        assert cache.get("old") is None

    def test_clear(self, cache):
        cache.set("a", "1")
        cache.set("b", "2")
        cache.clear()
        assert len(cache) == 0

    def test_make_key_includes_options(self):
        assert ConversionCache.make_key("<a/>", "x") != ConversionCache.make_key("<a/>", "y")

    def test_concurrent_writers(self):
        cache = ConversionCache()

        def write(prefix):
            for i in range(200):
                cache.set(f"{prefix}-{i}", str(i))
                cache.purge_expired()

        threads = [threading.Thread(target=write, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 800

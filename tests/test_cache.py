"""Tests for the response cache and cache stores."""

import gzip
import json

import pytest

from analytics_connector.cache import InMemoryCacheStore, ResponseCache
from analytics_connector.errors import CacheWriteFailure, ConfigurationError


class TestInMemoryCacheStore:
    """Tests for the TTL dict store."""

    def test_get_before_expiry(self, cache_store):
        """Test a value is readable within its TTL."""
        cache_store.put("k", b"v", ttl_seconds=20)

        assert cache_store.get("k") == b"v"

    def test_get_after_expiry(self, cache_store, clock):
        """Test expired values read as absent and are dropped."""
        cache_store.put("k", b"v", ttl_seconds=20)
        clock.advance(20)

        assert cache_store.get("k") is None
        assert len(cache_store) == 0

    def test_oversized_value_rejected(self, clock):
        """Test values above the size limit raise and keep the old entry."""
        store = InMemoryCacheStore(max_value_bytes=4, clock=clock)
        store.put("k", b"old", ttl_seconds=20)

        with pytest.raises(CacheWriteFailure):
            store.put("k", b"too large", ttl_seconds=20)

        assert store.get("k") == b"old"

    def test_delete(self, cache_store):
        """Test delete removes the entry and tolerates missing keys."""
        cache_store.put("k", b"v", ttl_seconds=20)
        cache_store.delete("k")
        cache_store.delete("missing")

        assert cache_store.get("k") is None


class TestResponseCache:
    """Tests for compressed item-list caching."""

    def test_put_then_get_round_trip(self, response_cache, search_items):
        """Test a put followed by a get returns equal items."""
        response_cache.put("key", search_items)

        assert response_cache.get("key") == search_items

    def test_get_missing_is_none(self, response_cache):
        """Test an absent key is a miss, not an error."""
        assert response_cache.get("nope") is None

    def test_entry_expires_after_ttl(self, response_cache, clock, search_items):
        """Test entries disappear once the TTL elapses."""
        response_cache.put("key", search_items)
        clock.advance(19)
        assert response_cache.get("key") == search_items

        clock.advance(1)
        assert response_cache.get("key") is None

    def test_per_put_ttl_override(self, response_cache, clock, search_items):
        """Test an explicit TTL wins over the default."""
        response_cache.put("key", search_items, ttl_seconds=5)
        clock.advance(5)

        assert response_cache.get("key") is None

    def test_stored_value_is_gzipped_json(self, response_cache, cache_store, search_items):
        """Test the stored blob is compressed JSON."""
        response_cache.put("key", search_items)

        blob = cache_store.get("key")
        assert json.loads(gzip.decompress(blob)) == search_items

    def test_write_failure_is_swallowed(self, clock, search_items):
        """Test a store rejecting the value does not raise."""
        cache = ResponseCache(InMemoryCacheStore(max_value_bytes=10, clock=clock), ttl_seconds=20)

        cache.put("key", search_items)

        assert cache.get("key") is None

    def test_unserializable_items_swallowed(self, response_cache):
        """Test serialization errors are swallowed too."""
        response_cache.put("key", [{"value": object()}])

        assert response_cache.get("key") is None

    def test_failed_write_keeps_previous_entry(self, clock):
        """Test a failed overwrite leaves the prior entry readable."""
        cache = ResponseCache(InMemoryCacheStore(max_value_bytes=60, clock=clock), ttl_seconds=20)
        cache.put("key", [{"a": 1}])

        cache.put("key", [{"a": i} for i in range(500)])

        assert cache.get("key") == [{"a": 1}]

    def test_corrupt_entry_reads_as_miss(self, response_cache, cache_store):
        """Test an undecodable blob is treated as absent."""
        cache_store.put("key", b"not gzip", ttl_seconds=20)

        assert response_cache.get("key") is None

    def test_ttl_from_env(self, cache_store, monkeypatch):
        """Test the default TTL can come from the environment."""
        monkeypatch.setenv("ANALYTICS_CONNECTOR_CACHE_TTL", "45")

        assert ResponseCache(cache_store).ttl_seconds == 45

    @pytest.mark.parametrize("value", ["twenty", "0", "-5"])
    def test_invalid_ttl_from_env(self, cache_store, monkeypatch, value):
        """Test a bad TTL setting names the variable."""
        monkeypatch.setenv("ANALYTICS_CONNECTOR_CACHE_TTL", value)

        with pytest.raises(ConfigurationError) as exc_info:
            ResponseCache(cache_store)

        assert exc_info.value.parameter == "ANALYTICS_CONNECTOR_CACHE_TTL"

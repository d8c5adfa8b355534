"""
Redis Cache Tests - Car UX Review Platform
tests/test_redis_cache.py

Tests for report caching including cache hits, misses, invalidation,
and graceful degradation.
"""
from unittest.mock import patch, MagicMock
from uuid import uuid4

import pytest
import redis
from pydantic import BaseModel

from carux.config import settings
from carux.services.redis_cache import RedisCache
from carux.services.cache import (
    get_cache,
    invalidate_all_reports,
    invalidate_report,
    report_cache_key,
    reset_cache,
)


class MockModel(BaseModel):
    """Mock Pydantic model for testing."""
    id: str
    name: str


@pytest.fixture
def cache_enabled(monkeypatch):
    monkeypatch.setattr(settings, "CACHE_ENABLED", True)
    reset_cache()
    yield
    reset_cache()


class TestRedisCache:
    """Tests for the RedisCache class."""

    def test_redis_cache_init(self):
        """Test RedisCache connects with the configured URL."""
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            cache = RedisCache()
            mock_redis.from_url.assert_called_once_with(
                settings.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=settings.REDIS_CONNECT_TIMEOUT,
            )
            assert cache.client is mock_redis.from_url.return_value

    def test_cache_set_and_get(self):
        """Test setting and getting cached values."""
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            mock_client = MagicMock()
            mock_redis.from_url.return_value = mock_client

            cache = RedisCache()
            model = MockModel(id="123", name="Test")

            cache.set("test:key", model, 300)
            mock_client.setex.assert_called_once_with("test:key", 300, model.model_dump_json())

            # Simulate cache hit
            mock_client.get.return_value = model.model_dump_json()
            result = cache.get("test:key", MockModel)
            assert result == model

    def test_cache_get_miss(self):
        """Test cache miss returns None."""
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            mock_client = MagicMock()
            mock_client.get.return_value = None
            mock_redis.from_url.return_value = mock_client

            cache = RedisCache()
            assert cache.get("nonexistent:key", MockModel) is None

    def test_cache_delete(self):
        """Test deleting a cache entry."""
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            mock_client = MagicMock()
            mock_redis.from_url.return_value = mock_client

            cache = RedisCache()
            cache.delete("test:key")
            mock_client.delete.assert_called_once_with("test:key")

    def test_cache_delete_pattern(self):
        """Test deleting cache entries by pattern."""
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            mock_client = MagicMock()
            mock_client.scan_iter.return_value = iter(["report:1", "report:2", "report:3"])
            mock_client.unlink.return_value = 3
            mock_redis.from_url.return_value = mock_client

            cache = RedisCache()
            assert cache.delete_pattern("report:*") == 3

            mock_client.scan_iter.assert_called_once_with(
                match="report:*", count=settings.CACHE_DELETE_BATCH
            )
            mock_client.unlink.assert_called_once_with("report:1", "report:2", "report:3")
            mock_client.delete.assert_not_called()

    def test_cache_delete_pattern_in_batches(self, monkeypatch):
        monkeypatch.setattr(settings, "CACHE_DELETE_BATCH", 2)
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            mock_client = MagicMock()
            mock_client.scan_iter.return_value = iter(["report:1", "report:2", "report:3"])
            mock_client.unlink.side_effect = [2, 1]
            mock_redis.from_url.return_value = mock_client

            assert RedisCache().delete_pattern("report:*") == 3
            assert mock_client.unlink.call_count == 2

    def test_cache_delete_pattern_no_matches(self):
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            mock_client = MagicMock()
            mock_client.scan_iter.return_value = iter([])
            mock_redis.from_url.return_value = mock_client

            assert RedisCache().delete_pattern("report:*") == 0
            mock_client.unlink.assert_not_called()

    def test_unparseable_entry_is_a_miss(self):
        """Entries from an older schema are dropped instead of raising."""
        with patch('carux.services.redis_cache.redis.Redis') as mock_redis:
            mock_client = MagicMock()
            mock_client.get.return_value = '{"id": "123"}'
            mock_redis.from_url.return_value = mock_client

            assert RedisCache().get("test:key", MockModel) is None
            mock_client.delete.assert_called_once_with("test:key")


class TestCacheSingleton:
    """Tests for the cache singleton."""

    def test_disabled_cache_returns_none(self):
        """CACHE_ENABLED is False for the test session."""
        with patch('carux.services.cache.RedisCache') as mock_cache_class:
            assert get_cache() is None
            mock_cache_class.assert_not_called()

    def test_get_cache_returns_instance(self, cache_enabled):
        """Test that get_cache returns a RedisCache instance when Redis is available."""
        with patch('carux.services.cache.RedisCache') as mock_cache_class:
            mock_instance = MagicMock()
            mock_instance.client.ping.return_value = True
            mock_cache_class.return_value = mock_instance

            assert get_cache() is mock_instance

    def test_get_cache_returns_none_when_redis_unavailable(self, cache_enabled):
        """Test that get_cache returns None when Redis is unavailable."""
        with patch('carux.services.cache.RedisCache') as mock_cache_class:
            mock_cache_class.return_value.client.ping.side_effect = redis.ConnectionError("down")
            assert get_cache() is None

    def test_get_cache_singleton_behavior(self, cache_enabled):
        """Test that get_cache returns the same instance."""
        with patch('carux.services.cache.RedisCache') as mock_cache_class:
            mock_instance = MagicMock()
            mock_cache_class.return_value = mock_instance

            cache1 = get_cache()
            cache2 = get_cache()
            assert cache1 is cache2
            # Should only be called once due to singleton
            assert mock_cache_class.call_count == 1


class TestCacheInvalidation:
    """Tests for report cache invalidation."""

    def test_report_key(self):
        review_id = uuid4()
        assert report_cache_key(review_id) == f"report:{review_id}"

    def test_invalidate_report(self):
        with patch('carux.services.cache.get_cache') as mock_get_cache:
            mock_cache = MagicMock()
            mock_get_cache.return_value = mock_cache

            review_id = uuid4()
            invalidate_report(review_id)
            mock_cache.delete.assert_called_once_with(f"report:{review_id}")

    def test_invalidate_all_reports(self):
        with patch('carux.services.cache.get_cache') as mock_get_cache:
            mock_cache = MagicMock()
            mock_get_cache.return_value = mock_cache

            invalidate_all_reports()
            mock_cache.delete_pattern.assert_called_once_with("report:*")

    def test_review_update_invalidates_report(self, lifecycle, review):
        with patch('carux.services.review_lifecycle.invalidate_report') as invalidate:
            lifecycle.set_published(review.id, True)
            invalidate.assert_called_once_with(review.id)


class TestGracefulDegradation:
    """Tests for graceful degradation when Redis is unavailable."""

    def test_invalidation_without_redis(self):
        with patch('carux.services.cache.get_cache', return_value=None):
            invalidate_report(uuid4())
            invalidate_all_reports()

    def test_cache_operations_fail_silently(self):
        """Redis errors during invalidation are logged, not raised."""
        with patch('carux.services.cache.get_cache') as mock_get_cache:
            mock_cache = MagicMock()
            mock_cache.delete.side_effect = redis.RedisError("Redis error")
            mock_cache.delete_pattern.side_effect = redis.RedisError("Redis error")
            mock_get_cache.return_value = mock_cache

            invalidate_report(uuid4())
            invalidate_all_reports()

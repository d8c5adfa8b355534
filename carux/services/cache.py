"""
Cache Service Singleton - Car UX Review Platform
carux/services/cache.py

Provides a singleton Redis cache instance for generated reports.
Gracefully handles Redis unavailability.
"""
import redis
import structlog
from typing import Optional
from uuid import UUID
from carux.services.redis_cache import RedisCache
from carux.config import settings

logger = structlog.get_logger(__name__)

REPORT_KEY_PREFIX = "report:"

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if caching is enabled and Redis is reachable,
        None otherwise.

    Note:
        Returning None lets callers keep working without the cache
        (graceful degradation).
    """
    global _cache
    if not settings.CACHE_ENABLED:
        return None
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError):
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None


def report_cache_key(review_id: UUID) -> str:
    return f"{REPORT_KEY_PREFIX}{review_id}"


def invalidate_report(review_id: UUID) -> None:
    """Drop the cached report of one review. Cache errors are logged, not raised."""
    cache = get_cache()
    if cache:
        try:
            cache.delete(report_cache_key(review_id))
        except redis.RedisError as e:
            logger.warning("report_cache_invalidate_failed", review_id=str(review_id), error=str(e))


def invalidate_all_reports() -> None:
    cache = get_cache()
    if cache:
        try:
            removed = cache.delete_pattern(f"{REPORT_KEY_PREFIX}*")
        except redis.RedisError as e:
            logger.warning("report_cache_flush_failed", error=str(e))
            return
        logger.info("report_cache_flushed", removed=removed)

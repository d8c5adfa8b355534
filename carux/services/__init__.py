"""
Services module for the Car UX Review Platform.
"""

from carux.services.cache import get_cache, invalidate_all_reports, invalidate_report, reset_cache
from carux.services.redis_cache import RedisCache

__all__ = [
    "RedisCache",
    "get_cache",
    "invalidate_all_reports",
    "invalidate_report",
    "reset_cache",
]

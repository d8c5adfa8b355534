"""
Redis Report Cache - Car UX Review Platform
carux/services/redis_cache.py

Stores generated reports as pydantic JSON under string keys with a TTL.
"""
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Type, TypeVar

import redis
import structlog
from pydantic import BaseModel, ValidationError

from carux.config import settings

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def _batches(keys: Iterable[str], size: int) -> Iterator[List[str]]:
    iterator = iter(keys)
    while True:
        batch = list(islice(iterator, size))
        if not batch:
            return
        yield batch


class RedisCache:
    """Thin typed wrapper over a redis client."""

    def __init__(self, url: Optional[str] = None, connect_timeout: Optional[float] = None):
        self.client = redis.Redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=connect_timeout or settings.REDIS_CONNECT_TIMEOUT,
        )

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """
        Return the cached value parsed as `model`, or None on a miss.

        An entry that no longer parses (written by an older report schema)
        is deleted and treated as a miss.
        """
        data = self.client.get(key)
        if not data:
            return None
        try:
            return model.model_validate_json(data)
        except ValidationError:
            logger.warning("cache_entry_discarded", key=key, model=model.__name__)
            self.client.delete(key)
            return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        self.client.setex(key, ttl_seconds, value.model_dump_json())

    def delete(self, key: str) -> int:
        return self.client.delete(key)

    def delete_pattern(self, pattern: str) -> int:
        """UNLINK every key matching `pattern`, in batches; returns how many were removed."""
        removed = 0
        batch_size = settings.CACHE_DELETE_BATCH
        for batch in _batches(self.client.scan_iter(match=pattern, count=batch_size), batch_size):
            removed += self.client.unlink(*batch)
        return removed

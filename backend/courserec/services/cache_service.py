# services/cache_service.py
"""
Cache service implementation using Redis
"""
import json
import pickle
from datetime import timedelta
from typing import Any, Awaitable, Callable, Optional
import logging

from .interfaces.cache_service import CacheServiceInterface
from ..core.config import AppSettings

logger = logging.getLogger(__name__)


def _serialize(value: Any) -> bytes:
    try:
        return json.dumps(value).encode()
    except (TypeError, ValueError):
        return pickle.dumps(value)


def _deserialize(value: bytes) -> Any:
    # Try to deserialize as JSON first, then pickle
    try:
        return json.loads(value)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return pickle.loads(value)


class RedisCacheService(CacheServiceInterface):
    """Redis-based cache implementation"""

    def __init__(self, redis_client, settings: AppSettings):
        self.redis = redis_client
        self.settings = settings
        self.default_expire = timedelta(
            seconds=settings.recommendation_cache_ttl_seconds
        )

    def _expire_seconds(self, expire: Optional[timedelta]) -> Optional[int]:
        if expire:
            return int(expire.total_seconds())
        if self.default_expire:
            return int(self.default_expire.total_seconds())
        return None

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        if not self.redis:
            return None

        try:
            value = await self.redis.get(key)
            if value is None:
                return None
            return _deserialize(value)

        except Exception as e:
            logger.warning(f"Cache get error for key {key}: {e}")
            return None

    async def set(
        self, key: str, value: Any, expire: Optional[timedelta] = None
    ) -> bool:
        """Set value in cache with optional expiration"""
        if not self.redis:
            return False

        try:
            await self.redis.set(
                key, _serialize(value), ex=self._expire_seconds(expire)
            )
            return True

        except Exception as e:
            logger.warning(f"Cache set error for key {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete value from cache"""
        if not self.redis:
            return False

        try:
            result = await self.redis.delete(key)
            return result > 0
        except Exception as e:
            logger.warning(f"Cache delete error for key {key}: {e}")
            return False

    async def get_or_compute(
        self,
        key: str,
        ttl: timedelta,
        compute_fn: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Read-through cache; a broken backend degrades to computing directly"""
        if not self.redis:
            return await compute_fn()

        try:
            cached = await self.redis.get(key)
        except Exception as e:
            logger.warning(f"Cache get error for key {key}: {e}")
            return await compute_fn()

        if cached is not None:
            try:
                value = _deserialize(cached)
                logger.debug(f"Cache hit for key {key}")
                return value
            except Exception as e:
                logger.warning(f"Cache entry for key {key} is unreadable, recomputing: {e}")
                await self.delete(key)

        value = await compute_fn()
        await self.set(key, value, expire=ttl)
        return value

    async def ping(self) -> bool:
        if not self.redis:
            return False
        return bool(await self.redis.ping())

# services/memory_cache_service.py
"""
In-memory cache service for testing/development
"""
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Optional
import threading
import logging

from .interfaces.cache_service import CacheServiceInterface
from ..core.config import AppSettings

logger = logging.getLogger(__name__)


class MemoryCacheService(CacheServiceInterface):
    """In-memory cache implementation for development/testing"""

    def __init__(self, settings: AppSettings):
        self.cache = {}
        self.expiry = {}
        self.lock = threading.RLock()
        self.default_expire = timedelta(
            seconds=settings.recommendation_cache_ttl_seconds
        )

    def _cleanup_expired(self):
        """Remove expired keys"""
        now = datetime.utcnow()
        expired_keys = [
            key for key, expiry_time in self.expiry.items() if expiry_time < now
        ]

        for key in expired_keys:
            self.cache.pop(key, None)
            self.expiry.pop(key, None)

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        with self.lock:
            self._cleanup_expired()
            return self.cache.get(key)

    async def set(
        self, key: str, value: Any, expire: Optional[timedelta] = None
    ) -> bool:
        """Set value in cache with optional expiration"""
        with self.lock:
            self.cache[key] = value

            expire_time = expire or self.default_expire
            if expire_time:
                self.expiry[key] = datetime.utcnow() + expire_time

            return True

    async def delete(self, key: str) -> bool:
        """Delete value from cache"""
        with self.lock:
            deleted = key in self.cache
            self.cache.pop(key, None)
            self.expiry.pop(key, None)
            return deleted

    async def get_or_compute(
        self,
        key: str,
        ttl: timedelta,
        compute_fn: Callable[[], Awaitable[Any]],
    ) -> Any:
        with self.lock:
            self._cleanup_expired()
            if key in self.cache:
                logger.debug(f"Cache hit for key {key}")
                return self.cache[key]

        # Computed outside the lock; concurrent misses may both compute
        value = await compute_fn()
        await self.set(key, value, expire=ttl)
        return value

    async def ping(self) -> bool:
        return True

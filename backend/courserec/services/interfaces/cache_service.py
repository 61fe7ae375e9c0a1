# services/interfaces/cache_service.py
"""
Cache service interface
"""
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional
from datetime import timedelta


class CacheServiceInterface(ABC):
    """Abstract interface for caching operations"""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        pass

    @abstractmethod
    async def set(
        self, key: str, value: Any, expire: Optional[timedelta] = None
    ) -> bool:
        """Set value in cache with optional expiration"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete value from cache"""
        pass

    @abstractmethod
    async def get_or_compute(
        self,
        key: str,
        ttl: timedelta,
        compute_fn: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the cached value for key, computing and storing it on a miss"""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the cache backend is reachable"""
        pass

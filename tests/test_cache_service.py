from datetime import timedelta

import pytest

from courserec.services.cache_service import RedisCacheService
from courserec.services.memory_cache_service import MemoryCacheService


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the cache service."""

    def __init__(self, fail_get=False, fail_set=False):
        self.store = {}
        self.expiries = {}
        self.fail_get = fail_get
        self.fail_set = fail_set

    async def get(self, key):
        if self.fail_get:
            raise ConnectionError("redis down")
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        if self.fail_set:
            raise ConnectionError("redis down")
        self.store[key] = value
        self.expiries[key] = ex
        return True

    async def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0

    async def ping(self):
        return True


def counting_compute(value):
    calls = []

    async def compute():
        calls.append(1)
        return value

    return compute, calls


@pytest.mark.asyncio
async def test_memory_get_or_compute_caches(settings):
    cache = MemoryCacheService(settings)
    compute, calls = counting_compute({"results": [1, 2]})

    first = await cache.get_or_compute("k", timedelta(minutes=5), compute)
    second = await cache.get_or_compute("k", timedelta(minutes=5), compute)

    assert first == second == {"results": [1, 2]}
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_memory_entries_expire(settings):
    cache = MemoryCacheService(settings)
    await cache.set("k", "v", expire=timedelta(seconds=-1))

    assert await cache.get("k") is None


@pytest.mark.asyncio
async def test_memory_delete(settings):
    cache = MemoryCacheService(settings)
    await cache.set("k", "v")

    assert await cache.delete("k") is True
    assert await cache.delete("k") is False
    assert await cache.ping() is True


@pytest.mark.asyncio
async def test_redis_get_or_compute_round_trips_json(settings):
    redis = FakeRedis()
    cache = RedisCacheService(redis, settings)
    compute, calls = counting_compute({"cold_start": False, "results": []})

    await cache.get_or_compute("k", timedelta(hours=24), compute)
    cached = await cache.get_or_compute("k", timedelta(hours=24), compute)

    assert cached == {"cold_start": False, "results": []}
    assert len(calls) == 1
    assert redis.expiries["k"] == 86400


@pytest.mark.asyncio
async def test_redis_read_failure_computes_directly(settings):
    cache = RedisCacheService(FakeRedis(fail_get=True), settings)
    compute, calls = counting_compute([1])

    assert await cache.get_or_compute("k", timedelta(seconds=10), compute) == [1]
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_redis_corrupt_entry_is_replaced(settings):
    redis = FakeRedis()
    redis.store["k"] = b"\x80\x04garbage-not-json-not-pickle"
    cache = RedisCacheService(redis, settings)
    compute, calls = counting_compute({"ok": True})

    assert await cache.get_or_compute("k", timedelta(seconds=10), compute) == {"ok": True}
    assert len(calls) == 1
    # the fresh value overwrote the unreadable one
    assert await cache.get_or_compute("k", timedelta(seconds=10), compute) == {"ok": True}
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_redis_write_failure_still_returns_value(settings):
    cache = RedisCacheService(FakeRedis(fail_set=True), settings)
    compute, _ = counting_compute([1])

    assert await cache.get_or_compute("k", timedelta(seconds=10), compute) == [1]
    assert await cache.set("k", [1]) is False


@pytest.mark.asyncio
async def test_compute_errors_propagate(settings):
    async def failing():
        raise RuntimeError("compute failed")

    with pytest.raises(RuntimeError):
        await RedisCacheService(FakeRedis(), settings).get_or_compute(
            "k", timedelta(seconds=10), failing
        )
    with pytest.raises(RuntimeError):
        await MemoryCacheService(settings).get_or_compute(
            "k", timedelta(seconds=10), failing
        )


@pytest.mark.asyncio
async def test_redis_without_client_computes(settings):
    cache = RedisCacheService(None, settings)
    compute, calls = counting_compute("v")

    assert await cache.get_or_compute("k", timedelta(seconds=10), compute) == "v"
    assert await cache.get("k") is None
    assert await cache.ping() is False

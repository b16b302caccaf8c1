import time

import pytest
from prometheus_client import REGISTRY
from redis.exceptions import ConnectionError as RedisConnectionError

from ludoteca.core.cache import (
    MemoryCacheProvider,
    RedisCacheProvider,
    TagAwareCache,
    create_cache,
)
from ludoteca.core.exceptions import CacheError


class StubRedis:
    """Subconjunto do cliente redis.asyncio usado pelo provedor."""

    def __init__(self):
        self.values = {}
        self.sets = {}
        self.expirations = {}
        self.closed = False

    async def ping(self):
        return True

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, ex=None):
        self.values[key] = value
        self.expirations[key] = ex
        return True

    async def sadd(self, key, *members):
        self.sets.setdefault(key, set()).update(members)
        return len(members)

    async def smembers(self, key):
        return set(self.sets.get(key, set()))

    async def ttl(self, key):
        if key not in self.values and key not in self.sets:
            return -2
        seconds = self.expirations.get(key)
        return -1 if seconds is None else seconds

    async def expire(self, key, seconds):
        self.expirations[key] = seconds
        return True

    async def persist(self, key):
        return self.expirations.pop(key, None) is not None

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            self.expirations.pop(key, None)
            if self.values.pop(key, None) is not None or self.sets.pop(key, None) is not None:
                removed += 1
        return removed

    async def scan_iter(self, match=None):
        prefix = (match or "").rstrip("*")
        for key in list(self.values) + list(self.sets):
            if key.startswith(prefix):
                yield key

    async def aclose(self):
        self.closed = True


class BrokenRedis(StubRedis):
    async def get(self, key):
        raise RedisConnectionError("conexão recusada")


def _sample(name, backend="memory"):
    return REGISTRY.get_sample_value(name, {"backend": backend}) or 0


async def test_get_missing_key_returns_default():
    cache = TagAwareCache(MemoryCacheProvider())
    assert await cache.get("categories_1_10") is None
    assert await cache.get("categories_1_10", "vazio") == "vazio"


async def test_set_and_get_roundtrip():
    cache = TagAwareCache(MemoryCacheProvider())
    await cache.set("categories_1_10", [{"id": 1, "name": "Action"}], tags=["categoriesCache"])
    assert await cache.get("categories_1_10") == [{"id": 1, "name": "Action"}]


async def test_cached_value_is_isolated_from_caller():
    cache = TagAwareCache(MemoryCacheProvider())
    value = [{"id": 1, "name": "Action"}]
    await cache.set("categories_1_10", value)
    value[0]["name"] = "Alterado"

    cached = await cache.get("categories_1_10")
    cached.append({"id": 2})

    assert await cache.get("categories_1_10") == [{"id": 1, "name": "Action"}]


async def test_invalidate_by_tag_discards_every_key_of_the_tag():
    provider = MemoryCacheProvider()
    cache = TagAwareCache(provider)
    await cache.set("categories_1_10", [1], tags=["categoriesCache"])
    await cache.set("categories_2_5", [2], tags=["categoriesCache"])
    await cache.set("editors_1_10", [3], tags=["editorsCache"])

    removed = await cache.invalidate_by_tag("categoriesCache")

    assert removed == 2
    assert await cache.get("categories_1_10") is None
    assert await cache.get("categories_2_5") is None
    assert await cache.get("editors_1_10") == [3]
    assert len(provider) == 1


async def test_invalidate_unknown_tag_is_noop():
    cache = TagAwareCache(MemoryCacheProvider())
    assert await cache.invalidate_by_tag("videoGamesCache") == 0


async def test_expired_entry_is_a_miss_and_is_purged():
    provider = MemoryCacheProvider()
    cache = TagAwareCache(provider)
    await cache.set("editors_1_10", ["x"], ttl=60, tags=["editorsCache"])
    provider._entries["editors_1_10"].expires_at = time.time() - 1

    assert await cache.get("editors_1_10") is None
    assert len(provider) == 0


async def test_get_or_set_calls_factory_only_on_miss():
    cache = TagAwareCache(MemoryCacheProvider())
    calls = []

    async def factory():
        calls.append(1)
        return [{"id": 1}]

    first = await cache.get_or_set("video_games_1_10", factory, tags=["videoGamesCache"])
    second = await cache.get_or_set("video_games_1_10", factory, tags=["videoGamesCache"])

    assert first == second == [{"id": 1}]
    assert len(calls) == 1

    await cache.invalidate_by_tag("videoGamesCache")
    await cache.get_or_set("video_games_1_10", factory, tags=["videoGamesCache"])
    assert len(calls) == 2


async def test_get_or_set_caches_empty_lists():
    cache = TagAwareCache(MemoryCacheProvider())
    calls = []

    async def factory():
        calls.append(1)
        return []

    assert await cache.get_or_set("categories_1_10", factory) == []
    assert await cache.get_or_set("categories_1_10", factory) == []
    assert len(calls) == 1


async def test_hit_and_miss_counters():
    cache = TagAwareCache(MemoryCacheProvider())
    hits = _sample("ludoteca_cache_hits_total")
    misses = _sample("ludoteca_cache_misses_total")

    await cache.get("nada")
    await cache.set("algo", 1)
    await cache.get("algo")

    assert _sample("ludoteca_cache_hits_total") == hits + 1
    assert _sample("ludoteca_cache_misses_total") == misses + 1


async def test_clear_removes_everything():
    provider = MemoryCacheProvider()
    cache = TagAwareCache(provider)
    await cache.set("a", 1, tags=["t"])
    await cache.set("b", 2)
    await cache.clear()
    assert len(provider) == 0
    assert await cache.invalidate_by_tag("t") == 0


async def test_redis_provider_stores_json_with_ttl_and_tag_set():
    client = StubRedis()
    cache = TagAwareCache(RedisCacheProvider(prefix="test:", client=client), default_ttl=3600)

    await cache.set("categories_1_10", [{"id": 1, "name": "Action"}], tags=["categoriesCache"])

    assert "test:categories_1_10" in client.values
    assert 3590 <= client.expirations["test:categories_1_10"] <= 3600
    assert client.sets["test:tag:categoriesCache"] == {"categories_1_10"}
    assert await cache.get("categories_1_10") == [{"id": 1, "name": "Action"}]


async def test_redis_provider_invalidates_tag():
    client = StubRedis()
    cache = TagAwareCache(RedisCacheProvider(prefix="test:", client=client))
    await cache.set("editors_1_10", [1], tags=["editorsCache"])
    await cache.set("editors_2_10", [2], tags=["editorsCache"])
    await cache.set("categories_1_10", [3], tags=["categoriesCache"])

    assert await cache.invalidate_by_tag("editorsCache") == 2
    assert await cache.get("editors_1_10") is None
    assert await cache.get("categories_1_10") == [3]
    assert "test:tag:editorsCache" not in client.sets


async def test_redis_provider_clear_and_close():
    client = StubRedis()
    provider = RedisCacheProvider(prefix="test:", client=client)
    cache = TagAwareCache(provider)
    await cache.connect()
    await cache.set("a", 1, tags=["t"])

    await cache.clear()
    assert client.values == {}
    assert client.sets == {}

    await cache.close()
    assert client.closed


async def test_redis_errors_become_cache_errors():
    cache = TagAwareCache(RedisCacheProvider(client=BrokenRedis()))
    with pytest.raises(CacheError) as exc:
        await cache.get("categories_1_10")
    assert exc.value.details["operation"] == "get"


def test_create_cache_selects_backend():
    assert isinstance(create_cache("memory").provider, MemoryCacheProvider)

    cache = create_cache("redis", redis_url="redis://localhost:6379/0", prefix="x:", default_ttl=10)
    assert isinstance(cache.provider, RedisCacheProvider)
    assert cache.provider.prefix == "x:"
    assert cache.default_ttl == 10


async def test_delete_single_key_keeps_the_rest_of_the_tag():
    provider = MemoryCacheProvider()
    cache = TagAwareCache(provider)
    await cache.set("categories_1_10", [1], tags=["categoriesCache"])
    await cache.set("categories_2_10", [2], tags=["categoriesCache"])

    assert await cache.delete("categories_1_10")
    assert not await cache.delete("categories_1_10")
    assert await cache.invalidate_by_tag("categoriesCache") == 1


async def test_memory_provider_evicts_oldest_when_full():
    provider = MemoryCacheProvider(max_entries=3)
    cache = TagAwareCache(provider)
    for page in range(1, 6):
        await cache.set(f"categories_{page}_1", [], tags=["categoriesCache"])

    assert len(provider) == 3
    assert await cache.get("categories_1_1") is None
    assert await cache.get("categories_2_1") is None
    assert await cache.get("categories_5_1") == []
    assert await cache.invalidate_by_tag("categoriesCache") == 3


async def test_memory_provider_drops_expired_before_evicting():
    provider = MemoryCacheProvider(max_entries=2)
    cache = TagAwareCache(provider)
    await cache.set("editors_1_10", [1])
    await cache.set("editors_2_10", [2])
    provider._entries["editors_2_10"].expires_at = time.time() - 1

    await cache.set("editors_3_10", [3])

    assert await cache.get("editors_1_10") == [1]
    assert await cache.get("editors_3_10") == [3]
    assert len(provider) == 2


async def test_memory_provider_rewrite_does_not_evict():
    provider = MemoryCacheProvider(max_entries=2)
    cache = TagAwareCache(provider)
    await cache.set("a", 1)
    await cache.set("b", 2)
    await cache.set("a", 10)

    assert await cache.get("a") == 10
    assert await cache.get("b") == 2


async def test_redis_tag_set_expires_with_its_members():
    client = StubRedis()
    cache = TagAwareCache(RedisCacheProvider(prefix="test:", client=client), default_ttl=60)

    await cache.set("categories_1_10", [], tags=["categoriesCache"])
    assert 50 <= client.expirations["test:tag:categoriesCache"] <= 60

    await cache.set("categories_2_10", [], ttl=600, tags=["categoriesCache"])
    assert client.expirations["test:tag:categoriesCache"] >= 590

    await cache.set("categories_3_10", [], ttl=5, tags=["categoriesCache"])
    assert client.expirations["test:tag:categoriesCache"] >= 590


async def test_redis_tag_set_of_entry_without_ttl_persists():
    client = StubRedis()
    cache = TagAwareCache(RedisCacheProvider(prefix="test:", client=client), default_ttl=0)

    await cache.set("editors_1_10", [], tags=["editorsCache"])
    await cache.set("editors_2_10", [], ttl=60, tags=["editorsCache"])

    assert "test:tag:editorsCache" not in client.expirations


def test_create_cache_passes_memory_bound():
    assert create_cache("memory", max_entries=7).provider.max_entries == 7

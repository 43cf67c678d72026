"""Tests for the cache-aside helpers shared by the entity services."""
from unittest.mock import AsyncMock

import pytest
from pydantic import TypeAdapter
from redis.exceptions import ConnectionError as RedisConnectionError
from uuid6 import uuid7

from core.cache import CacheError
from core.redis import RedisCache
from db.store import Store
from services.base_entity_service import CachedEntityService, collection_key
from services.exceptions import CacheCorruptedError


class WidgetService(CachedEntityService):
    """Minimal subclass for exercising the base class."""

    cache_prefix = "widgets"


@pytest.fixture
def widgets(store: Store, cache: RedisCache) -> WidgetService:
    """Widget service over the test store and cache."""
    return WidgetService(store, cache, cache_ttl=60)


class TestCacheKeys:
    """Tests for key layout."""

    def test__key__uses_prefix_and_id(self, widgets: WidgetService) -> None:
        """Entity keys are <prefix>:<id>."""
        entity_id = uuid7()
        assert widgets._key(entity_id) == f"widgets:{entity_id}"

    def test__all_key__global_and_owner_scoped(self, widgets: WidgetService) -> None:
        """Collection keys are <prefix>:all, or <prefix>:all:<owner> when scoped."""
        owner = uuid7()
        assert widgets._all_key() == "widgets:all"
        assert widgets._all_key(owner) == f"widgets:all:{owner}"

    def test__collection_key__matches_service_layout(self, widgets: WidgetService) -> None:
        """Other services build a prefix's collection keys the same way its own service does."""
        owner = uuid7()
        assert collection_key("widgets") == widgets._all_key()
        assert collection_key("widgets", owner) == widgets._all_key(owner)


class TestReadThrough:
    """Tests for the cache-aside read."""

    async def test__read_through__miss_loads_and_stores(
        self, widgets: WidgetService, cache: RedisCache,
    ) -> None:
        """On a miss the loader runs once and its result is cached."""
        loader = AsyncMock(return_value=[1, 2, 3])

        value = await widgets._read_through("widgets:all", TypeAdapter(list[int]), loader)

        assert value == [1, 2, 3]
        loader.assert_awaited_once()
        assert await cache.get("widgets:all") == "[1,2,3]"

    async def test__read_through__hit_skips_loader(
        self, widgets: WidgetService, cache: RedisCache,
    ) -> None:
        """On a hit the loader is never called."""
        await cache.set("widgets:all", "[4,5]", 60)
        loader = AsyncMock()

        value = await widgets._read_through("widgets:all", TypeAdapter(list[int]), loader)

        assert value == [4, 5]
        loader.assert_not_awaited()

    async def test__read_through__wrong_shape_is_corruption(
        self, widgets: WidgetService, cache: RedisCache,
    ) -> None:
        """Valid JSON of the wrong shape is reported as corruption."""
        await cache.set("widgets:all", '{"not": "a list"}', 60)

        with pytest.raises(CacheCorruptedError):
            await widgets._read_through("widgets:all", TypeAdapter(list[int]), AsyncMock())

    async def test__read_through__loader_error_propagates(
        self, widgets: WidgetService, cache: RedisCache,
    ) -> None:
        """Store errors are not swallowed and nothing is cached."""
        loader = AsyncMock(side_effect=RuntimeError("db down"))

        with pytest.raises(RuntimeError, match="db down"):
            await widgets._read_through("widgets:all", TypeAdapter(list[int]), loader)
        assert await cache.get("widgets:all") == ""


class TestInvalidate:
    """Tests for post-write invalidation."""

    async def test__invalidate__deletes_every_key(
        self, widgets: WidgetService, cache: RedisCache,
    ) -> None:
        """All given keys are removed."""
        await cache.set("widgets:1", "a", 60)
        await cache.set("widgets:all", "b", 60)

        await widgets._invalidate("widgets:1", "widgets:all")

        assert await cache.get("widgets:1") == ""
        assert await cache.get("widgets:all") == ""

    async def test__invalidate__stops_at_first_failure(self, store: Store) -> None:
        """Deletes run in order and stop at the first failure."""
        client = AsyncMock()
        client.delete.side_effect = [1, RedisConnectionError("down"), 1]
        service = WidgetService(store, RedisCache(client))

        with pytest.raises(CacheError):
            await service._invalidate("a", "b", "c")

        assert [c.args[0] for c in client.delete.await_args_list] == ["a", "b"]

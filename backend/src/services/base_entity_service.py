"""
Base service class for cached entity operations.

Provides the cache-aside read and write-invalidate steps shared by the Role, Todo
and User services. Entity-specific behavior lives in the subclasses; the base only
knows about cache keys, serialization and TTLs.
"""
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from core.cache import Cache
from db.store import Store
from services.exceptions import CacheCorruptedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def collection_key(prefix: str, owner_id: object | None = None) -> str:
    """Key of a cached collection, optionally scoped to one owner."""
    if owner_id is None:
        return f"{prefix}:all"
    return f"{prefix}:all:{owner_id}"


class CachedEntityService:
    """
    Base class for services that read through and invalidate a side cache.

    Subclasses must define:
    - cache_prefix: Plural entity name used as the key namespace (e.g., "roles").

    Key layout:
    - "<prefix>:<id>" for a single entity
    - "<prefix>:all" for the full collection
    - "<prefix>:all:<owner_id>" for an owner-scoped collection
    """

    CACHE_TTL = 300  # 5 minutes

    cache_prefix: str

    def __init__(self, store: Store, cache: Cache, cache_ttl: int = CACHE_TTL) -> None:
        self._store = store
        self._cache = cache
        self._cache_ttl = cache_ttl

    # --- Cache keys ---

    def _key(self, entity_id: object) -> str:
        return f"{self.cache_prefix}:{entity_id}"

    def _all_key(self, owner_id: object | None = None) -> str:
        return collection_key(self.cache_prefix, owner_id)

    # --- Cache-aside ---

    async def _read_through(
        self,
        key: str,
        adapter: TypeAdapter[T],
        loader: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Return the cached value for key, loading and caching it on a miss.

        Args:
            key: Cache key for the value.
            adapter: Serializes and validates the value's shape.
            loader: Reads the value from the store; its errors propagate unchanged.

        Raises:
            CacheCorruptedError: If a cached payload does not match the expected shape.
            CacheError: If the loaded value cannot be written to the cache. The read
                fails even though the store lookup succeeded.
        """
        cached = await self._cache.get(key)
        if cached:
            logger.debug("cache_hit key=%s", key)
            try:
                return adapter.validate_json(cached)
            except ValidationError as e:
                raise CacheCorruptedError(key) from e

        logger.debug("cache_miss key=%s", key)
        value = await loader()
        await self._cache.set(key, adapter.dump_json(value).decode("utf-8"), self._cache_ttl)
        logger.debug("cache_set key=%s ttl=%s", key, self._cache_ttl)
        return value

    async def _invalidate(self, *keys: str) -> None:
        """
        Delete keys one by one after a committed write.

        The first failing delete aborts with CacheError; the write itself stays
        committed and the remaining keys stay stale until their TTL expires.
        """
        for key in keys:
            await self._cache.delete(key)
            logger.debug("cache_invalidate key=%s", key)

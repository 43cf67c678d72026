"""Redis-backed implementation of the cache contract, with connection pooling."""
import logging

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from core.cache import CacheError

logger = logging.getLogger(__name__)


class RedisCache:
    """
    Async Redis cache.

    Reads fail soft (a backend error is reported as a miss) while writes and deletes
    fail loudly with CacheError, so callers know when an invalidation did not happen.
    """

    def __init__(self, client: Redis, pool: ConnectionPool | None = None) -> None:
        self._client = client
        self._pool = pool

    @classmethod
    def from_url(cls, url: str, pool_size: int = 20) -> "RedisCache":
        """Build a cache with its own connection pool."""
        pool = ConnectionPool.from_url(
            url,
            max_connections=pool_size,
            decode_responses=True,
        )
        return cls(Redis(connection_pool=pool), pool)

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Redis PING failed: %s", e)
            return False

    async def close(self) -> None:
        """Close the client and its connection pool."""
        await self._client.aclose()
        if self._pool is not None:
            await self._pool.disconnect()
        logger.info("Redis connection closed")

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Set value with expiry in seconds, overwriting any existing value."""
        try:
            await self._client.set(key, value, ex=ttl)
        except RedisError as e:
            logger.warning("Redis SET failed key=%s: %s", key, e)
            raise CacheError("set", key, str(e)) from e

    async def get(self, key: str) -> str:
        """Get value, returns an empty string on miss or when Redis is unavailable."""
        try:
            value = await self._client.get(key)
        except RedisError as e:
            logger.warning("Redis GET failed key=%s: %s", key, e)
            return ""
        if value is None:
            return ""
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def delete(self, key: str) -> None:
        """Delete a key; absent keys are ignored by Redis."""
        try:
            await self._client.delete(key)
        except RedisError as e:
            logger.warning("Redis DELETE failed key=%s: %s", key, e)
            raise CacheError("delete", key, str(e)) from e

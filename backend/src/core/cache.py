"""Key-value cache contract used by the entity services."""
from typing import Protocol


class CacheError(Exception):
    """Raised when the cache backend fails to store or delete a key."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        self.operation = operation
        self.key = key
        super().__init__(f"Cache {operation} failed for '{key}': {reason}")


class Cache(Protocol):
    """
    Side-cache with per-key TTL. Never authoritative: the database is the source of truth.

    - set() overwrites any existing value and raises CacheError on backend failure.
    - get() returns "" on a miss AND on backend failure; callers cannot tell them apart.
    - delete() is idempotent; deleting an absent key is not an error.
    """

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store a string value that expires after ttl seconds."""
        ...

    async def get(self, key: str) -> str:
        """Return the stored value, or an empty string on miss or error."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a key."""
        ...

    async def ping(self) -> bool:
        """Return True when the backend is reachable. Never raises."""
        ...

"""Response caching on top of the persistent store.

Cached API payloads live in the store's ``cache`` table under a
namespaced key. The cache is strictly best-effort: if the store can't be
used, reads behave as misses and writes are dropped, so requests still
go to the network.

Features:
    - TTL-based expiration, checked lazily on read
    - Bulk sweep of expired entries through the expiry index
    - One key per logical request (path plus sorted query)

"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from github_browser.exceptions import StorageError
from github_browser.models import CacheEntry

if TYPE_CHECKING:
    from github_browser.storage import Store

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "github:"


def make_cache_key(endpoint: str, params: dict[str, Any] | None = None) -> str:
    """Generate a cache key for a GET request.

    Query parameters are sorted so the same logical request always maps
    to the same key. Parameters whose value is None are left out, the
    same way httpx leaves them out of the URL.

    Args:
        endpoint: API endpoint path (e.g., "/repos/octocat/hello").
        params: Query parameters.

    Returns:
        Cache key string, e.g. ``github:GET /repos/o/r/issues?page=1&state=open``.

    """
    key = f"{CACHE_NAMESPACE}GET {endpoint}"
    if params:
        query = urlencode(sorted((k, str(v)) for k, v in params.items() if v is not None))
        if query:
            key = f"{key}?{query}"
    return key


class ResponseCache:
    """Store-backed cache for API responses.

    Attributes:
        default_ttl: Default time-to-live in seconds.

    Example:
        >>> cache = ResponseCache(store, default_ttl=300)
        >>> await cache.set("key", data)
        >>> entry = await cache.get("key")
        >>> if entry:
        ...     return entry.data

    """

    __slots__ = ("_store", "default_ttl")

    def __init__(self, store: Store, default_ttl: int = 300) -> None:
        """Initialize the cache.

        Args:
            store: Store holding the cache table.
            default_ttl: Default time-to-live in seconds.

        """
        self._store = store
        self.default_ttl = default_ttl

    async def get(self, key: str) -> CacheEntry | None:
        """Get a cached entry if not expired.

        Args:
            key: The cache key.

        Returns:
            CacheEntry if found and live, None otherwise (including when
            the store is unavailable).

        """
        try:
            entry = await self._store.get_cache(key, now=time.time())
        except StorageError as e:
            logger.warning("Cache read skipped, storage unavailable: %s", e.message)
            return None

        if entry is not None:
            logger.debug("Cache hit: %s", key[:80])
        return entry

    async def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        """Store a response payload.

        Args:
            key: The cache key.
            data: JSON-compatible payload.
            ttl: Time-to-live in seconds (uses default if None).

        """
        actual_ttl = ttl if ttl is not None else self.default_ttl
        entry = CacheEntry(key=key, data=data, expires_at=time.time() + actual_ttl)

        try:
            await self._store.put_cache(entry)
        except StorageError as e:
            logger.warning("Cache write skipped, storage unavailable: %s", e.message)
            return

        logger.debug("Cache set: %s (TTL: %ds)", key[:80], actual_ttl)

    async def clear(self) -> int:
        """Remove all entries from the cache.

        Returns:
            Number of entries removed.

        Raises:
            StorageError: If the store is unavailable.

        """
        return await self._store.clear_all_cache()

    async def cleanup_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed.

        Raises:
            StorageError: If the store is unavailable.

        """
        return await self._store.sweep_expired(now=time.time())

    async def size(self) -> int:
        """Get the number of stored entries, live or expired."""
        return await self._store.count_cache()

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"ResponseCache(store={self._store!r}, default_ttl={self.default_ttl})"

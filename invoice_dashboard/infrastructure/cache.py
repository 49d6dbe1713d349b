"""
Route-level data cache and its invalidation.

Pages cache the data they render under the route path that shows it. After a
mutation, the action invalidates the route so the next read reloads instead
of serving the stale snapshot. Entries are stored on disk with the diskcache
library, which is thread-safe and process-safe, so several workers share one
view of what is stale.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, Protocol, Tuple, TypeVar, runtime_checkable

import diskcache

from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

_COUNTER_PREFIX = "invalidations:"

# Stored values may legitimately be None.
_MISS = object()


@runtime_checkable
class CacheInvalidator(Protocol):
    """Anything that can mark a route's cached data stale."""

    def invalidate(self, route_path: str) -> None:
        ...


def normalize_route(route_path: str) -> str:
    """Strip trailing slashes and ensure a leading one ("/" stays "/")."""
    path = "/" + route_path.strip().strip("/")
    return path


def is_under(route_path: str, prefix: str) -> bool:
    """True when `route_path` is `prefix` itself or a sub-route of it."""
    if prefix == "/":
        return True
    return route_path == prefix or route_path.startswith(prefix + "/")


class RouteCache(CacheInvalidator):
    """
    Disk-backed cache of per-route data.

    Keys are stored as ``(route_path, key)`` tuples. Invalidating a route
    evicts every entry at that route and below it.

    Attributes:
        cache_dir: Directory holding the cache files.
    """

    def __init__(self, cache_dir: str | Path, expire: Optional[int] = None) -> None:
        """
        Args:
            cache_dir: Directory path for storing cache files.
                       Created if it doesn't exist.
            expire: Default TTL in seconds for loaded entries. None means
                    entries live until invalidated.
        """
        self.cache_dir = Path(cache_dir)
        self.expire = expire
        self._cache = diskcache.Cache(str(self.cache_dir))

    def _key(self, route_path: str, key: str) -> Tuple[str, str]:
        return (normalize_route(route_path), key)

    def get_or_load(self, route_path: str, key: str, loader: Callable[[], T]) -> T:
        """
        Get the cached value for `key` under `route_path`, or load and store it.
        """
        cache_key = self._key(route_path, key)
        cached = self._cache.get(cache_key, default=_MISS)
        if cached is not _MISS:
            return cached
        value = loader()
        self._cache.set(cache_key, value, expire=self.expire)
        return value

    def contains(self, route_path: str, key: str) -> bool:
        return self._key(route_path, key) in self._cache

    def invalidate(self, route_path: str) -> None:
        """
        Mark all cached data under `route_path` stale.
        """
        prefix = normalize_route(route_path)
        evicted = 0
        for cache_key in list(self._cache.iterkeys()):
            if not isinstance(cache_key, tuple):
                continue
            if is_under(cache_key[0], prefix) and self._cache.delete(cache_key):
                evicted += 1
        self._cache.incr(_COUNTER_PREFIX + prefix, default=0)
        log.info("[CACHE INVALIDATED]", extra={"route": prefix, "evicted": evicted})

    def invalidation_count(self, route_path: str) -> int:
        """How many times `route_path` itself has been invalidated."""
        return int(self._cache.get(_COUNTER_PREFIX + normalize_route(route_path), default=0))

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> "RouteCache":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["CacheInvalidator", "RouteCache", "is_under", "normalize_route"]

"""Bounded TTL cache for upstream lookup responses.

Catalog lookups (book search today) hit rate-limited third-party APIs and the
same queries repeat constantly while a user builds a card.  Responses are
kept in a :class:`ResponseCache` keyed by the normalized query.

Policy
------
- Every entry has its own time-to-live (the cache default if none is given).
- The cache holds at most ``max_entries`` entries.  Inserting into a full
  cache first drops expired entries, then evicts the least recently used
  one.  Entries that were never read are evicted oldest first.
- All operations take a lock, so request handlers running on different
  threads can share one instance.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any, NamedTuple

from cachetools import TLRUCache

logger = logging.getLogger(__name__)


class CacheEntry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(_key: Any, entry: CacheEntry, now: float) -> float:
    return now + entry.ttl


class ResponseCache:
    """Thread-safe key/value cache with per-entry TTL and a size bound.

    Args:
        max_entries: Maximum number of live entries.
        default_ttl: TTL in seconds for entries stored without one.
        timer: Clock returning seconds.  Defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        max_entries: int = 500,
        default_ttl: float = 3600,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self._cache: TLRUCache = TLRUCache(maxsize=max_entries, ttu=_time_to_use, timer=timer)
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return the cached value for ``key``, or ``None`` if absent or expired."""
        with self._lock:
            entry = self._cache.get(key)
        if entry is None:
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValueError("ttl_seconds must be positive")
        with self._lock:
            self._cache[key] = CacheEntry(value, ttl)
        logger.debug(f"Cached '{key}' for {ttl}s")

    def delete(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)

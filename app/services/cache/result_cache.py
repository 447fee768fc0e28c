from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from .cache_policy import CachePolicy


class InMemoryResultCache:
    """Thread-safe LRU cache whose entries expire after a TTL.

    Concurrent misses on the same key may compute the value twice; the last
    ``put`` wins.
    """

    def __init__(self, policy: CachePolicy, max_size: int = 1000) -> None:
        if max_size <= 0:
            raise ValueError("Cache max_size must be positive")
        self._policy = policy
        self._max_size = max_size
        self._entries: "OrderedDict[str, Tuple[Any, float]]" = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            value, expires_at = entry
            if not self._policy.is_fresh(expires_at):
                del self._entries[key]
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return value

    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self._max_size:
                self._entries.popitem(last=False)
            self._entries[key] = (value, self._policy.expires_at(ttl))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self._max_size,
                "ttl_seconds": self._policy.default_ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
            }


class NullResultCache:
    """No-op cache used when caching is disabled."""

    def get(self, key: str) -> Any:
        return None

    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        return

    def stats(self) -> Dict[str, Any]:
        return {"size": 0, "max_size": 0, "ttl_seconds": 0, "hits": 0, "misses": 0}

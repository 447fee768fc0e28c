from __future__ import annotations

import time
from typing import Callable, Optional


class CachePolicy:
    """Encapsulate caching heuristics such as freshness checks."""

    def __init__(self, default_ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._default_ttl = default_ttl_seconds
        self._clock = clock

    @property
    def default_ttl_seconds(self) -> float:
        return self._default_ttl

    def expires_at(self, ttl_seconds: Optional[float] = None) -> float:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        return self._clock() + ttl

    def is_fresh(self, expires_at: float) -> bool:
        return self._clock() < expires_at

"""Result cache component package."""
from .cache_policy import CachePolicy
from .keys import build_cache_key
from .result_cache import InMemoryResultCache, NullResultCache

__all__ = [
    "CachePolicy",
    "InMemoryResultCache",
    "NullResultCache",
    "build_cache_key",
]

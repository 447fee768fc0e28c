from __future__ import annotations

import json
from typing import Any


def _canonical(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(_canonical(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _canonical(item) for key, item in sorted(value.items())}
    if isinstance(value, str):
        return value.strip()
    return value


def build_cache_key(namespace: str, **params: Any) -> str:
    """Stable key: parameters sorted by name, sets sorted, strings trimmed."""
    payload = json.dumps(_canonical(params), sort_keys=True, default=str, separators=(",", ":"))
    return f"{namespace}:{payload}"

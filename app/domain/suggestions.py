"""Query suggestions built from the query's own words and a small synonym table."""
from __future__ import annotations

from typing import Dict, List, Tuple

SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "person": ("people", "individual", "user"),
    "organization": ("company", "business", "corp"),
    "document": ("file", "paper", "report"),
}

MAX_SUGGESTIONS = 5


def suggest_queries(query: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
    """Alternative queries: each word of a multi-word query, then synonym rewrites.

    Duplicates are dropped keeping first occurrence.
    """
    words = query.split()
    candidates: List[str] = list(words) if len(words) > 1 else []

    lowered = query.lower()
    for term, synonyms in SYNONYMS.items():
        if term in lowered:
            candidates.extend(lowered.replace(term, synonym) for synonym in synonyms)

    return list(dict.fromkeys(candidates))[:limit]

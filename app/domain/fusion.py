"""Score fusion of lexical and vector candidate lists."""
from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

from app.domain.entities import FusionWeights, NodeType, RankedResult, SearchCandidate


def best_raw_scores(candidates: Sequence[SearchCandidate]) -> Dict[str, float]:
    """Highest raw score per entity id, in first-seen order."""
    best: Dict[str, float] = {}
    for candidate in candidates:
        current = best.get(candidate.entity_id)
        if current is None or candidate.score > current:
            best[candidate.entity_id] = candidate.score
    return best


def min_max_normalize(raw_scores: Dict[str, float]) -> Dict[str, float]:
    """Scale scores to [0, 1]; a single score (or a flat list) maps to 1.0."""
    if not raw_scores:
        return {}
    low = min(raw_scores.values())
    high = max(raw_scores.values())
    span = high - low
    if span == 0:
        return {entity_id: 1.0 for entity_id in raw_scores}
    return {entity_id: (score - low) / span for entity_id, score in raw_scores.items()}


def fuse(
    lexical: Sequence[SearchCandidate],
    vector: Sequence[SearchCandidate],
    weights: FusionWeights,
) -> List[RankedResult]:
    """Linearly combine normalized lexical and vector scores into one ranking.

    An entity missing from one list gets 0 from that side. Ties on the fused
    score go to entities present in a positively weighted list, then to the
    higher raw lexical score, then to the smaller id.
    """
    raw_lexical = best_raw_scores(lexical)
    raw_vector = best_raw_scores(vector)
    norm_lexical = min_max_normalize(raw_lexical)
    norm_vector = min_max_normalize(raw_vector)
    descriptors = _describe(list(lexical) + list(vector))

    results: List[RankedResult] = []
    for entity_id in dict.fromkeys(list(raw_lexical) + list(raw_vector)):
        lexical_score = norm_lexical.get(entity_id, 0.0)
        vector_score = norm_vector.get(entity_id, 0.0)
        entity_type, title = descriptors[entity_id]
        results.append(
            RankedResult(
                entity_id=entity_id,
                entity_type=entity_type,
                title=title,
                score=weights.lexical * lexical_score + weights.vector * vector_score,
                lexical_score=lexical_score,
                vector_score=vector_score,
                raw_lexical_score=raw_lexical.get(entity_id),
                raw_vector_score=raw_vector.get(entity_id),
            )
        )

    results.sort(key=lambda result: _ranking_key(result, weights))
    return results


def paginate(results: Sequence[RankedResult], page: int, size: int) -> List[RankedResult]:
    start = page * size
    return list(results[start:start + size])


def total_pages(total: int, size: int) -> int:
    return math.ceil(total / size) if size > 0 else 0


def type_facets(results: Sequence[RankedResult]) -> Dict[str, int]:
    """Number of ranked results per entity type; untyped results are not counted."""
    facets: Dict[str, int] = {}
    for result in results:
        if result.entity_type is not None:
            facets[result.entity_type.value] = facets.get(result.entity_type.value, 0) + 1
    return facets


def _ranking_key(result: RankedResult, weights: FusionWeights) -> Tuple[float, bool, float, str]:
    in_weighted_list = (
        weights.lexical > 0 and result.raw_lexical_score is not None
    ) or (weights.vector > 0 and result.raw_vector_score is not None)
    raw_lexical = (
        result.raw_lexical_score if result.raw_lexical_score is not None else -math.inf
    )
    return (-result.score, not in_weighted_list, -raw_lexical, result.entity_id)


def _describe(
    candidates: Sequence[SearchCandidate],
) -> Dict[str, Tuple[Optional[NodeType], Optional[str]]]:
    # first non-empty value wins; lexical rows come first
    described: Dict[str, Tuple[Optional[NodeType], Optional[str]]] = {}
    for candidate in candidates:
        entity_type, title = described.get(candidate.entity_id, (None, None))
        described[candidate.entity_id] = (
            entity_type or candidate.entity_type,
            title or candidate.title,
        )
    return described

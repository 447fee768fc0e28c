"""Adaptive selection of fusion weights from result-quality signals."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from app.domain.entities import FusionWeights, SearchCandidate
from app.domain.fusion import best_raw_scores


@dataclass(frozen=True)
class AdaptiveWeightPolicy:
    """Thresholds for the single-pass weight choice.

    Attributes:
        strong_ratio: fraction of a list's top score a candidate must reach to count as strong
        strong_cap: strong-candidate count at which the count signal saturates
        margin: quality difference required before shifting weight
        shifted_weight: weight given to the better list after a shift
        default: weights used when neither list clearly wins
    """
    strong_ratio: float = 0.5
    strong_cap: int = 5
    margin: float = 0.15
    shifted_weight: float = 0.7
    default: FusionWeights = field(default_factory=lambda: FusionWeights(0.5, 0.5))


def result_quality(candidates: Sequence[SearchCandidate], policy: AdaptiveWeightPolicy) -> float:
    """Blend of strong-candidate count and relative score spread, in [0, 1]."""
    scores = list(best_raw_scores(candidates).values())
    if not scores:
        return 0.0
    top = max(scores)
    if top <= 0:
        return 0.0

    strong = sum(1 for score in scores if score >= policy.strong_ratio * top)
    count_factor = min(strong, policy.strong_cap) / policy.strong_cap
    spread_factor = (top - min(scores)) / top
    return 0.5 * count_factor + 0.5 * spread_factor


def select_weights(
    lexical: Sequence[SearchCandidate],
    vector: Sequence[SearchCandidate],
    policy: AdaptiveWeightPolicy = AdaptiveWeightPolicy(),
) -> FusionWeights:
    lexical_quality = result_quality(lexical, policy)
    vector_quality = result_quality(vector, policy)

    if vector_quality - lexical_quality >= policy.margin:
        return FusionWeights(lexical=round(1 - policy.shifted_weight, 10), vector=policy.shifted_weight)
    if lexical_quality - vector_quality >= policy.margin:
        return FusionWeights(lexical=policy.shifted_weight, vector=round(1 - policy.shifted_weight, 10))
    return policy.default

"""Service fusing lexical and vector search into ranked result pages."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional

from app.domain.entities import (
    FusionWeights,
    NodeType,
    RankedPage,
    RankedResult,
    SearchCandidate,
    SearchType,
)
from app.domain.errors import AdapterError, DomainError, ValidationError
from app.domain.fusion import fuse, paginate, total_pages, type_facets
from app.domain.ports import LexicalSearchPort, ResultCachePort, VectorSearchPort
from app.domain.suggestions import suggest_queries
from app.domain.weighting import AdaptiveWeightPolicy, select_weights
from app.services.cache import NullResultCache, build_cache_key

logger = logging.getLogger(__name__)

LEXICAL_ONLY = FusionWeights(lexical=1.0, vector=0.0)
VECTOR_ONLY = FusionWeights(lexical=0.0, vector=1.0)


class HybridSearchService:
    """Orchestrates the search adapters, weight selection and score fusion.

    Every page of a query is sliced from one ranking: each adapter is asked for
    the same `candidate_pool_size` candidates whatever page is requested.
    """

    def __init__(
        self,
        lexical: LexicalSearchPort,
        vector: VectorSearchPort,
        cache: Optional[ResultCachePort] = None,
        default_weights: FusionWeights = FusionWeights(0.5, 0.5),
        adaptive_policy: AdaptiveWeightPolicy = AdaptiveWeightPolicy(),
        candidate_pool_size: int = 200,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._lexical = lexical
        self._vector = vector
        self._cache = cache if cache is not None else NullResultCache()
        self._default_weights = default_weights
        self._adaptive_policy = adaptive_policy
        self._candidate_pool_size = candidate_pool_size
        self._clock = clock

    def resolve_weights(
        self, fts_weight: Optional[float], vector_weight: Optional[float]
    ) -> FusionWeights:
        """Fill in omitted weights; a single given weight implies its complement."""
        if fts_weight is None and vector_weight is None:
            return self._default_weights
        if vector_weight is None:
            return FusionWeights(lexical=fts_weight, vector=round(1 - fts_weight, 10))
        if fts_weight is None:
            return FusionWeights(lexical=round(1 - vector_weight, 10), vector=vector_weight)
        return FusionWeights(lexical=fts_weight, vector=vector_weight)

    def hybrid_search(
        self,
        query: str,
        fts_weight: Optional[float] = None,
        vector_weight: Optional[float] = None,
        page: int = 0,
        size: int = 10,
    ) -> RankedPage:
        self._require_query(query)
        weights = self.resolve_weights(fts_weight, vector_weight)
        logger.debug(
            f"Hybrid search for: '{query}', weights: FTS={weights.lexical}, Vector={weights.vector}"
        )

        key = build_cache_key(
            "search", kind="hybrid", query=query, weights=[weights.lexical, weights.vector],
            page=page, size=size,
        )
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        started = self._clock()
        lexical = self._fetch_lexical(query, self._candidate_pool_size)
        vector = self._fetch_vector(query, None, self._candidate_pool_size)
        result = self._build_page(query, SearchType.HYBRID, lexical, vector, weights, page, size, started)
        self._cache_put(key, result)
        return result

    def adaptive_hybrid_search(self, query: str, page: int = 0, size: int = 10) -> RankedPage:
        self._require_query(query)
        logger.debug(f"Adaptive hybrid search for: '{query}'")

        key = build_cache_key("search", kind="adaptive", query=query, page=page, size=size)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        started = self._clock()
        lexical = self._fetch_lexical(query, self._candidate_pool_size)
        vector = self._fetch_vector(query, None, self._candidate_pool_size)

        weights = select_weights(lexical, vector, self._adaptive_policy)
        logger.info(f"Adaptive weights - FTS: {weights.lexical:.2f}, Vector: {weights.vector:.2f}")

        result = self._build_page(query, SearchType.ADAPTIVE, lexical, vector, weights, page, size, started)
        self._cache_put(key, result)
        return result

    def lexical_search(
        self, query: str, page: int = 0, size: int = 10, node_type: Optional[NodeType] = None
    ) -> RankedPage:
        """Full-text page, optionally restricted to one entity type.

        Type facets always count the unrestricted ranking so a client can see
        what other types the query matched.
        """
        self._require_query(query)
        started = self._clock()
        lexical = self._fetch_lexical(query, self._candidate_pool_size)
        return self._build_page(
            query, SearchType.FULL_TEXT, lexical, [], LEXICAL_ONLY, page, size, started, node_type
        )

    def vector_search(
        self, query: str, threshold: Optional[float] = None, limit: int = 10
    ) -> RankedPage:
        self._require_query(query)
        started = self._clock()
        vector = self._fetch_vector(query, threshold, limit)
        return self._build_page(query, SearchType.VECTOR, [], vector, VECTOR_ONLY, 0, limit, started)

    def similar_nodes(
        self, node_id: str, threshold: Optional[float] = None, limit: int = 10
    ) -> RankedPage:
        started = self._clock()
        try:
            similar = list(self._vector.similar_to_node(node_id, threshold=threshold, limit=limit))
        except DomainError:
            raise
        except Exception as exc:
            raise AdapterError(f"Vector search failed: {exc}") from exc
        return self._build_page(
            f"Similar to node: {node_id}", SearchType.VECTOR, [], similar, VECTOR_ONLY, 0, limit, started
        )

    def suggest(self, query: str) -> List[str]:
        self._require_query(query)
        return suggest_queries(query.strip())

    # --------------- Internal helpers ---------------
    @staticmethod
    def _require_query(query: str) -> None:
        if not query or not query.strip():
            raise ValidationError("Search query cannot be empty")

    def _fetch_lexical(self, query: str, limit: int) -> List[SearchCandidate]:
        try:
            return list(self._lexical.search(query, limit=limit))
        except DomainError:
            raise
        except Exception as exc:
            raise AdapterError(f"Lexical search failed: {exc}") from exc

    def _fetch_vector(self, query: str, threshold: Optional[float], limit: int) -> List[SearchCandidate]:
        try:
            return list(self._vector.search(query, threshold=threshold, limit=limit))
        except DomainError:
            raise
        except Exception as exc:
            raise AdapterError(f"Vector search failed: {exc}") from exc

    def _build_page(
        self,
        query: str,
        search_type: SearchType,
        lexical: List[SearchCandidate],
        vector: List[SearchCandidate],
        weights: FusionWeights,
        page: int,
        size: int,
        started: float,
        node_type: Optional[NodeType] = None,
    ) -> RankedPage:
        ranked = fuse(lexical, vector, weights)
        facets = type_facets(ranked)
        if node_type is not None:
            ranked = [result for result in ranked if result.entity_type == node_type]
        results: List[RankedResult] = paginate(ranked, page, size)
        scores = [result.score for result in results]
        return RankedPage(
            results=results,
            total_elements=len(ranked),
            total_pages=total_pages(len(ranked), size),
            current_page=page,
            page_size=size,
            query=query,
            search_type=search_type,
            weights=weights,
            min_score=min(scores) if scores else None,
            max_score=max(scores) if scores else None,
            search_time_ms=int((self._clock() - started) * 1000),
            type_facets=facets,
        )

    def _cache_get(self, key: str) -> Any:
        try:
            return self._cache.get(key)
        except Exception:
            logger.warning(f"Result cache read failed for {key}", exc_info=True)
            return None

    def _cache_put(self, key: str, value: Any) -> None:
        try:
            self._cache.put(key, value)
        except Exception:
            logger.warning(f"Result cache write failed for {key}", exc_info=True)

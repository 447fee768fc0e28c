from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.db.database import get_db
from app.db.repositories import EmbeddingRepository, NodeRepository
from app.domain.entities import FusionWeights
from app.domain.ports import ResultCachePort
from app.domain.weighting import AdaptiveWeightPolicy
from app.services.cache import CachePolicy, InMemoryResultCache, NullResultCache
from app.infrastructure.embedding_provider import HashingEmbeddingProvider
from app.infrastructure.graph_accessor import SqlGraphAccessor
from app.infrastructure.search_adapters import Bm25LexicalSearchAdapter, NumpyVectorSearchAdapter
from app.application.graph_traversal_service import GraphTraversalService
from app.application.hybrid_search_service import HybridSearchService
from app.application.query_validation_service import QueryValidationService


@lru_cache()
def get_result_cache() -> ResultCachePort:
    """Process-wide result cache shared by every request."""
    if not settings.CACHE_ENABLED:
        return NullResultCache()
    policy = CachePolicy(default_ttl_seconds=settings.CACHE_TTL_SECONDS)
    return InMemoryResultCache(policy, max_size=settings.CACHE_MAX_SIZE)


@lru_cache()
def get_embedding_provider() -> HashingEmbeddingProvider:
    return HashingEmbeddingProvider(
        dimension=settings.EMBEDDING_DIMENSION,
        model_version=settings.EMBEDDING_MODEL_VERSION,
    )


def get_node_repository(db: Session = Depends(get_db)) -> NodeRepository:
    return NodeRepository(db)


def get_embedding_repository(db: Session = Depends(get_db)) -> EmbeddingRepository:
    return EmbeddingRepository(db)


def get_graph_accessor(
    repository: NodeRepository = Depends(get_node_repository),
) -> SqlGraphAccessor:
    return SqlGraphAccessor(repository)


def get_traversal_service(
    repository: NodeRepository = Depends(get_node_repository),
    accessor: SqlGraphAccessor = Depends(get_graph_accessor),
    cache: ResultCachePort = Depends(get_result_cache),
) -> GraphTraversalService:
    return GraphTraversalService(
        accessor=accessor,
        statistics=repository,
        cache=cache,
        timeout_seconds=settings.TRAVERSAL_TIMEOUT_SECONDS,
    )


def get_lexical_search_adapter(
    repository: NodeRepository = Depends(get_node_repository),
) -> Bm25LexicalSearchAdapter:
    return Bm25LexicalSearchAdapter(repository)


def get_vector_search_adapter(
    repository: EmbeddingRepository = Depends(get_embedding_repository),
    embedder: HashingEmbeddingProvider = Depends(get_embedding_provider),
) -> NumpyVectorSearchAdapter:
    return NumpyVectorSearchAdapter(
        repository,
        embedder,
        default_threshold=settings.VECTOR_SIMILARITY_THRESHOLD,
        model_version=settings.EMBEDDING_MODEL_VERSION,
    )


def get_hybrid_search_service(
    lexical: Bm25LexicalSearchAdapter = Depends(get_lexical_search_adapter),
    vector: NumpyVectorSearchAdapter = Depends(get_vector_search_adapter),
    cache: ResultCachePort = Depends(get_result_cache),
) -> HybridSearchService:
    return HybridSearchService(
        lexical=lexical,
        vector=vector,
        cache=cache,
        default_weights=FusionWeights(settings.HYBRID_FTS_WEIGHT, settings.HYBRID_VECTOR_WEIGHT),
        adaptive_policy=AdaptiveWeightPolicy(
            strong_ratio=settings.ADAPTIVE_STRONG_RATIO,
            margin=settings.ADAPTIVE_MARGIN,
            shifted_weight=settings.ADAPTIVE_SHIFTED_WEIGHT,
        ),
        candidate_pool_size=settings.CANDIDATE_POOL_SIZE,
    )


def get_query_validation_service() -> QueryValidationService:
    return QueryValidationService(
        max_hops=settings.NEIGHBORHOOD_MAX_HOPS,
        path_max_hops=settings.PATH_MAX_HOPS_LIMIT,
        subgraph_max_nodes=settings.SUBGRAPH_MAX_NODES,
        centrality_max_nodes=settings.CENTRALITY_MAX_NODES,
        max_page_size=settings.MAX_PAGE_SIZE,
    )

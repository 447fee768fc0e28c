"""
Search endpoints: hybrid, adaptive, lexical and vector retrieval, similar nodes and
query suggestions.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.config import settings
from app.dependencies import get_hybrid_search_service, get_query_validation_service
from app.application.hybrid_search_service import HybridSearchService
from app.application.query_validation_service import QueryValidationService
from app.domain.entities import NodeType
from app.schemas.api_schemas import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/search/hybrid", response_model=SearchResponse)
def hybrid_search(
    q: str = Query(..., description="Search query"),
    fts_weight: Optional[float] = Query(None, description="Lexical weight in [0, 1]"),
    vector_weight: Optional[float] = Query(None, description="Vector weight in [0, 1]"),
    page: int = Query(0, description="Zero-based page index"),
    size: int = Query(10, description="Page size (1-100)"),
    service: HybridSearchService = Depends(get_hybrid_search_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Combine lexical and vector search with a weighted sum of normalized scores.
    """
    logger.info(f"Hybrid search: '{q}' (FTS: {fts_weight}, Vector: {vector_weight})")
    query = validator.validate_query(q)
    fts_weight = validator.validate_weight("FTS weight", fts_weight)
    vector_weight = validator.validate_weight("Vector weight", vector_weight)
    validator.validate_pagination(page, size)

    result = service.hybrid_search(query, fts_weight, vector_weight, page, size)
    return SearchResponse.from_domain(result)

@router.get("/search/adaptive", response_model=SearchResponse)
def adaptive_hybrid_search(
    q: str = Query(..., description="Search query"),
    page: int = Query(0, description="Zero-based page index"),
    size: int = Query(10, description="Page size (1-100)"),
    service: HybridSearchService = Depends(get_hybrid_search_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Hybrid search whose weights favor whichever signal returned better results.
    """
    logger.info(f"Adaptive hybrid search: '{q}'")
    query = validator.validate_query(q)
    validator.validate_pagination(page, size)

    result = service.adaptive_hybrid_search(query, page, size)
    return SearchResponse.from_domain(result)

@router.get("/search", response_model=SearchResponse)
def lexical_search(
    q: str = Query(..., description="Search query"),
    node_type: Optional[NodeType] = Query(None, alias="type", description="Restrict results to one node type"),
    page: int = Query(0, description="Zero-based page index"),
    size: int = Query(10, description="Page size (1-100)"),
    service: HybridSearchService = Depends(get_hybrid_search_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Full-text search over node names and attributes.
    """
    logger.info(f"Full-text search: '{q}' (type: {node_type})")
    query = validator.validate_query(q)
    validator.validate_pagination(page, size)

    result = service.lexical_search(query, page, size, node_type)
    return SearchResponse.from_domain(result)

@router.get("/search/vector", response_model=SearchResponse)
def vector_search(
    q: str = Query(..., description="Search query"),
    threshold: Optional[float] = Query(None, description="Minimum cosine similarity in [0, 1]"),
    limit: int = Query(settings.VECTOR_DEFAULT_LIMIT, description="Maximum number of results (1-100)"),
    service: HybridSearchService = Depends(get_hybrid_search_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Semantic search by embedding similarity.
    """
    logger.info(f"Vector search: '{q}' (threshold: {threshold})")
    query = validator.validate_query(q)
    threshold = validator.validate_threshold(threshold)
    validator.validate_pagination(0, limit)

    result = service.vector_search(query, threshold, limit)
    return SearchResponse.from_domain(result)

@router.get("/search/similar/{node_id}", response_model=SearchResponse)
def find_similar_nodes(
    node_id: str,
    threshold: Optional[float] = Query(None, description="Minimum cosine similarity in [0, 1]"),
    limit: int = Query(settings.VECTOR_DEFAULT_LIMIT, description="Maximum number of results (1-100)"),
    service: HybridSearchService = Depends(get_hybrid_search_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Nodes and documents whose embeddings are closest to the given node's.
    """
    logger.info(f"Find similar to node: {node_id}, limit={limit}")
    node_id = validator.validate_node_id(node_id)
    threshold = validator.validate_threshold(threshold)
    validator.validate_pagination(0, limit)

    result = service.similar_nodes(node_id, threshold, limit)
    return SearchResponse.from_domain(result)

@router.get("/search/suggest", response_model=List[str])
def suggest_queries(
    q: str = Query(..., description="Partial or full query"),
    service: HybridSearchService = Depends(get_hybrid_search_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Suggest alternative queries from the query's words and known synonyms.
    """
    logger.debug(f"Getting suggestions for: '{q}'")
    return service.suggest(validator.validate_query(q))

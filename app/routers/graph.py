"""
Graph traversal endpoints: neighborhoods, paths, components and centrality.
"""
import logging
from typing import Dict, List

from fastapi import APIRouter, Body, Depends, Query

from app.config import settings
from app.dependencies import get_query_validation_service, get_traversal_service
from app.application.graph_traversal_service import GraphTraversalService
from app.application.query_validation_service import QueryValidationService
from app.schemas.api_schemas import (
    ComponentResponse,
    GraphNeighborhoodResponse,
    GraphStatsResponse,
    PathResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/graph/neighborhood/{node_id}", response_model=GraphNeighborhoodResponse)
def get_neighborhood(
    node_id: str,
    hops: int = Query(1, description="Number of hops to expand (1-3)"),
    include_centrality: bool = Query(False, description="Annotate nodes with degree centrality"),
    service: GraphTraversalService = Depends(get_traversal_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Get the n-hop neighborhood of a node, with nodes and edges tagged by hop level.
    """
    logger.info(f"Getting {hops}-hop neighborhood for node: {node_id}")
    node_id = validator.validate_node_id(node_id)
    hops = validator.validate_hops(hops)

    neighborhood = service.get_neighborhood(node_id, hops, include_centrality=include_centrality)
    return GraphNeighborhoodResponse.from_domain(neighborhood)

@router.get("/graph/path", response_model=PathResponse)
def find_shortest_path(
    from_id: str = Query(..., alias="from", description="Source node ID"),
    to_id: str = Query(..., alias="to", description="Target node ID"),
    max_hops: int = Query(settings.PATH_DEFAULT_MAX_HOPS, description="Maximum path length in edges"),
    service: GraphTraversalService = Depends(get_traversal_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Find the shortest undirected path between two nodes.

    An unreachable target yields an empty path with distance -1.
    """
    logger.info(f"Finding path from {from_id} to {to_id} (max {max_hops} hops)")
    from_id = validator.validate_node_id(from_id)
    to_id = validator.validate_node_id(to_id)
    max_hops = validator.validate_max_hops(max_hops)

    result = service.find_shortest_path(from_id, to_id, max_hops)
    return PathResponse.from_domain(result)

@router.get("/graph/component/{node_id}", response_model=ComponentResponse)
def get_connected_component(
    node_id: str,
    service: GraphTraversalService = Depends(get_traversal_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Get every node reachable from a node, ignoring edge direction.
    """
    logger.info(f"Finding connected component for node: {node_id}")
    node_id = validator.validate_node_id(node_id)

    component = service.get_connected_component(node_id)
    return ComponentResponse(node_id=node_id, component=sorted(component), size=len(component))

@router.post("/graph/centrality")
def calculate_centrality(
    node_ids: List[str] = Body(..., description="Node IDs forming the induced subgraph"),
    service: GraphTraversalService = Depends(get_traversal_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
) -> Dict[str, float]:
    """
    Degree centrality of each requested node within the subgraph they induce.
    """
    logger.info(f"Calculating centrality for {len(node_ids)} nodes")
    members = validator.validate_centrality_nodes(node_ids)
    return service.calculate_centrality(members)

@router.post("/graph/subgraph", response_model=GraphNeighborhoodResponse)
def extract_subgraph(
    node_ids: List[str] = Body(..., description="Node IDs to extract"),
    service: GraphTraversalService = Depends(get_traversal_service),
    validator: QueryValidationService = Depends(get_query_validation_service),
):
    """
    Extract the subgraph induced by the given nodes. Unknown IDs are skipped.
    """
    logger.info(f"Extracting subgraph for {len(node_ids)} nodes")
    members = validator.validate_subgraph_nodes(node_ids)

    subgraph = service.extract_subgraph(members)
    return GraphNeighborhoodResponse.from_domain(subgraph)

@router.get("/graph/stats", response_model=GraphStatsResponse)
def get_graph_statistics(
    service: GraphTraversalService = Depends(get_traversal_service),
):
    """
    Node and edge counts by type and the average connections per node.
    """
    logger.info("Getting graph statistics")
    return GraphStatsResponse(**service.get_graph_statistics())

"""
API Request/Response Schemas using Pydantic.

Structure of HTTP responses for the Knowledge Graph API. Domain result objects
are converted here so routers never serialize dataclasses directly.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Any

from app.domain.entities import (
    GraphEdge,
    GraphNeighborhood,
    GraphNode,
    PathResult,
    RankedPage,
    RankedResult,
)

# Graph schemas
class GraphNodeResponse(BaseModel):
    id: str = Field(..., description="Unique identifier of the node")
    type: str = Field(..., description="Node type (e.g., PERSON, CONCEPT)")
    name: str = Field(..., description="Display name of the node")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Free-form node properties")
    hop_level: int = Field(..., description="BFS distance from the center node")
    centrality: Optional[float] = Field(None, description="Degree centrality within the returned node set")

    @classmethod
    def from_domain(cls, node: GraphNode) -> "GraphNodeResponse":
        return cls(
            id=node.id,
            type=node.type.value,
            name=node.name,
            properties=node.properties,
            hop_level=node.hop_level,
            centrality=node.centrality,
        )

class GraphEdgeResponse(BaseModel):
    id: str = Field(..., description="Unique identifier of the edge")
    source_id: str = Field(..., description="ID of the source node")
    target_id: str = Field(..., description="ID of the target node")
    type: str = Field(..., description="Edge type (e.g., PART_OF)")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Free-form edge properties")
    hop_level: int = Field(..., description="Hop level at which the edge was discovered")

    @classmethod
    def from_domain(cls, edge: GraphEdge) -> "GraphEdgeResponse":
        return cls(
            id=edge.id,
            source_id=edge.source_id,
            target_id=edge.target_id,
            type=edge.type.value,
            properties=edge.properties,
            hop_level=edge.hop_level,
        )

class GraphNeighborhoodResponse(BaseModel):
    center_node_id: Optional[str] = Field(None, description="Center node, absent for extracted subgraphs")
    requested_hops: Optional[int] = Field(None, description="Hop bound requested by the caller")
    actual_hops: Optional[int] = Field(None, description="Deepest hop level that produced new nodes")
    nodes: List[GraphNodeResponse] = Field(..., description="Nodes in the neighborhood")
    edges: List[GraphEdgeResponse] = Field(..., description="Edges among the discovered nodes")
    total_nodes: int = Field(..., description="Number of nodes returned")
    total_edges: int = Field(..., description="Number of edges returned")
    nodes_per_hop: Dict[int, int] = Field(..., description="Histogram of nodes per hop level")

    @classmethod
    def from_domain(cls, neighborhood: GraphNeighborhood) -> "GraphNeighborhoodResponse":
        return cls(
            center_node_id=neighborhood.center_node_id,
            requested_hops=neighborhood.requested_hops,
            actual_hops=neighborhood.actual_hops,
            nodes=[GraphNodeResponse.from_domain(node) for node in neighborhood.nodes],
            edges=[GraphEdgeResponse.from_domain(edge) for edge in neighborhood.edges],
            total_nodes=neighborhood.total_nodes,
            total_edges=neighborhood.total_edges,
            nodes_per_hop=dict(neighborhood.nodes_per_hop),
        )

class PathResponse(BaseModel):
    from_node: str = Field(..., alias="from", description="Source node ID")
    to_node: str = Field(..., alias="to", description="Target node ID")
    path: List[str] = Field(..., description="Node IDs from source to target, empty if unreachable")
    distance: int = Field(..., description="Number of edges on the path, -1 if unreachable")
    found: bool = Field(..., description="Whether a path within the hop bound exists")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_domain(cls, result: PathResult) -> "PathResponse":
        return cls(
            from_node=result.source_id,
            to_node=result.target_id,
            path=result.path,
            distance=result.distance,
            found=result.found,
        )

class ComponentResponse(BaseModel):
    node_id: str = Field(..., description="Node the component was computed from")
    component: List[str] = Field(..., description="Sorted IDs of every node in the component")
    size: int = Field(..., description="Number of nodes in the component")

class GraphStatsResponse(BaseModel):
    total_nodes: int = Field(..., description="Number of nodes in the graph")
    total_edges: int = Field(..., description="Number of edges in the graph")
    node_types: Dict[str, int] = Field(default_factory=dict, description="Node count per node type")
    edge_types: Dict[str, int] = Field(default_factory=dict, description="Edge count per edge type")
    avg_connections_per_node: float = Field(..., description="Mean degree over connected nodes")

# Search schemas
class SearchResult(BaseModel):
    entity_id: str = Field(..., description="ID of the matched node or document")
    entity_type: Optional[str] = Field(None, description="Type of the matched entity")
    title: Optional[str] = Field(None, description="Display title of the matched entity")
    score: float = Field(..., description="Fused score in [0, 1]")
    fts_score: float = Field(..., description="Normalized lexical score")
    vector_score: float = Field(..., description="Normalized vector score")
    raw_fts_score: Optional[float] = Field(None, description="Lexical score before normalization")
    raw_vector_score: Optional[float] = Field(None, description="Vector similarity before normalization")

    @classmethod
    def from_domain(cls, result: RankedResult) -> "SearchResult":
        return cls(
            entity_id=result.entity_id,
            entity_type=result.entity_type.value if result.entity_type else None,
            title=result.title,
            score=result.score,
            fts_score=result.lexical_score,
            vector_score=result.vector_score,
            raw_fts_score=result.raw_lexical_score,
            raw_vector_score=result.raw_vector_score,
        )

class SearchWeights(BaseModel):
    fts_weight: float = Field(..., description="Weight applied to the lexical signal")
    vector_weight: float = Field(..., description="Weight applied to the vector signal")

class SearchResponse(BaseModel):
    results: List[SearchResult] = Field(..., description="Results on the requested page")
    total_elements: int = Field(..., description="Number of fused candidates across all pages")
    total_pages: int = Field(..., description="Number of pages at the requested size")
    current_page: int = Field(..., description="Zero-based page index")
    page_size: int = Field(..., description="Requested page size")
    query: str = Field(..., description="Query that produced the results")
    search_type: str = Field(..., description="FULL_TEXT, VECTOR, HYBRID or ADAPTIVE")
    weights: Optional[SearchWeights] = Field(None, description="Fusion weights used for ranking")
    min_score: Optional[float] = Field(None, description="Lowest score on the page")
    max_score: Optional[float] = Field(None, description="Highest score on the page")
    search_time_ms: int = Field(0, description="Time spent computing the page")
    type_facets: Dict[str, int] = Field(default_factory=dict, description="Matches per entity type over the whole ranking")

    @classmethod
    def from_domain(cls, page: RankedPage) -> "SearchResponse":
        weights = None
        if page.weights is not None:
            weights = SearchWeights(fts_weight=page.weights.lexical, vector_weight=page.weights.vector)
        return cls(
            results=[SearchResult.from_domain(result) for result in page.results],
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            current_page=page.current_page,
            page_size=page.page_size,
            query=page.query,
            search_type=page.search_type.value,
            weights=weights,
            min_score=page.min_score,
            max_score=page.max_score,
            search_time_ms=page.search_time_ms,
            type_facets=page.type_facets,
        )

"""Internal domain entities and request-scoped result objects."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class NodeType(str, Enum):
    ENTITY = "ENTITY"
    CONCEPT = "CONCEPT"
    SECTION = "SECTION"
    REFERENCE = "REFERENCE"
    NOTE = "NOTE"
    SYSTEM = "SYSTEM"
    PERSON = "PERSON"
    ORGANIZATION = "ORGANIZATION"
    EVENT = "EVENT"
    PLACE = "PLACE"
    ITEM = "ITEM"
    DOCUMENT = "DOCUMENT"
    LOCATION = "LOCATION"
    PROJECT = "PROJECT"


class EdgeType(str, Enum):
    AFFILIATED_WITH = "AFFILIATED_WITH"
    PARTICIPATED_IN = "PARTICIPATED_IN"
    LOCATED_IN = "LOCATED_IN"
    PART_OF = "PART_OF"
    REFERENCES = "REFERENCES"
    PRODUCED_BY = "PRODUCED_BY"
    SIMILAR_TO = "SIMILAR_TO"


class SearchType(str, Enum):
    FULL_TEXT = "FULL_TEXT"
    VECTOR = "VECTOR"
    HYBRID = "HYBRID"
    ADAPTIVE = "ADAPTIVE"


@dataclass(frozen=True)
class Node:
    id: str
    type: NodeType
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)
    source_uri: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Edge:
    id: str
    source_id: str
    target_id: str
    type: EdgeType
    properties: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def other_end(self, node_id: str) -> str:
        """Return the endpoint opposite ``node_id`` (itself for a self-loop)."""
        return self.target_id if self.source_id == node_id else self.source_id


@dataclass(frozen=True)
class GraphNode:
    id: str
    type: NodeType
    name: str
    properties: Dict[str, Any]
    hop_level: int
    centrality: Optional[float] = None


@dataclass(frozen=True)
class GraphEdge:
    id: str
    source_id: str
    target_id: str
    type: EdgeType
    properties: Dict[str, Any]
    hop_level: int


@dataclass(frozen=True)
class GraphNeighborhood:
    """Hop-annotated subgraph; ``center_node_id`` is None for extracted subgraphs."""
    center_node_id: Optional[str]
    requested_hops: Optional[int]
    actual_hops: Optional[int]
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    nodes_per_hop: Dict[int, int]

    @property
    def total_nodes(self) -> int:
        return len(self.nodes)

    @property
    def total_edges(self) -> int:
        return len(self.edges)


@dataclass(frozen=True)
class PathResult:
    source_id: str
    target_id: str
    path: List[str]

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def distance(self) -> int:
        return len(self.path) - 1 if self.path else -1


@dataclass(frozen=True)
class SearchCandidate:
    """One row produced by a search adapter."""
    entity_id: str
    score: float
    entity_type: Optional[NodeType] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class FusionWeights:
    lexical: float
    vector: float


@dataclass(frozen=True)
class RankedResult:
    entity_id: str
    entity_type: Optional[NodeType]
    title: Optional[str]
    score: float
    lexical_score: float
    vector_score: float
    raw_lexical_score: Optional[float] = None
    raw_vector_score: Optional[float] = None


@dataclass(frozen=True)
class RankedPage:
    results: List[RankedResult]
    total_elements: int
    total_pages: int
    current_page: int
    page_size: int
    query: str
    search_type: SearchType
    weights: Optional[FusionWeights] = None
    min_score: Optional[float] = None
    max_score: Optional[float] = None
    search_time_ms: int = 0
    type_facets: Dict[str, int] = field(default_factory=dict)

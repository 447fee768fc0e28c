"""Ports consumed by the traversal and retrieval core."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from app.domain.entities import Edge, Node, SearchCandidate


class GraphAccessorPort(Protocol):
    """Read access to adjacency; raises NodeNotFoundError for a missing queried node."""

    def neighbors(self, node_id: str) -> List[Tuple[Edge, Node]]:
        ...

    def get_node(self, node_id: str) -> Optional[Node]:
        ...

    def get_nodes(self, node_ids: Iterable[str]) -> Dict[str, Node]:
        ...


class GraphStatisticsPort(Protocol):
    def count_nodes(self) -> int:
        ...

    def count_edges(self) -> int:
        ...

    def node_type_counts(self) -> Dict[str, int]:
        ...

    def edge_type_counts(self) -> Dict[str, int]:
        ...

    def connection_counts(self) -> List[int]:
        ...


class LexicalSearchPort(Protocol):
    def search(self, query: str, limit: Optional[int] = None) -> List[SearchCandidate]:
        ...


class VectorSearchPort(Protocol):
    def search(
        self, query: str, threshold: Optional[float] = None, limit: int = 10
    ) -> List[SearchCandidate]:
        ...

    def similar_to_node(
        self, node_id: str, threshold: Optional[float] = None, limit: int = 10
    ) -> List[SearchCandidate]:
        """Owners closest to the node's stored embedding, the node itself excluded."""
        ...


class EmbeddingProviderPort(Protocol):
    def embed(self, text: str) -> List[float]:
        ...


class ResultCachePort(Protocol):
    """Best-effort memoization; absence of a value only costs latency."""

    def get(self, key: str) -> Any:
        ...

    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ...

    def stats(self) -> Dict[str, Any]:
        ...

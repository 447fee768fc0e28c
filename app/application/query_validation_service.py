"""Service for validating query parameters at the API boundary."""
from __future__ import annotations

from typing import Iterable, List, Optional

from app.domain.errors import ValidationError


class QueryValidationService:
    """Validates traversal and search request parameters."""

    def __init__(
        self,
        max_hops: int = 3,
        path_max_hops: int = 10,
        subgraph_max_nodes: int = 100,
        centrality_max_nodes: int = 1000,
        max_page_size: int = 100,
    ) -> None:
        self._max_hops = max_hops
        self._path_max_hops = path_max_hops
        self._subgraph_max_nodes = subgraph_max_nodes
        self._centrality_max_nodes = centrality_max_nodes
        self._max_page_size = max_page_size

    def validate_query(self, query: Optional[str]) -> str:
        """Validate and normalize a search query."""
        if query is None or not query.strip():
            raise ValidationError("Search query cannot be empty")
        return query.strip()

    def validate_node_id(self, node_id: Optional[str]) -> str:
        if node_id is None or not node_id.strip():
            raise ValidationError("Node id is required and cannot be empty")
        return node_id.strip()

    def validate_hops(self, hops: int) -> int:
        if hops < 1 or hops > self._max_hops:
            raise ValidationError(f"Hops must be between 1 and {self._max_hops}")
        return hops

    def validate_max_hops(self, max_hops: int) -> int:
        if max_hops < 1 or max_hops > self._path_max_hops:
            raise ValidationError(f"Max hops must be between 1 and {self._path_max_hops}")
        return max_hops

    def validate_subgraph_nodes(self, node_ids: Iterable[str]) -> List[str]:
        return self._validate_node_set(node_ids, self._subgraph_max_nodes, "Subgraph")

    def validate_centrality_nodes(self, node_ids: Iterable[str]) -> List[str]:
        return self._validate_node_set(node_ids, self._centrality_max_nodes, "Centrality")

    def validate_pagination(self, page: int, size: int) -> None:
        if page < 0:
            raise ValidationError("Page must be zero or greater")
        if size < 1 or size > self._max_page_size:
            raise ValidationError(f"Page size must be between 1 and {self._max_page_size}")

    def validate_weight(self, name: str, weight: Optional[float]) -> Optional[float]:
        if weight is None:
            return None
        if weight < 0.0 or weight > 1.0:
            raise ValidationError(f"{name} must be between 0 and 1")
        return weight

    def validate_threshold(self, threshold: Optional[float]) -> Optional[float]:
        return self.validate_weight("Similarity threshold", threshold)

    def _validate_node_set(self, node_ids: Iterable[str], limit: int, label: str) -> List[str]:
        # Duplicates collapse; the bound applies to distinct ids.
        members = sorted({node_id for node_id in node_ids if node_id and node_id.strip()})
        if not members:
            raise ValidationError(f"{label} node set cannot be empty")
        if len(members) > limit:
            raise ValidationError(f"{label} node set cannot exceed {limit} nodes")
        return members

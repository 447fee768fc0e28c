"""Service exposing graph traversal queries to the API layer."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Set

from app.domain.entities import GraphNeighborhood, PathResult
from app.domain.ports import GraphAccessorPort, GraphStatisticsPort, ResultCachePort
from app.domain.traversal import (
    Deadline,
    connected_component,
    expand_neighborhood,
    induced_degree_centrality,
    induced_subgraph,
    shortest_path,
)
from app.services.cache import NullResultCache, build_cache_key

logger = logging.getLogger(__name__)


class GraphTraversalService:
    """Neighborhoods, paths, components, centrality and statistics.

    The service never mutates the graph. Results of the cheaper queries are
    memoized in the injected result cache; a cache failure only costs latency.
    """

    def __init__(
        self,
        accessor: GraphAccessorPort,
        statistics: GraphStatisticsPort,
        cache: Optional[ResultCachePort] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._accessor = accessor
        self._statistics = statistics
        self._cache = cache if cache is not None else NullResultCache()
        self._timeout_seconds = timeout_seconds

    def get_neighborhood(
        self, node_id: str, hops: int, include_centrality: bool = False
    ) -> GraphNeighborhood:
        logger.debug(f"Getting {hops}-hop neighborhood for node: {node_id}")
        key = build_cache_key(
            "neighborhood", node_id=node_id, hops=hops, include_centrality=include_centrality
        )
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        result = expand_neighborhood(
            self._accessor,
            node_id,
            hops,
            deadline=self._deadline(),
            include_centrality=include_centrality,
        )
        self._cache_put(key, result)
        return result

    def find_shortest_path(self, source_id: str, target_id: str, max_hops: int = 5) -> PathResult:
        logger.debug(f"Finding path from {source_id} to {target_id} (max {max_hops} hops)")
        key = build_cache_key("path", source=source_id, target=target_id, max_hops=max_hops)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        result = shortest_path(self._accessor, source_id, target_id, max_hops)
        self._cache_put(key, result)
        return result

    def get_connected_component(self, node_id: str) -> Set[str]:
        logger.debug(f"Finding connected component for node: {node_id}")
        return connected_component(self._accessor, node_id, deadline=self._deadline())

    def calculate_centrality(self, node_ids: Iterable[str]) -> Dict[str, float]:
        members = set(node_ids)
        logger.debug(f"Calculating centrality for {len(members)} nodes")
        return induced_degree_centrality(self._accessor, members)

    def extract_subgraph(self, node_ids: Iterable[str]) -> GraphNeighborhood:
        members = set(node_ids)
        logger.debug(f"Extracting subgraph for {len(members)} nodes")
        return induced_subgraph(self._accessor, members)

    def get_graph_statistics(self) -> Dict[str, Any]:
        key = build_cache_key("graph_stats")
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        connections = self._statistics.connection_counts()
        stats = {
            "total_nodes": self._statistics.count_nodes(),
            "total_edges": self._statistics.count_edges(),
            "node_types": self._statistics.node_type_counts(),
            "edge_types": self._statistics.edge_type_counts(),
            "avg_connections_per_node": (
                sum(connections) / len(connections) if connections else 0.0
            ),
        }
        self._cache_put(key, stats)
        return stats

    # --------------- Internal helpers ---------------
    def _deadline(self) -> Optional[Deadline]:
        if self._timeout_seconds is None:
            return None
        return Deadline(self._timeout_seconds)

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

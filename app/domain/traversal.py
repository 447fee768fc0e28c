"""Breadth-first graph traversals over a GraphAccessorPort.

Every traversal here is iterative (explicit queue plus visited set), treats
edges as undirected for reachability, and keeps the stored edge direction in
the returned DTOs. Nodes that vanish while a query is running are skipped
rather than reported; only a missing *queried* node raises.
"""
from __future__ import annotations

import logging
import time
from collections import Counter, deque
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from app.domain.entities import (
    Edge,
    GraphEdge,
    GraphNeighborhood,
    GraphNode,
    Node,
    PathResult,
)
from app.domain.errors import NodeNotFoundError, QueryTimeoutError
from app.domain.ports import GraphAccessorPort

logger = logging.getLogger(__name__)


class Deadline:
    """Monotonic deadline consulted between BFS levels."""

    def __init__(
        self, seconds: Optional[float], clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._clock = clock
        self._expires_at = None if seconds is None else clock() + seconds

    def expired(self) -> bool:
        return self._expires_at is not None and self._clock() >= self._expires_at

    def check(self, operation: str) -> None:
        if self.expired():
            raise QueryTimeoutError(f"{operation} exceeded its deadline")


def expand_neighborhood(
    accessor: GraphAccessorPort,
    center_id: str,
    hops: int,
    deadline: Optional[Deadline] = None,
    include_centrality: bool = False,
) -> GraphNeighborhood:
    """Level-synchronous BFS from ``center_id`` up to ``hops`` levels.

    A node keeps the hop level at which it was first discovered. Each edge is
    attached once, at the level of the frontier that first walked it, which is
    ``min(hop(source), hop(target)) + 1``.
    """
    center = accessor.get_node(center_id)
    if center is None:
        raise NodeNotFoundError(center_id)

    hop_levels: Dict[str, int] = {center_id: 0}
    nodes: List[GraphNode] = [_to_graph_node(center, 0)]
    edges: List[GraphEdge] = []
    seen_edges: Set[str] = set()
    frontier: List[str] = [center_id]
    actual_hops = 0

    for hop in range(1, hops + 1):
        if not frontier:
            break
        if deadline is not None:
            deadline.check("Neighborhood expansion")

        next_frontier: List[str] = []
        for node_id in frontier:
            for edge, other in _safe_neighbors(accessor, node_id):
                if edge.id in seen_edges:
                    continue
                seen_edges.add(edge.id)
                edges.append(_to_graph_edge(edge, hop))

                if other.id not in hop_levels:
                    hop_levels[other.id] = hop
                    nodes.append(_to_graph_node(other, hop))
                    next_frontier.append(other.id)

        if next_frontier:
            actual_hops = hop
        frontier = next_frontier

    if include_centrality:
        scores = induced_degree_centrality(accessor, list(hop_levels))
        nodes = [replace(node, centrality=scores.get(node.id, 0.0)) for node in nodes]

    counts = Counter(hop_levels.values())
    return GraphNeighborhood(
        center_node_id=center_id,
        requested_hops=hops,
        actual_hops=actual_hops,
        nodes=nodes,
        edges=edges,
        nodes_per_hop={level: counts[level] for level in sorted(counts)},
    )


def shortest_path(
    accessor: GraphAccessorPort, source_id: str, target_id: str, max_hops: int
) -> PathResult:
    """Unweighted shortest path over the undirected view, at most ``max_hops`` edges.

    Neighbors are expanded in ascending id order so that ties between equally
    short paths always resolve to the same path.
    """
    for node_id in (source_id, target_id):
        if accessor.get_node(node_id) is None:
            raise NodeNotFoundError(node_id)

    if source_id == target_id:
        return PathResult(source_id, target_id, [source_id])

    predecessors: Dict[str, Optional[str]] = {source_id: None}
    queue = deque([(source_id, 0)])

    while queue:
        node_id, depth = queue.popleft()
        if node_id == target_id:
            return PathResult(source_id, target_id, _rebuild_path(predecessors, target_id))
        if depth >= max_hops:
            continue
        for neighbor_id in _sorted_neighbor_ids(accessor, node_id):
            if neighbor_id not in predecessors:
                predecessors[neighbor_id] = node_id
                queue.append((neighbor_id, depth + 1))

    return PathResult(source_id, target_id, [])


def connected_component(
    accessor: GraphAccessorPort, node_id: str, deadline: Optional[Deadline] = None
) -> Set[str]:
    """All node ids reachable from ``node_id`` ignoring edge direction."""
    if accessor.get_node(node_id) is None:
        raise NodeNotFoundError(node_id)

    component: Set[str] = {node_id}
    frontier: List[str] = [node_id]

    while frontier:
        if deadline is not None:
            deadline.check("Connected component search")
        next_frontier: List[str] = []
        for current in frontier:
            for neighbor_id in _sorted_neighbor_ids(accessor, current):
                if neighbor_id not in component:
                    component.add(neighbor_id)
                    next_frontier.append(neighbor_id)
        frontier = next_frontier

    return component


def induced_degree_centrality(
    accessor: GraphAccessorPort, node_ids: Iterable[str]
) -> Dict[str, float]:
    """Degree centrality restricted to the subgraph induced by ``node_ids``.

    A member's score is the number of distinct other members it shares an edge
    with, divided by ``len(members) - 1``.
    """
    members = sorted(set(node_ids))
    adjacency, _ = _collect_induced(accessor, members)
    return _degree_scores(members, adjacency)


def induced_subgraph(accessor: GraphAccessorPort, node_ids: Iterable[str]) -> GraphNeighborhood:
    """Nodes of ``node_ids`` that exist plus the edges running between them."""
    members = sorted(set(node_ids))
    found = accessor.get_nodes(members)
    missing = [node_id for node_id in members if node_id not in found]
    if missing:
        logger.debug(f"Subgraph extraction skipped {len(missing)} unknown node ids")

    adjacency, edges = _collect_induced(accessor, [m for m in members if m in found])
    scores = _degree_scores(members, adjacency)

    nodes = [
        replace(_to_graph_node(found[node_id], 0), centrality=scores[node_id])
        for node_id in members
        if node_id in found
    ]
    graph_edges = [_to_graph_edge(edges[edge_id], 0) for edge_id in sorted(edges)]

    return GraphNeighborhood(
        center_node_id=None,
        requested_hops=None,
        actual_hops=None,
        nodes=nodes,
        edges=graph_edges,
        nodes_per_hop={0: len(nodes)} if nodes else {},
    )


def _collect_induced(
    accessor: GraphAccessorPort, members: List[str]
) -> Tuple[Dict[str, Set[str]], Dict[str, Edge]]:
    member_set = set(members)
    adjacency: Dict[str, Set[str]] = {}
    edges: Dict[str, Edge] = {}
    for node_id in members:
        linked: Set[str] = set()
        for edge, other in _safe_neighbors(accessor, node_id):
            if other.id not in member_set:
                continue
            edges.setdefault(edge.id, edge)
            if other.id != node_id:
                linked.add(other.id)
        adjacency[node_id] = linked
    return adjacency, edges


def _degree_scores(members: List[str], adjacency: Dict[str, Set[str]]) -> Dict[str, float]:
    normalizer = len(members) - 1
    if normalizer <= 0:
        return {node_id: 0.0 for node_id in members}
    return {node_id: len(adjacency.get(node_id, ())) / normalizer for node_id in members}


def _safe_neighbors(accessor: GraphAccessorPort, node_id: str) -> List[Tuple[Edge, Node]]:
    try:
        return accessor.neighbors(node_id)
    except NodeNotFoundError:
        logger.warning(f"Node {node_id} disappeared during traversal; skipping")
        return []


def _sorted_neighbor_ids(accessor: GraphAccessorPort, node_id: str) -> List[str]:
    return sorted({other.id for _, other in _safe_neighbors(accessor, node_id) if other.id != node_id})


def _rebuild_path(predecessors: Dict[str, Optional[str]], target_id: str) -> List[str]:
    path: List[str] = []
    current: Optional[str] = target_id
    while current is not None:
        path.append(current)
        current = predecessors[current]
    path.reverse()
    return path


def _to_graph_node(node: Node, hop_level: int) -> GraphNode:
    return GraphNode(
        id=node.id,
        type=node.type,
        name=node.name,
        properties=dict(node.properties),
        hop_level=hop_level,
    )


def _to_graph_edge(edge: Edge, hop_level: int) -> GraphEdge:
    return GraphEdge(
        id=edge.id,
        source_id=edge.source_id,
        target_id=edge.target_id,
        type=edge.type,
        properties=dict(edge.properties),
        hop_level=hop_level,
    )

"""Graph accessor backed by the SQLAlchemy node repository."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from app.db import models
from app.db.repositories.nodes import NodeRepository
from app.domain.entities import Edge, Node
from app.domain.errors import NodeNotFoundError

logger = logging.getLogger(__name__)


def to_domain_node(row: models.Node) -> Node:
    return Node(
        id=row.id,
        type=row.type,
        name=row.name,
        properties=dict(row.properties or {}),
        source_uri=row.source_uri,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_domain_edge(row: models.Edge) -> Edge:
    return Edge(
        id=row.id,
        source_id=row.source_id,
        target_id=row.target_id,
        type=row.type,
        properties=dict(row.properties or {}),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlGraphAccessor:
    """Adjacency reads over stored nodes and edges, in both directions."""

    def __init__(self, repository: NodeRepository) -> None:
        self._repo = repository

    def get_node(self, node_id: str) -> Optional[Node]:
        row = self._repo.get_node(node_id)
        return to_domain_node(row) if row else None

    def get_nodes(self, node_ids: Iterable[str]) -> Dict[str, Node]:
        return {row.id: to_domain_node(row) for row in self._repo.get_nodes(node_ids)}

    def neighbors(self, node_id: str) -> List[Tuple[Edge, Node]]:
        """Return (edge, far node) pairs ordered by far node id, then edge id.

        Raises NodeNotFoundError when ``node_id`` itself is missing. Edges whose
        far endpoint no longer exists are logged and dropped.
        """
        if self._repo.get_node(node_id) is None:
            raise NodeNotFoundError(node_id)

        edges: Dict[str, Edge] = {}
        for row in self._repo.get_edges_by_source(node_id) + self._repo.get_edges_by_target(node_id):
            edges.setdefault(row.id, to_domain_edge(row))

        far_ids = {edge.other_end(node_id) for edge in edges.values()}
        far_nodes = self.get_nodes(far_ids)

        pairs: List[Tuple[Edge, Node]] = []
        for edge in edges.values():
            other = far_nodes.get(edge.other_end(node_id))
            if other is None:
                logger.warning(
                    f"Skipping dangling edge {edge.id}: node {edge.other_end(node_id)} no longer exists"
                )
                continue
            pairs.append((edge, other))

        pairs.sort(key=lambda pair: (pair[1].id, pair[0].id))
        return pairs

from sqlalchemy import func
from sqlalchemy.orm import Session
from app.db.models import Node, Edge
from app.domain.entities import NodeType, EdgeType
from typing import Dict, Iterable, List, Optional, Any

class NodeRepository:
    """Repository for node and edge operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_node(self, node_type: NodeType, name: str, properties: Dict[str, Any] = None,
                    source_uri: str = None, node_id: str = None) -> Node:
        """
        Create a new node.

        Args:
            node_type: Semantic node type
            name: Display name
            properties: Attribute map (optional)
            source_uri: Source locator (optional)
            node_id: Explicit identifier (optional, generated otherwise)

        Returns:
            Created node
        """
        node = Node(
            type=node_type,
            name=name,
            properties=properties or {},
            source_uri=source_uri,
        )
        if node_id:
            node.id = node_id
        self.db.add(node)
        self.db.commit()
        self.db.refresh(node)
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        """
        Get a node by ID.

        Args:
            node_id: Node ID

        Returns:
            Node if found, None otherwise
        """
        return self.db.query(Node).filter(Node.id == node_id).first()

    def get_nodes(self, node_ids: Iterable[str]) -> List[Node]:
        """
        Get every node whose ID is in ``node_ids``; unknown IDs are ignored.
        """
        ids = list(node_ids)
        if not ids:
            return []
        return self.db.query(Node).filter(Node.id.in_(ids)).all()

    def get_all_nodes(self) -> List[Node]:
        return self.db.query(Node).order_by(Node.id).all()

    def delete_node(self, node_id: str) -> bool:
        """
        Delete a node by ID. Edges pointing at it are left to the database's
        cascade rules, so readers must tolerate dangling edges.

        Args:
            node_id: Node ID

        Returns:
            True if node was deleted, False otherwise
        """
        node = self.get_node(node_id)
        if not node:
            return False

        self.db.delete(node)
        self.db.commit()
        return True

    def create_edge(self, source_id: str, target_id: str, edge_type: EdgeType,
                    properties: Dict[str, Any] = None, edge_id: str = None) -> Optional[Edge]:
        """
        Create a new edge between nodes.

        Args:
            source_id: Source node ID
            target_id: Target node ID
            edge_type: Edge type (e.g., EdgeType.PART_OF)
            properties: Edge attributes (optional)
            edge_id: Explicit identifier (optional, generated otherwise)

        Returns:
            Created edge or None if nodes not found
        """
        # Verify nodes exist
        source = self.get_node(source_id)
        target = self.get_node(target_id)

        if not source or not target:
            return None

        edge = Edge(
            source_id=source_id,
            target_id=target_id,
            type=edge_type,
            properties=properties or {},
        )
        if edge_id:
            edge.id = edge_id
        self.db.add(edge)
        self.db.commit()
        self.db.refresh(edge)
        return edge

    def get_edges_by_source(self, node_id: str) -> List[Edge]:
        return self.db.query(Edge).filter(Edge.source_id == node_id).order_by(Edge.id).all()

    def get_edges_by_target(self, node_id: str) -> List[Edge]:
        return self.db.query(Edge).filter(Edge.target_id == node_id).order_by(Edge.id).all()

    def count_nodes(self) -> int:
        return self.db.query(func.count(Node.id)).scalar() or 0

    def count_edges(self) -> int:
        return self.db.query(func.count(Edge.id)).scalar() or 0

    def node_type_counts(self) -> Dict[str, int]:
        """
        Get node counts grouped by type.

        Returns:
            Mapping of node type name to count
        """
        rows = self.db.query(Node.type, func.count(Node.id)).group_by(Node.type).all()
        return {node_type.value: count for node_type, count in rows}

    def edge_type_counts(self) -> Dict[str, int]:
        """
        Get edge counts grouped by type.

        Returns:
            Mapping of edge type name to count
        """
        rows = self.db.query(Edge.type, func.count(Edge.id)).group_by(Edge.type).all()
        return {edge_type.value: count for edge_type, count in rows}

    def connection_counts(self) -> List[int]:
        """
        Get the number of edge endpoints per connected node.

        Returns:
            One count per node that appears on at least one edge
        """
        counts: Dict[str, int] = {}
        for column in (Edge.source_id, Edge.target_id):
            rows = self.db.query(column, func.count(Edge.id)).group_by(column).all()
            for node_id, count in rows:
                counts[node_id] = counts.get(node_id, 0) + count
        return list(counts.values())

"""
Test configuration and fixtures for knowledge-graph-api tests.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.models import Base
from app.db.database import get_db
from app.dependencies import get_result_cache
from app.domain.entities import Edge, EdgeType, Node, NodeType
from app.domain.errors import NodeNotFoundError
from app.services.cache import CachePolicy, InMemoryResultCache


class FakeGraphAccessor:
    """Dict-backed graph accessor used by the algorithm tests."""

    def __init__(self):
        self.nodes = {}
        self.edges = {}

    def add_node(self, node_id, node_type=NodeType.CONCEPT, name=None, **properties):
        self.nodes[node_id] = Node(
            id=node_id, type=node_type, name=name or node_id, properties=properties
        )
        return self.nodes[node_id]

    def add_edge(self, source_id, target_id, edge_id=None, edge_type=EdgeType.PART_OF):
        edge_id = edge_id or f"{source_id}{target_id}"
        for node_id in (source_id, target_id):
            if node_id not in self.nodes:
                self.add_node(node_id)
        self.edges[edge_id] = Edge(
            id=edge_id, source_id=source_id, target_id=target_id, type=edge_type
        )
        return self.edges[edge_id]

    def remove_node(self, node_id):
        """Drop a node but keep its edges dangling."""
        self.nodes.pop(node_id, None)

    def get_node(self, node_id):
        return self.nodes.get(node_id)

    def get_nodes(self, node_ids):
        return {node_id: self.nodes[node_id] for node_id in node_ids if node_id in self.nodes}

    def neighbors(self, node_id):
        if node_id not in self.nodes:
            raise NodeNotFoundError(node_id)
        pairs = []
        for edge in self.edges.values():
            if node_id in (edge.source_id, edge.target_id):
                other = self.nodes.get(edge.other_end(node_id))
                if other is not None:
                    pairs.append((edge, other))
        pairs.sort(key=lambda pair: (pair[1].id, pair[0].id))
        return pairs


@pytest.fixture
def graph():
    """Empty in-memory graph."""
    return FakeGraphAccessor()


@pytest.fixture
def chain_graph(graph):
    """Directed chain A -> B -> C -> D."""
    graph.add_edge("A", "B")
    graph.add_edge("B", "C")
    graph.add_edge("C", "D")
    return graph


@pytest.fixture
def db_session():
    """Session bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def result_cache():
    return InMemoryResultCache(CachePolicy(default_ttl_seconds=300), max_size=100)


@pytest.fixture
def client(db_session, result_cache):
    """Test client wired to the in-memory database and a private cache."""
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_result_cache] = lambda: result_cache
    yield TestClient(app)
    app.dependency_overrides.clear()

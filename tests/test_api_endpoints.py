"""
Tests for FastAPI endpoints.
"""
from unittest.mock import Mock

import pytest

from app.main import app
from app.application.hybrid_search_service import HybridSearchService
from app.db.repositories import EmbeddingRepository, NodeRepository
from app.dependencies import get_hybrid_search_service, get_traversal_service
from app.domain.entities import EdgeType, NodeType
from app.domain.errors import QueryTimeoutError
from app.infrastructure.embedding_provider import HashingEmbeddingProvider


@pytest.fixture
def seeded(db_session):
    """Chain A -> B -> C -> D, an isolated node and a small searchable corpus."""
    repo = NodeRepository(db_session)
    names = {
        "A": "Graph databases",
        "B": "Neural networks",
        "C": "Python programming",
        "D": "Coffee brewing",
        "E": "Mountain hiking",
    }
    for node_id, name in names.items():
        repo.create_node(NodeType.CONCEPT, name, node_id=node_id)
    for source, target in (("A", "B"), ("B", "C"), ("C", "D")):
        repo.create_edge(source, target, EdgeType.PART_OF, edge_id=f"{source}{target}")

    embedder = HashingEmbeddingProvider()
    embeddings = EmbeddingRepository(db_session)
    for node_id, name in names.items():
        embeddings.create_embedding(embedder.embed(name), embedder.model_version, content=name, node_id=node_id)
    return repo


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_cache_health(self, client):
        response = client.get("/health/cache")

        assert response.status_code == 200
        assert response.json()["cache_stats"]["max_size"] == 100

    def test_database_health(self, client, seeded):
        response = client.get("/health/database")

        data = response.json()
        assert data["status"] == "healthy"
        assert data["nodes"] == 5
        assert data["edges"] == 3


class TestGraphEndpoints:
    """Test graph traversal endpoints."""

    def test_neighborhood(self, client, seeded):
        response = client.get("/graph/neighborhood/A", params={"hops": 2})

        assert response.status_code == 200
        data = response.json()
        assert {node["id"]: node["hop_level"] for node in data["nodes"]} == {"A": 0, "B": 1, "C": 2}
        assert {edge["id"]: edge["hop_level"] for edge in data["edges"]} == {"AB": 1, "BC": 2}
        assert data["nodes_per_hop"] == {"0": 1, "1": 1, "2": 1}
        assert data["total_nodes"] == 3
        assert data["nodes"][0]["type"] == "CONCEPT"

    def test_neighborhood_with_centrality(self, client, seeded):
        response = client.get("/graph/neighborhood/B", params={"hops": 1, "include_centrality": True})

        scores = {node["id"]: node["centrality"] for node in response.json()["nodes"]}
        assert scores == {"A": 0.5, "B": 1.0, "C": 0.5}

    def test_neighborhood_unknown_node(self, client, seeded):
        response = client.get("/graph/neighborhood/ghost")

        assert response.status_code == 404
        assert response.json()["detail"] == "Node not found: ghost"

    @pytest.mark.parametrize("hops", [0, 4])
    def test_neighborhood_hops_out_of_range(self, client, seeded, hops):
        response = client.get("/graph/neighborhood/A", params={"hops": hops})
        assert response.status_code == 400

    def test_path(self, client, seeded):
        response = client.get("/graph/path", params={"from": "A", "to": "D"})

        assert response.status_code == 200
        data = response.json()
        assert data["path"] == ["A", "B", "C", "D"]
        assert data["distance"] == 3
        assert data["from"] == "A"
        assert data["to"] == "D"

    def test_path_not_found_within_bound(self, client, seeded):
        response = client.get("/graph/path", params={"from": "A", "to": "D", "max_hops": 2})

        data = response.json()
        assert data["path"] == []
        assert data["distance"] == -1
        assert data["found"] is False

    def test_path_max_hops_limit(self, client, seeded):
        response = client.get("/graph/path", params={"from": "A", "to": "D", "max_hops": 11})
        assert response.status_code == 400

    def test_path_missing_parameter(self, client, seeded):
        assert client.get("/graph/path", params={"from": "A"}).status_code == 400

    def test_component(self, client, seeded):
        response = client.get("/graph/component/E")

        assert response.json() == {"node_id": "E", "component": ["E"], "size": 1}
        assert client.get("/graph/component/B").json()["component"] == ["A", "B", "C", "D"]

    def test_centrality(self, client, seeded):
        response = client.post("/graph/centrality", json=["A", "B", "C"])

        assert response.status_code == 200
        assert response.json() == {"A": 0.5, "B": 1.0, "C": 0.5}

    def test_centrality_empty_set(self, client, seeded):
        assert client.post("/graph/centrality", json=[]).status_code == 400

    def test_subgraph(self, client, seeded):
        response = client.post("/graph/subgraph", json=["A", "B", "ghost"])

        data = response.json()
        assert [node["id"] for node in data["nodes"]] == ["A", "B"]
        assert [edge["id"] for edge in data["edges"]] == ["AB"]
        assert data["center_node_id"] is None

    def test_subgraph_too_large(self, client, seeded):
        response = client.post("/graph/subgraph", json=[f"n{i}" for i in range(101)])
        assert response.status_code == 400

    def test_stats(self, client, seeded):
        data = client.get("/graph/stats").json()

        assert data["total_nodes"] == 5
        assert data["total_edges"] == 3
        assert data["node_types"] == {"CONCEPT": 5}
        assert data["avg_connections_per_node"] == 1.5

    def test_timeout_maps_to_504(self, client):
        service = Mock()
        service.get_connected_component.side_effect = QueryTimeoutError("Connected component search exceeded its deadline")
        app.dependency_overrides[get_traversal_service] = lambda: service

        response = client.get("/graph/component/A")

        assert response.status_code == 504


class TestSearchEndpoints:
    """Test search endpoints."""

    def test_hybrid_search(self, client, seeded):
        response = client.get("/search/hybrid", params={"q": "graph databases"})

        assert response.status_code == 200
        data = response.json()
        assert data["search_type"] == "HYBRID"
        assert data["results"][0]["entity_id"] == "A"
        assert data["results"][0]["score"] == pytest.approx(1.0)
        assert data["weights"] == {"fts_weight": 0.5, "vector_weight": 0.5}

    def test_hybrid_search_repeatable(self, client, seeded):
        first = client.get("/search/hybrid", params={"q": "neural networks"}).json()
        second = client.get("/search/hybrid", params={"q": "neural networks"}).json()

        assert first["results"] == second["results"]

    def test_hybrid_search_single_weight(self, client, seeded):
        data = client.get("/search/hybrid", params={"q": "graph", "fts_weight": 0.8}).json()

        assert data["weights"] == {"fts_weight": 0.8, "vector_weight": pytest.approx(0.2)}

    def test_hybrid_search_blank_query(self, client, seeded):
        response = client.get("/search/hybrid", params={"q": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Search query cannot be empty"

    def test_hybrid_search_bad_weight(self, client, seeded):
        assert client.get("/search/hybrid", params={"q": "graph", "fts_weight": 1.5}).status_code == 400

    def test_hybrid_search_bad_page(self, client, seeded):
        assert client.get("/search/hybrid", params={"q": "graph", "size": 0}).status_code == 400
        assert client.get("/search/hybrid", params={"q": "graph", "page": -1}).status_code == 400

    def test_adaptive_search(self, client, seeded):
        response = client.get("/search/adaptive", params={"q": "graph databases"})

        data = response.json()
        assert data["search_type"] == "ADAPTIVE"
        assert data["weights"]["fts_weight"] + data["weights"]["vector_weight"] == pytest.approx(1.0)

    def test_lexical_search(self, client, seeded):
        data = client.get("/search", params={"q": "python"}).json()

        assert data["search_type"] == "FULL_TEXT"
        assert [result["entity_id"] for result in data["results"]] == ["C"]

    def test_vector_search(self, client, seeded):
        data = client.get("/search/vector", params={"q": "coffee brewing", "threshold": 0.99}).json()

        assert data["search_type"] == "VECTOR"
        assert [result["entity_id"] for result in data["results"]] == ["D"]

    def test_adapter_failure_maps_to_502(self, client):
        lexical = Mock()
        lexical.search.side_effect = RuntimeError("index offline")
        app.dependency_overrides[get_hybrid_search_service] = lambda: HybridSearchService(lexical, Mock())

        response = client.get("/search/hybrid", params={"q": "graph"})

        assert response.status_code == 502
        assert response.json()["detail"] == "Lexical search failed: index offline"

    def test_lexical_search_type_filter(self, client, seeded):
        seeded.create_node(NodeType.PERSON, "Python developer", node_id="P")

        data = client.get("/search", params={"q": "python", "type": "PERSON"}).json()

        assert [result["entity_id"] for result in data["results"]] == ["P"]
        assert data["total_elements"] == 1
        assert data["type_facets"] == {"CONCEPT": 1, "PERSON": 1}

    def test_lexical_search_unknown_type(self, client, seeded):
        assert client.get("/search", params={"q": "python", "type": "SPACESHIP"}).status_code == 400

    def test_similar_nodes(self, client, seeded, db_session):
        embedder = HashingEmbeddingProvider()
        EmbeddingRepository(db_session).create_embedding(
            embedder.embed("Graph databases"), embedder.model_version, node_id="E"
        )

        response = client.get("/search/similar/A", params={"threshold": 0.99})

        assert response.status_code == 200
        data = response.json()
        assert [result["entity_id"] for result in data["results"]] == ["E"]
        assert data["query"] == "Similar to node: A"
        assert data["search_type"] == "VECTOR"

    def test_similar_nodes_unknown_node(self, client, seeded):
        response = client.get("/search/similar/ghost")

        assert response.status_code == 404
        assert response.json()["detail"] == "Node not found: ghost"

    def test_suggest(self, client, seeded):
        response = client.get("/search/suggest", params={"q": "graph databases"})

        assert response.status_code == 200
        assert response.json() == ["graph", "databases"]
        assert client.get("/search/suggest", params={"q": " "}).status_code == 400

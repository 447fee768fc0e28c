"""Tests for the breadth-first graph traversals."""
from __future__ import annotations

import pytest

from app.domain.errors import NodeNotFoundError, QueryTimeoutError
from app.domain.traversal import (
    Deadline,
    connected_component,
    expand_neighborhood,
    induced_degree_centrality,
    induced_subgraph,
    shortest_path,
)


class TestNeighborhoodExpansion:
    """Test hop-annotated neighborhood expansion."""

    def test_isolated_node(self, graph):
        """An isolated node yields only itself at hop 0."""
        graph.add_node("X")

        result = expand_neighborhood(graph, "X", 3)

        assert [(node.id, node.hop_level) for node in result.nodes] == [("X", 0)]
        assert result.edges == []
        assert result.nodes_per_hop == {0: 1}
        assert result.actual_hops == 0
        assert result.requested_hops == 3

    def test_directed_chain_two_hops(self, chain_graph):
        """Expansion on A->B->C->D stops at C and keeps edge levels."""
        result = expand_neighborhood(chain_graph, "A", 2)

        assert {node.id: node.hop_level for node in result.nodes} == {"A": 0, "B": 1, "C": 2}
        assert {edge.id: edge.hop_level for edge in result.edges} == {"AB": 1, "BC": 2}
        assert result.nodes_per_hop == {0: 1, 1: 1, 2: 1}
        assert result.actual_hops == 2
        assert result.total_nodes == 3
        assert result.total_edges == 2

    def test_edges_traversed_against_direction(self, chain_graph):
        """Edges are followed regardless of stored direction."""
        result = expand_neighborhood(chain_graph, "D", 1)

        assert {node.id for node in result.nodes} == {"D", "C"}
        edge = result.edges[0]
        assert (edge.source_id, edge.target_id) == ("C", "D")

    def test_actual_hops_stops_early(self, chain_graph):
        """actual_hops is the last level that discovered new nodes."""
        result = expand_neighborhood(chain_graph, "A", 3)
        assert result.actual_hops == 3

        result = expand_neighborhood(chain_graph, "B", 3)
        assert result.actual_hops == 2
        assert {node.id for node in result.nodes} == {"A", "B", "C", "D"}

    def test_cycle_visits_each_node_once(self, graph):
        """A cycle never repeats nodes or edges."""
        graph.add_edge("A", "B")
        graph.add_edge("B", "C")
        graph.add_edge("C", "A")

        result = expand_neighborhood(graph, "A", 3)

        ids = [node.id for node in result.nodes]
        assert len(ids) == len(set(ids)) == 3
        assert len({edge.id for edge in result.edges}) == len(result.edges)
        assert all(node.hop_level <= 3 for node in result.nodes)
        assert result.actual_hops == 1

    def test_edge_between_same_level_nodes(self, graph):
        """An edge joining two hop-1 nodes appears once, at hop 2."""
        graph.add_edge("A", "B")
        graph.add_edge("B", "C")
        graph.add_edge("C", "A")

        two_hops = expand_neighborhood(graph, "A", 2)
        one_hop = expand_neighborhood(graph, "A", 1)

        assert {edge.id: edge.hop_level for edge in two_hops.edges} == {"AB": 1, "CA": 1, "BC": 2}
        assert [edge.id for edge in two_hops.edges].count("BC") == 1
        assert {edge.id: edge.hop_level for edge in one_hop.edges} == {"AB": 1, "CA": 1}

    def test_self_loop_is_safe(self, graph):
        """A self-loop edge is returned once and adds no node."""
        graph.add_edge("A", "A", edge_id="loop")

        result = expand_neighborhood(graph, "A", 2)

        assert [node.id for node in result.nodes] == ["A"]
        assert [edge.id for edge in result.edges] == ["loop"]
        assert result.actual_hops == 0

    def test_parallel_edges_all_returned(self, graph):
        """Two edges between the same pair both appear."""
        graph.add_edge("A", "B", edge_id="e1")
        graph.add_edge("B", "A", edge_id="e2")

        result = expand_neighborhood(graph, "A", 1)

        assert sorted(edge.id for edge in result.edges) == ["e1", "e2"]
        assert result.nodes_per_hop == {0: 1, 1: 1}

    def test_missing_center_raises(self, graph):
        """A missing center node is a NodeNotFoundError."""
        with pytest.raises(NodeNotFoundError, match="Node not found: ghost"):
            expand_neighborhood(graph, "ghost", 1)

    def test_vanished_neighbor_is_skipped(self, chain_graph):
        """Dangling edges toward a removed node are ignored."""
        chain_graph.remove_node("C")

        result = expand_neighborhood(chain_graph, "A", 3)

        assert {node.id for node in result.nodes} == {"A", "B"}
        assert {edge.id for edge in result.edges} == {"AB"}

    def test_include_centrality(self, graph):
        """Centrality is computed over the returned node set."""
        graph.add_edge("A", "B")
        graph.add_edge("A", "C")

        result = expand_neighborhood(graph, "A", 1, include_centrality=True)

        scores = {node.id: node.centrality for node in result.nodes}
        assert scores == {"A": 1.0, "B": 0.5, "C": 0.5}

    def test_centrality_absent_by_default(self, chain_graph):
        result = expand_neighborhood(chain_graph, "A", 1)
        assert all(node.centrality is None for node in result.nodes)

    def test_expired_deadline_raises(self, chain_graph):
        """An expired deadline aborts between levels."""
        deadline = Deadline(0, clock=lambda: 100.0)

        with pytest.raises(QueryTimeoutError):
            expand_neighborhood(chain_graph, "A", 2, deadline=deadline)


class TestShortestPath:
    """Test bounded shortest path search."""

    def test_chain_path(self, chain_graph):
        result = shortest_path(chain_graph, "A", "D", 5)

        assert result.path == ["A", "B", "C", "D"]
        assert result.distance == 3
        assert result.found is True

    def test_path_beyond_max_hops(self, chain_graph):
        """A target further than max_hops is unreachable."""
        result = shortest_path(chain_graph, "A", "D", 2)

        assert result.path == []
        assert result.distance == -1
        assert result.found is False

    def test_path_at_exact_max_hops(self, chain_graph):
        assert shortest_path(chain_graph, "A", "D", 3).distance == 3

    def test_same_node(self, chain_graph):
        result = shortest_path(chain_graph, "B", "B", 1)

        assert result.path == ["B"]
        assert result.distance == 0

    def test_reverse_direction_same_distance(self, chain_graph):
        """Paths ignore direction, so reversing endpoints keeps the distance."""
        forward = shortest_path(chain_graph, "A", "D", 5)
        backward = shortest_path(chain_graph, "D", "A", 5)

        assert backward.path == ["D", "C", "B", "A"]
        assert forward.distance == backward.distance

    def test_disconnected_target(self, chain_graph):
        chain_graph.add_node("Z")
        assert shortest_path(chain_graph, "A", "Z", 10).path == []

    def test_tie_break_is_deterministic(self, graph):
        """Equal-length paths resolve through the smaller neighbor id."""
        graph.add_edge("S", "Y")
        graph.add_edge("S", "X")
        graph.add_edge("Y", "T")
        graph.add_edge("X", "T")

        assert shortest_path(graph, "S", "T", 5).path == ["S", "X", "T"]

    def test_missing_endpoint_raises(self, chain_graph):
        with pytest.raises(NodeNotFoundError):
            shortest_path(chain_graph, "A", "ghost", 5)
        with pytest.raises(NodeNotFoundError):
            shortest_path(chain_graph, "ghost", "A", 5)


class TestConnectedComponent:
    """Test connected component discovery."""

    def test_component_ignores_direction(self, chain_graph):
        chain_graph.add_edge("X", "Y")

        assert connected_component(chain_graph, "C") == {"A", "B", "C", "D"}
        assert connected_component(chain_graph, "Y") == {"X", "Y"}

    def test_isolated_node(self, graph):
        graph.add_node("solo")
        assert connected_component(graph, "solo") == {"solo"}

    def test_missing_node_raises(self, graph):
        with pytest.raises(NodeNotFoundError):
            connected_component(graph, "ghost")

    def test_expired_deadline_raises(self, chain_graph):
        with pytest.raises(QueryTimeoutError):
            connected_component(chain_graph, "A", deadline=Deadline(0, clock=lambda: 5.0))


class TestCentrality:
    """Test induced degree centrality."""

    def test_star_center_scores_one(self, graph):
        for leaf in ("B", "C", "D"):
            graph.add_edge("A", leaf)

        scores = induced_degree_centrality(graph, {"A", "B", "C", "D"})

        assert scores["A"] == 1.0
        assert scores["B"] == pytest.approx(1 / 3)

    def test_edges_outside_set_are_ignored(self, chain_graph):
        """Only edges between members count."""
        scores = induced_degree_centrality(chain_graph, {"A", "D"})
        assert scores == {"A": 0.0, "D": 0.0}

    def test_parallel_edges_count_once(self, graph):
        graph.add_edge("A", "B", edge_id="e1")
        graph.add_edge("B", "A", edge_id="e2")
        graph.add_node("C")

        scores = induced_degree_centrality(graph, ["A", "B", "C"])

        assert scores == {"A": 0.5, "B": 0.5, "C": 0.0}

    def test_single_member_scores_zero(self, graph):
        graph.add_node("A")
        assert induced_degree_centrality(graph, ["A"]) == {"A": 0.0}

    def test_unknown_member_scores_zero(self, graph):
        graph.add_edge("A", "B")

        scores = induced_degree_centrality(graph, ["A", "B", "ghost"])

        assert scores == {"A": 0.5, "B": 0.5, "ghost": 0.0}


class TestInducedSubgraph:
    """Test subgraph extraction."""

    def test_extracts_member_edges(self, chain_graph):
        result = induced_subgraph(chain_graph, ["A", "B", "D"])

        assert [node.id for node in result.nodes] == ["A", "B", "D"]
        assert [edge.id for edge in result.edges] == ["AB"]
        assert result.center_node_id is None
        assert result.nodes_per_hop == {0: 3}
        assert all(node.hop_level == 0 for node in result.nodes)

    def test_nodes_carry_centrality(self, chain_graph):
        result = induced_subgraph(chain_graph, ["A", "B", "C"])

        assert {node.id: node.centrality for node in result.nodes} == {"A": 0.5, "B": 1.0, "C": 0.5}

    def test_unknown_ids_skipped(self, chain_graph):
        result = induced_subgraph(chain_graph, ["A", "ghost"])

        assert [node.id for node in result.nodes] == ["A"]
        assert result.edges == []

"""Tests for the graph module."""

import networkx as nx
import pytest

from girvan_newman import Graph
from tests.conftest import make_graph


class TestGraph:
    """Tests for the directed weighted graph."""

    def test_new_graph_is_isolated(self):
        g = Graph(3)
        assert g.num_vertices() == 3
        assert g.number_of_edges() == 0
        assert g.out_incident(0) == []

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            Graph(-1)

    def test_insert_and_query(self):
        g = make_graph(3, [(0, 2, 5), (0, 1, 2)])
        assert g.is_adjacent(0, 1)
        assert not g.is_adjacent(1, 0)
        assert g.weight(0, 2) == 5
        assert g.weight(2, 0) is None
        assert g.out_incident(0) == [(1, 2), (2, 5)]
        assert g.in_incident(2) == [(0, 5)]

    def test_insert_rejects_bad_vertex(self):
        g = Graph(2)
        with pytest.raises(ValueError):
            g.insert_edge(0, 2)
        with pytest.raises(ValueError):
            g.insert_edge(-1, 0)

    def test_insert_rejects_non_positive_weight(self):
        g = Graph(2)
        with pytest.raises(ValueError):
            g.insert_edge(0, 1, 0)

    def test_remove_edge_is_idempotent(self):
        g = make_graph(2, [(0, 1)])
        g.remove_edge(0, 1)
        g.remove_edge(0, 1)
        g.remove_edge(1, 0)
        assert g.number_of_edges() == 0

    def test_copy_is_independent(self, path_graph):
        clone = path_graph.copy()
        clone.remove_edge(1, 2)
        assert path_graph.is_adjacent(1, 2)
        assert not clone.is_adjacent(1, 2)

    def test_edges_sorted(self, path_graph):
        assert path_graph.edges() == [(0, 1, 1), (1, 2, 1), (2, 3, 1)]


class TestNetworkXInterop:
    """Tests for conversion to and from NetworkX."""

    def test_from_directed_networkx(self):
        G = nx.DiGraph()
        G.add_edge('b', 'c', weight=3)
        G.add_edge('a', 'b')
        g = Graph.from_networkx(G)

        assert g.labels == ['a', 'b', 'c']
        assert g.is_adjacent(0, 1)
        assert g.weight(1, 2) == 3
        assert not g.is_adjacent(1, 0)
        assert g.label_of(2) == 'c'

    def test_undirected_edges_become_two_arcs(self):
        g = Graph.from_networkx(nx.path_graph(3))
        assert g.number_of_edges() == 4
        assert g.is_adjacent(1, 0) and g.is_adjacent(0, 1)

    def test_to_networkx_uses_labels(self):
        G = nx.DiGraph([('x', 'y')])
        back = Graph.from_networkx(G).to_networkx()
        assert set(back.edges()) == {('x', 'y')}
        assert back['x']['y']['weight'] == 1

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            Graph.from_networkx(None)

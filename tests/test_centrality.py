"""Tests for edge betweenness centrality."""

import numpy as np
import pytest

from girvan_newman import (
    NO_EDGE,
    Graph,
    edge_betweenness_centrality,
    floyd_warshall,
)


class TestEdgeBetweenness:
    """Tests for edge betweenness values."""

    def test_path_graph_values(self, path_graph):
        evs = edge_betweenness_centrality(path_graph)
        assert evs.values[0][1] == 3
        assert evs.values[1][2] == 4
        assert evs.values[2][3] == 3

    def test_non_edges_are_sentinel(self, path_graph):
        evs = edge_betweenness_centrality(path_graph)
        edges = {(0, 1), (1, 2), (2, 3)}
        for i in range(4):
            for j in range(4):
                if (i, j) not in edges:
                    assert evs.values[i][j] == NO_EDGE

    def test_edgeless_graph_is_all_sentinel(self, isolated_pair):
        evs = edge_betweenness_centrality(isolated_pair)
        assert (evs.values == NO_EDGE).all()
        assert evs.max_value() is None
        assert evs.as_dict() == {}

    def test_unused_edge_scores_zero(self, shortcut_graph):
        evs = edge_betweenness_centrality(shortcut_graph)
        assert evs.values[0][2] == 0
        assert evs.values[0][1] == 2
        assert evs.values[1][2] == 2

    def test_sentinel_iff_not_an_edge(self, random_graph):
        evs = edge_betweenness_centrality(random_graph)
        n = random_graph.num_vertices()
        for i in range(n):
            for j in range(n):
                is_edge = i != j and random_graph.is_adjacent(i, j)
                assert (evs.values[i][j] == NO_EDGE) == (not is_edge)
                if is_edge:
                    assert evs.values[i][j] >= 0

    def test_total_equals_path_lengths(self, random_graph):
        sps = floyd_warshall(random_graph)
        evs = edge_betweenness_centrality(random_graph, sps)
        n = sps.num_nodes
        hops = sum(len(sps.edges_on_path(i, j)) for i in range(n) for j in range(n) if i != j)
        assert sum(evs.as_dict().values()) == hops

    def test_precomputed_paths_give_same_result(self, random_graph):
        direct = edge_betweenness_centrality(random_graph)
        reused = edge_betweenness_centrality(random_graph, floyd_warshall(random_graph))
        np.testing.assert_array_equal(direct.values, reused.values)

    def test_graph_not_modified(self, path_graph):
        edge_betweenness_centrality(path_graph)
        assert path_graph.number_of_edges() == 3

    def test_mismatched_paths_rejected(self, path_graph):
        with pytest.raises(ValueError):
            edge_betweenness_centrality(path_graph, floyd_warshall(Graph(2)))

    def test_sink_vertex_contributes_nothing(self):
        g = Graph(3)
        g.insert_edge(0, 1)
        evs = edge_betweenness_centrality(g)
        assert evs.as_dict() == {(0, 1): 1.0}

    def test_helpers(self, path_graph):
        evs = edge_betweenness_centrality(path_graph)
        assert evs.max_value() == 4
        assert evs.edges_with_value(3) == [(0, 1), (2, 3)]
        assert evs.as_dict() == {(0, 1): 3.0, (1, 2): 4.0, (2, 3): 3.0}

    def test_release(self, path_graph):
        evs = edge_betweenness_centrality(path_graph)
        evs.release()
        assert evs.num_nodes == 0
        assert evs.values.size == 0

    def test_missing_graph(self):
        with pytest.raises(ValueError):
            edge_betweenness_centrality(None)

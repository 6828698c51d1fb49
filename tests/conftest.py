"""Shared test fixtures - sample graphs."""

import numpy as np
import pytest

from girvan_newman import Graph


def make_graph(n, edges):
    """Graph with n vertices and (v, w) or (v, w, weight) edges."""
    g = Graph(n)
    for edge in edges:
        g.insert_edge(*edge)
    return g


def bidirectional(n, pairs):
    """Graph where every pair is joined in both directions with weight 1."""
    g = Graph(n)
    for v, w in pairs:
        g.insert_edge(v, w)
        g.insert_edge(w, v)
    return g


@pytest.fixture
def path_graph():
    """0 -> 1 -> 2 -> 3 with unit weights."""
    return make_graph(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def isolated_pair():
    """Two vertices, no edges."""
    return Graph(2)


@pytest.fixture
def shortcut_graph():
    """A heavy direct edge 0 -> 2 that loses to the route through 1."""
    return make_graph(3, [(0, 1, 1), (1, 2, 1), (0, 2, 10)])


@pytest.fixture
def two_triangles():
    """Two bidirectional triangles {0,1,2} and {3,4,5} bridged by 2 <-> 3."""
    return bidirectional(6, [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5), (2, 3)])


@pytest.fixture
def random_graph():
    """Deterministic sparse directed graph with integer weights."""
    rng = np.random.RandomState(7)
    n = 8
    g = Graph(n)
    for v in range(n):
        for w in range(n):
            if v != w and rng.rand() < 0.3:
                g.insert_edge(v, w, int(rng.randint(1, 6)))
    return g

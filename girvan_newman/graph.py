"""
graph.py - Directed Weighted Graph Module

This module provides the graph that the Girvan-Newman pipeline operates on:
a directed, weighted graph whose vertices are the dense integer ids
0..N-1. Storage is delegated to a NetworkX DiGraph with a 'weight' edge
attribute; this class only adds the small vertex-id oriented interface the
algorithms need.

Operations used by the algorithms:
    - num_vertices(): vertex count
    - is_adjacent(v, w): directed adjacency test
    - out_incident(v): outgoing (destination, weight) pairs
    - remove_edge(v, w): idempotent edge removal

Graphs with arbitrary node labels can be brought in with from_networkx(),
which relabels them to dense ids and remembers the original labels.

Author: Girvan-Newman Analysis Pipeline
"""

import networkx as nx
import numpy as np
from typing import Any, Dict, Hashable, List, Optional, Tuple


class Graph:
    """
    Directed weighted graph over the vertices 0..N-1.

    Parameters
    ----------
    num_vertices : int
        Number of vertices. Vertices are created isolated.

    Attributes
    ----------
    labels : List[Hashable]
        Original node label of each vertex id. Defaults to the ids
        themselves.

    Notes
    -----
    CommunityDetector removes edges from the graph it is given. Pass
    graph.copy() if the original must be preserved.
    """

    def __init__(self, num_vertices: int):
        if num_vertices < 0:
            raise ValueError(f"num_vertices must be non-negative, got {num_vertices}")
        self._G = nx.DiGraph()
        self._G.add_nodes_from(range(num_vertices))
        self.labels: List[Hashable] = list(range(num_vertices))

    def __repr__(self) -> str:
        return (f"Graph(num_vertices={self.num_vertices()}, "
                f"num_edges={self.number_of_edges()})")

    def _check_vertex(self, v: int) -> None:
        if (isinstance(v, bool) or not isinstance(v, (int, np.integer))
                or not 0 <= v < self.num_vertices()):
            raise ValueError(f"Vertex {v!r} not in graph "
                             f"(valid ids are 0..{self.num_vertices() - 1})")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def num_vertices(self) -> int:
        return self._G.number_of_nodes()

    def number_of_edges(self) -> int:
        return self._G.number_of_edges()

    def is_adjacent(self, v: int, w: int) -> bool:
        """Return True if the directed edge v -> w exists."""
        return self._G.has_edge(v, w)

    def weight(self, v: int, w: int) -> Optional[float]:
        """Weight of edge v -> w, or None if there is no such edge."""
        data = self._G.get_edge_data(v, w)
        return None if data is None else data['weight']

    def out_incident(self, v: int) -> List[Tuple[int, float]]:
        """
        Outgoing edges of a vertex.

        Parameters
        ----------
        v : int
            Source vertex.

        Returns
        -------
        List[Tuple[int, float]]
            (destination, weight) pairs sorted by destination.
        """
        self._check_vertex(v)
        return sorted((w, data['weight']) for w, data in self._G.succ[v].items())

    def in_incident(self, v: int) -> List[Tuple[int, float]]:
        """(source, weight) pairs of the edges entering v, sorted by source."""
        self._check_vertex(v)
        return sorted((u, data['weight']) for u, data in self._G.pred[v].items())

    def edges(self) -> List[Tuple[int, int, float]]:
        """All edges as sorted (source, destination, weight) triples."""
        return sorted((v, w, data['weight']) for v, w, data in self._G.edges(data=True))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert_edge(self, v: int, w: int, weight: float = 1) -> None:
        """
        Insert (or overwrite) the directed edge v -> w.

        Parameters
        ----------
        v, w : int
            Endpoints. Both must be valid vertex ids.
        weight : float
            Positive edge weight.

        Raises
        ------
        ValueError
            If a vertex id is out of range or the weight is not positive.
        """
        self._check_vertex(v)
        self._check_vertex(w)
        if not weight > 0:
            raise ValueError(f"Edge weight must be positive, got {weight!r}")
        self._G.add_edge(v, w, weight=weight)

    def remove_edge(self, v: int, w: int) -> None:
        """Remove the directed edge v -> w. Does nothing if it is absent."""
        if self._G.has_edge(v, w):
            self._G.remove_edge(v, w)

    def copy(self) -> 'Graph':
        """Independent copy of the graph, labels included."""
        g = Graph.__new__(Graph)
        g._G = self._G.copy()
        g.labels = list(self.labels)
        return g

    # ------------------------------------------------------------------
    # NetworkX interop
    # ------------------------------------------------------------------

    def label_of(self, v: int) -> Hashable:
        """Original node label of vertex id v."""
        return self.labels[v]

    @classmethod
    def from_networkx(cls, G: nx.Graph, weight: str = 'weight') -> 'Graph':
        """
        Build a Graph from any NetworkX graph.

        Nodes are relabelled to dense ids in sorted order (insertion order if
        the labels cannot be sorted). Undirected edges become a pair of
        directed edges. Missing weights default to 1.

        Parameters
        ----------
        G : nx.Graph
            Source graph (directed or undirected).
        weight : str
            Edge attribute holding the weight.

        Returns
        -------
        Graph
            New graph with `labels` set to the original node labels.
        """
        if G is None:
            raise ValueError("Graph must not be None")

        nodes = list(G.nodes())
        try:
            nodes = sorted(nodes)
        except TypeError:
            pass
        index: Dict[Any, int] = {node: idx for idx, node in enumerate(nodes)}

        graph = cls(len(nodes))
        graph.labels = nodes
        for u, v, data in G.edges(data=True):
            w = data.get(weight, 1)
            if index[u] == index[v]:
                continue
            graph.insert_edge(index[u], index[v], w)
            if not G.is_directed():
                graph.insert_edge(index[v], index[u], w)
        return graph

    def to_networkx(self) -> nx.DiGraph:
        """Copy of the graph as a DiGraph keyed by the original labels."""
        G = nx.DiGraph()
        G.add_nodes_from(self.labels)
        for v, w, wt in self.edges():
            G.add_edge(self.labels[v], self.labels[w], weight=wt)
        return G


def show_graph(graph: Graph) -> None:
    """Print the edge list of a graph (debugging aid)."""
    print(f"Number of vertices: {graph.num_vertices()}")
    print(f"Number of edges: {graph.number_of_edges()}")
    for v, w, wt in graph.edges():
        print(f"   {v} -> {w} (weight {wt})")

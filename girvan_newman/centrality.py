"""
centrality.py - Edge Betweenness Centrality Module

This module computes count-based edge betweenness centrality for a directed
weighted graph from its all-pairs shortest paths.

Theoretical Background:
-----------------------
The edge betweenness of a directed edge (u, v) is the number of shortest
paths, taken over all ordered vertex pairs (i, j), that traverse (u, v).
Exactly one shortest path is counted per reachable pair: the one encoded by
the next-hop matrix of the Floyd-Warshall result.

Edges that connect otherwise separate groups of vertices carry many
shortest paths and therefore score highly. Girvan-Newman removes them to
expose community structure.

Computational Complexity: O(N^3) for the shortest paths plus O(N^3) for
walking every path (each walk is at most N - 1 hops).

Author: Girvan-Newman Analysis Pipeline
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .graph import Graph
from .shortest_paths import NO_HOP, ShortestPaths, _check_graph, floyd_warshall


# Value of a cell that is not a usable edge.
NO_EDGE = -1.0


@dataclass
class EdgeValues:
    """
    Container for edge betweenness results.

    Attributes
    ----------
    num_nodes : int
        Number of vertices in the graph.
    values : np.ndarray
        (N, N) float matrix. values[i][j] is the number of shortest paths
        using edge i -> j, or NO_EDGE if i == j, the edge does not exist,
        or j is unreachable from i.
    """
    num_nodes: int
    values: np.ndarray

    def __str__(self) -> str:
        return (f"EdgeValues(num_nodes={self.num_nodes}, "
                f"edges={int((self.values != NO_EDGE).sum())}, max={self.max_value()})")

    def max_value(self) -> Optional[float]:
        """Largest betweenness of any edge, or None if there are no edges."""
        valid = self.values[self.values != NO_EDGE]
        if valid.size == 0:
            return None
        return float(valid.max())

    def edges_with_value(self, value: float) -> List[Tuple[int, int]]:
        """All edges (i, j) whose betweenness equals value, in row-major order."""
        rows, cols = np.nonzero(self.values == value)
        return [(int(i), int(j)) for i, j in zip(rows, cols)]

    def as_dict(self) -> Dict[Tuple[int, int], float]:
        """Mapping of every existing edge to its betweenness."""
        rows, cols = np.nonzero(self.values != NO_EDGE)
        return {(int(i), int(j)): float(self.values[i][j]) for i, j in zip(rows, cols)}

    def release(self) -> None:
        """Drop the value matrix. The object is empty afterwards."""
        self.num_nodes = 0
        self.values = np.empty((0, 0), dtype=float)


def _credit_path(values: np.ndarray, sps: ShortestPaths, i: int, j: int) -> None:
    """Add one to every edge on the shortest path from i to j."""
    current = i
    for _ in range(sps.num_nodes):
        hop = int(sps.next[current][j])
        values[current][hop] += 1
        if hop == j:
            return
        current = hop
    raise RuntimeError(f"Next-hop matrix has a cycle on the path {i} -> {j}")


def edge_betweenness_centrality(graph: Graph,
                                sps: Optional[ShortestPaths] = None) -> EdgeValues:
    """
    Compute the edge betweenness centrality of every edge in a graph.

    Parameters
    ----------
    graph : Graph
        Directed weighted graph. Not modified.
    sps : ShortestPaths, optional
        Precomputed shortest paths for this graph. Computed with
        floyd_warshall() if omitted.

    Returns
    -------
    EdgeValues
        Betweenness matrix. Cells that are not edges hold NO_EDGE (-1).

    Raises
    ------
    ValueError
        If graph is None, or sps was computed for a different vertex count.
    TypeError
        If graph is not a Graph.

    Example
    -------
    >>> g = Graph(4)
    >>> for v in range(3):
    ...     g.insert_edge(v, v + 1)
    >>> evs = edge_betweenness_centrality(g)
    >>> float(evs.values[1][2])
    4.0
    """
    _check_graph(graph)

    n = graph.num_vertices()
    if sps is None:
        sps = floyd_warshall(graph)
    elif sps.num_nodes != n:
        raise ValueError(f"ShortestPaths has {sps.num_nodes} nodes, graph has {n}")

    values = np.zeros((n, n), dtype=float)

    for i in range(n):
        for j in range(n):
            if i == j or sps.next[i][j] == NO_HOP:
                continue
            _credit_path(values, sps, i, j)

    # Betweenness only means something on edges that exist. Pairs that are
    # the same vertex or mutually unreachable are never edges here.
    is_edge = np.zeros((n, n), dtype=bool)
    for v in range(n):
        for w, _ in graph.out_incident(v):
            is_edge[v][w] = True
    np.fill_diagonal(is_edge, False)
    values[~is_edge | ~np.isfinite(sps.dist)] = NO_EDGE

    return EdgeValues(num_nodes=n, values=values)


def show_edge_values(evs: EdgeValues) -> None:
    """Print the betweenness of every edge (debugging aid)."""
    for (i, j), value in sorted(evs.as_dict().items()):
        print(f"   {i} -> {j}: {value:g}")

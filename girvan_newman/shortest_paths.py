"""
shortest_paths.py - All-Pairs Shortest Paths Module

This module computes the shortest directed path between every ordered pair
of vertices with the Floyd-Warshall algorithm, together with a next-hop
matrix from which each path can be walked forwards.

Theoretical Background:
-----------------------
Floyd-Warshall considers every vertex k in turn as a possible intermediate:

    dist[i][j] = min(dist[i][j], dist[i][k] + dist[k][j])

When routing through k is strictly shorter, the first hop of the i -> j
path becomes the first hop of the i -> k path:

    next[i][j] = next[i][k]

so next[i][j] is always the vertex to move to first when travelling from
i towards j. Walking next from i therefore reaches j along exactly the
edges of the shortest path.

Computational Complexity: O(N^3) time, O(N^2) space per matrix.

Author: Girvan-Newman Analysis Pipeline
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Tuple

from .graph import Graph


# Distance of an unreachable pair. Infinite arithmetic never overflows.
INFINITY = np.inf

# next[i][j] when there is no hop: i == j or j unreachable from i.
NO_HOP = -1


@dataclass
class ShortestPaths:
    """
    Container for all-pairs shortest path results.

    Attributes
    ----------
    num_nodes : int
        Number of vertices in the graph the paths were computed on.
    dist : np.ndarray
        (N, N) float matrix. dist[i][j] is the shortest distance from i to
        j, INFINITY if j is unreachable from i, and 0 on the diagonal.
    next : np.ndarray
        (N, N) int matrix. next[i][j] is the first hop on the shortest
        path from i to j, or NO_HOP.
    """
    num_nodes: int
    dist: np.ndarray
    next: np.ndarray

    def __str__(self) -> str:
        reachable = int(np.isfinite(self.dist).sum() - self.num_nodes)
        return f"ShortestPaths(num_nodes={self.num_nodes}, reachable_pairs={reachable})"

    def path(self, i: int, j: int) -> List[int]:
        """
        Vertices on the shortest path from i to j, both ends included.

        Returns an empty list when j is unreachable from i, and [i] when
        i == j.
        """
        if i == j:
            return [i]
        if self.next[i][j] == NO_HOP:
            return []

        path = [i]
        current = i
        # At most N - 1 hops on a simple path.
        for _ in range(self.num_nodes):
            current = int(self.next[current][j])
            path.append(current)
            if current == j:
                return path
        raise RuntimeError(f"Next-hop matrix has a cycle on the path {i} -> {j}")

    def edges_on_path(self, i: int, j: int) -> List[Tuple[int, int]]:
        """Directed edges traversed by the shortest path from i to j."""
        path = self.path(i, j)
        return list(zip(path, path[1:]))

    def release(self) -> None:
        """Drop both matrices. The object is empty afterwards."""
        self.num_nodes = 0
        self.dist = np.empty((0, 0), dtype=float)
        self.next = np.empty((0, 0), dtype=int)


def _check_graph(graph: Graph) -> None:
    if graph is None:
        raise ValueError("Graph must not be None")
    if not isinstance(graph, Graph):
        raise TypeError(f"Expected a Graph, got {type(graph).__name__}")


def floyd_warshall(graph: Graph) -> ShortestPaths:
    """
    Find the shortest paths between all ordered pairs of vertices.

    Parameters
    ----------
    graph : Graph
        Directed weighted graph. Not modified.

    Returns
    -------
    ShortestPaths
        Distance and next-hop matrices.

    Raises
    ------
    ValueError
        If graph is None.
    TypeError
        If graph is not a Graph.

    Example
    -------
    >>> g = Graph(3)
    >>> g.insert_edge(0, 1); g.insert_edge(1, 2)
    >>> sps = floyd_warshall(g)
    >>> float(sps.dist[0][2]), int(sps.next[0][2])
    (2.0, 1)

    Notes
    -----
    - Self-loops never shorten a path and are ignored; dist[i][i] is 0.
    - Ties keep the path found first (strict improvement only), so the
      result is deterministic for a given graph.
    """
    _check_graph(graph)

    n = graph.num_vertices()
    dist = np.full((n, n), INFINITY, dtype=float)
    nxt = np.full((n, n), NO_HOP, dtype=int)
    np.fill_diagonal(dist, 0.0)

    # Direct edges
    for v in range(n):
        for w, weight in graph.out_incident(v):
            if v == w:
                continue
            dist[v][w] = weight
            nxt[v][w] = w

    # Relax through each intermediate k. Row k and column k cannot change
    # while k is the intermediate, so a whole (i, j) sweep is done at once.
    for k in range(n):
        via_k = dist[:, k, np.newaxis] + dist[np.newaxis, k, :]
        shorter = np.isfinite(via_k) & (via_k < dist)
        if not shorter.any():
            continue
        dist[shorter] = via_k[shorter]
        nxt[shorter] = np.broadcast_to(nxt[:, k, np.newaxis], (n, n))[shorter]

    nxt[(dist == 0) | ~np.isfinite(dist)] = NO_HOP

    return ShortestPaths(num_nodes=n, dist=dist, next=nxt)


def show_shortest_paths(sps: ShortestPaths) -> None:
    """Print every distance in a ShortestPaths structure (debugging aid)."""
    for i in range(sps.num_nodes):
        for j in range(sps.num_nodes):
            d = sps.dist[i][j]
            dist_str = "inf" if not np.isfinite(d) else f"{d:g}"
            print(f"   {i} -> {j}: dist={dist_str}, next={sps.next[i][j]}")

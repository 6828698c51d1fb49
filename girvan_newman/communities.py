"""
communities.py - Girvan-Newman Community Detection Module

This module implements the Girvan-Newman divisive algorithm on a directed
weighted graph and assembles the splits it discovers into a binary
dendrogram.

Algorithm:
    1. Compute edge betweenness centrality (centrality.py)
    2. Remove every edge sharing the highest betweenness
    3. Recompute the components of the pruned graph
    4. Record the assignment only if the component count went up
    5. Repeat until the graph is edgeless or fully separated

The recorded rows of component assignments are then walked top-down to
build the dendrogram.

Evaluation Metrics:
    - Modularity (Q): Quality of a dendrogram cut based on edge density
    - NMI: Normalized Mutual Information between partitions
    - ARI: Adjusted Rand Index for clustering similarity

Author: Girvan-Newman Analysis Pipeline
"""

import networkx as nx
import numpy as np
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple, Union
import warnings

from sklearn.metrics import adjusted_rand_score, normalized_mutual_info_score

from .centrality import edge_betweenness_centrality
from .dendrogram import Dendrogram
from .graph import Graph
from .shortest_paths import _check_graph


# Ways of growing a component during the depth-first search:
#   'reachability' - follow outgoing edges only, seeding from each
#                    unassigned vertex in id order
#   'weak'         - follow edges in both directions (weak components)
CONNECTIVITY_MODES = ('reachability', 'weak')

UNASSIGNED = -1


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def partition_to_dict(partition: List[Set]) -> Dict[Any, int]:
    """
    Convert a list of sets (partition) to a dict mapping node -> community_id.

    Parameters
    ----------
    partition : List[Set]
        List where each set contains nodes in a community.

    Returns
    -------
    Dict[Any, int]
        Mapping of node to community ID (0-indexed).
    """
    result = {}
    for comm_id, community in enumerate(partition):
        for node in community:
            result[node] = comm_id
    return result


def dict_to_partition(node_to_comm: Dict[Any, int]) -> List[Set]:
    """
    Convert a dict mapping node -> community_id to list of sets.

    Parameters
    ----------
    node_to_comm : Dict[Any, int]
        Mapping of node to community ID.

    Returns
    -------
    List[Set]
        List where each set contains nodes in a community.
    """
    communities = defaultdict(set)
    for node, comm_id in node_to_comm.items():
        communities[comm_id].add(node)
    return list(communities.values())


def get_labels_from_partition(partition: Dict[Any, int], node_order: List) -> List[int]:
    """Convert partition dict to ordered list of labels for sklearn metrics."""
    return [partition.get(node, -1) for node in node_order]


# ============================================================================
# CONNECTED COMPONENTS
# ============================================================================

def find_components(graph: Graph,
                    connectivity: str = 'reachability') -> Tuple[np.ndarray, int]:
    """
    Assign every vertex to a component by depth-first search.

    Vertices are visited in id order; each vertex still unassigned seeds a
    new component that collects every unassigned vertex it can reach.

    Parameters
    ----------
    graph : Graph
        The graph to scan.
    connectivity : str
        'reachability' follows outgoing edges, 'weak' follows both
        directions.

    Returns
    -------
    Tuple[np.ndarray, int]
        - labels: component id of each vertex (ids are 0..count-1, in
          seed order)
        - count: number of components
    """
    if connectivity not in CONNECTIVITY_MODES:
        raise ValueError(f"Unknown connectivity: {connectivity}. "
                         f"Use one of {CONNECTIVITY_MODES}.")

    n = graph.num_vertices()
    labels = np.full(n, UNASSIGNED, dtype=int)
    comp_id = 0

    for seed in range(n):
        if labels[seed] != UNASSIGNED:
            continue
        labels[seed] = comp_id
        stack = [seed]
        while stack:
            v = stack.pop()
            neighbours = [w for w, _ in graph.out_incident(v)]
            if connectivity == 'weak':
                neighbours.extend(u for u, _ in graph.in_incident(v))
            for w in neighbours:
                if labels[w] == UNASSIGNED:
                    labels[w] = comp_id
                    stack.append(w)
        comp_id += 1

    return labels, comp_id


class ComponentTable:
    """
    Rows of component assignments, one per genuine split.

    Row r maps each vertex to its component id after the r-th split (row 0
    is the unmodified graph). A row is only kept when it has strictly more
    components than the row before it.
    """

    def __init__(self, num_vertices: int):
        self.num_vertices = num_vertices
        self.rows: List[np.ndarray] = []
        self.counts: List[int] = []

    def __len__(self) -> int:
        return len(self.rows)

    def try_record(self, labels: np.ndarray) -> bool:
        """Append labels as a new row if they add components. Returns whether they did."""
        count = len(np.unique(labels))
        if self.counts and count <= self.counts[-1]:
            return False
        self.rows.append(np.asarray(labels, dtype=int).copy())
        self.counts.append(count)
        return True

    def split_members(self, members: List[int], row: int) -> Tuple[List[List[int]], int]:
        """
        Find the first row at or after `row` that separates `members`.

        Parameters
        ----------
        members : List[int]
            Sorted vertex ids of one community.
        row : int
            First row to look at.

        Returns
        -------
        Tuple[List[List[int]], int]
            - groups: members grouped by component id on the separating row,
              ordered by smallest member
            - next_row: the row after the separating one
            If no row separates them, every member becomes its own group.
        """
        for r in range(row, len(self.rows)):
            groups: Dict[int, List[int]] = {}
            for v in members:
                groups.setdefault(int(self.rows[r][v]), []).append(v)
            if len(groups) > 1:
                return list(groups.values()), r + 1
        return [[v] for v in members], len(self.rows)


# ============================================================================
# GIRVAN-NEWMAN ALGORITHM
# ============================================================================

@dataclass
class RemovalStep:
    """One round of edge removal."""
    step: int
    max_value: float
    removed_edges: List[Tuple[int, int]]
    num_components: int
    recorded: bool

    def __str__(self) -> str:
        status = "split" if self.recorded else "no split"
        return (f"Step {self.step}: removed {len(self.removed_edges)} edge(s) "
                f"with betweenness {self.max_value:g} -> "
                f"{self.num_components} components ({status})")


class CommunityDetector:
    """
    Girvan-Newman community detection producing a binary dendrogram.

    Parameters
    ----------
    graph : Graph
        The graph to analyse. Edges are removed from it while the detector
        runs; pass graph.copy() to keep the original.
    connectivity : str
        Component definition used to detect splits, see CONNECTIVITY_MODES.
    verbose : bool
        Whether to print progress.

    Attributes
    ----------
    table : ComponentTable
        Component assignment recorded at every genuine split.
    history : List[RemovalStep]
        Every removal round, in order.

    Examples
    --------
    >>> detector = CommunityDetector(graph.copy())
    >>> dendrogram = detector.run()
    >>> dendrogram.to_nested()
    ((0, 1), (2, 3))
    """

    def __init__(self, graph: Graph,
                 connectivity: str = 'reachability',
                 verbose: bool = False):
        _check_graph(graph)
        if connectivity not in CONNECTIVITY_MODES:
            raise ValueError(f"Unknown connectivity: {connectivity}. "
                             f"Use one of {CONNECTIVITY_MODES}.")
        self.graph = graph
        self.connectivity = connectivity
        self.verbose = verbose
        self.table = ComponentTable(graph.num_vertices())
        self.history: List[RemovalStep] = []
        self._done = False

    def run(self) -> Optional[Dendrogram]:
        """
        Remove edges until the graph falls apart, then build the dendrogram.

        Returns
        -------
        Optional[Dendrogram]
            None for an empty graph, a single leaf for one vertex, otherwise
            an internal root node.
        """
        if self._done:
            raise RuntimeError("CommunityDetector.run() can only be called once; "
                               "the graph has already been pruned")
        self._done = True

        self._remove_edges()
        dendrogram = self._assemble()

        if self.verbose:
            print(f"\nResults:")
            print(f"   - Removal rounds: {len(self.history)}")
            print(f"   - Recorded splits: {len(self.table) - 1}")
            if dendrogram is not None:
                print(f"   - Dendrogram depth: {dendrogram.depth()}")

        return dendrogram

    def _remove_edges(self) -> None:
        n = self.graph.num_vertices()
        labels, count = find_components(self.graph, self.connectivity)
        self.table.try_record(labels)

        if self.verbose:
            print(f"Initial graph: {n} vertices, {self.graph.number_of_edges()} edges, "
                  f"{count} component(s)")

        # Every round removes at least one edge, so this ends.
        while count < n:
            evs = edge_betweenness_centrality(self.graph)
            max_value = evs.max_value()
            if max_value is None:
                evs.release()
                break

            removed = evs.edges_with_value(max_value)
            evs.release()
            for v, w in removed:
                self.graph.remove_edge(v, w)

            labels, count = find_components(self.graph, self.connectivity)
            recorded = self.table.try_record(labels)

            step = RemovalStep(step=len(self.history) + 1,
                               max_value=max_value,
                               removed_edges=removed,
                               num_components=count,
                               recorded=recorded)
            self.history.append(step)

            if self.verbose:
                print(f"   {step}")

    def _assemble(self) -> Optional[Dendrogram]:
        n = self.graph.num_vertices()
        if n == 0:
            return None

        holder = Dendrogram()
        # (parent, side, members, row, groups); groups is set when the
        # members are already known to split into those groups
        stack = [(holder, 'left', list(range(n)), 0, None)]

        while stack:
            parent, side, members, row, groups = stack.pop()

            if groups is None:
                if len(members) == 1:
                    setattr(parent, side, Dendrogram.leaf(members[0]))
                    continue
                groups, row = self.table.split_members(members, row)
                if len(groups) > 2:
                    warnings.warn(f"Vertices {members} split into {len(groups)} communities "
                                  f"at once; folding into nested binary splits.",
                                  RuntimeWarning)

            node = Dendrogram()
            setattr(parent, side, node)

            rest = groups[1:]
            if len(rest) == 1:
                stack.append((node, 'right', rest[0], row, None))
            else:
                stack.append((node, 'right', [v for g in rest for v in g], row, rest))
            stack.append((node, 'left', groups[0], row, None))

        return holder.left


def girvan_newman(graph: Graph,
                  connectivity: str = 'reachability',
                  copy: bool = False,
                  verbose: bool = False) -> Optional[Dendrogram]:
    """
    Build the Girvan-Newman dendrogram of a graph.

    Parameters
    ----------
    graph : Graph
        The graph to analyse.
    connectivity : str
        'reachability' (default) or 'weak'.
    copy : bool
        Work on a copy so the caller's graph keeps its edges. When False
        the graph is left edgeless (or nearly so) afterwards.
    verbose : bool
        Whether to print progress.

    Returns
    -------
    Optional[Dendrogram]
        Root of the dendrogram; None for an empty graph.
    """
    _check_graph(graph)
    if copy:
        graph = graph.copy()
    return CommunityDetector(graph, connectivity=connectivity, verbose=verbose).run()


# ============================================================================
# EVALUATION METRICS
# ============================================================================

def dendrogram_communities(dendrogram: Dendrogram,
                           num_communities: int) -> Dict[int, int]:
    """
    Cut a dendrogram into a given number of communities.

    Parameters
    ----------
    dendrogram : Dendrogram
        Result of girvan_newman().
    num_communities : int
        Number of communities wanted.

    Returns
    -------
    Dict[int, int]
        Mapping of vertex to community ID.
    """
    return partition_to_dict(dendrogram.cut(num_communities))


def _undirected_view(graph: Graph) -> nx.Graph:
    G = nx.Graph()
    G.add_nodes_from(range(graph.num_vertices()))
    for v, w, wt in graph.edges():
        if v == w:
            continue
        if G.has_edge(v, w):
            G[v][w]['weight'] += wt
        else:
            G.add_edge(v, w, weight=wt)
    return G


def calculate_modularity(graph: Union[Graph, nx.Graph],
                         partition: Dict[Any, int]) -> float:
    """
    Calculate modularity for a given partition.

    Modularity Q measures the quality of a partition:
    Q = (1/2m) * sum[(A_ij - k_i*k_j/(2m)) * delta(c_i, c_j)]

    Interpretation:
    - Q > 0.3: Good community structure
    - Q > 0.5: Strong community structure
    - Q close to 0: No better than random

    Parameters
    ----------
    graph : Graph or nx.Graph
        The graph, evaluated as undirected. Pass the graph as it was before
        detection; the detector leaves its input without edges.
    partition : Dict[Any, int]
        Mapping of node to community ID.

    Returns
    -------
    float
        Modularity score. 0.0 for a graph without edges.
    """
    if isinstance(graph, Graph):
        G = _undirected_view(graph)
    elif graph.is_directed():
        G = graph.to_undirected()
    else:
        G = graph

    if G.number_of_edges() == 0:
        return 0.0

    communities = dict_to_partition(partition)
    return nx.community.modularity(G, communities, weight='weight')


def calculate_nmi(partition1: Dict[Any, int],
                  partition2: Dict[Any, int]) -> float:
    """
    Calculate Normalized Mutual Information between two partitions.

    NMI(X,Y) = 2 * I(X;Y) / (H(X) + H(Y))

    Parameters
    ----------
    partition1 : Dict[Any, int]
        First partition (node -> community).
    partition2 : Dict[Any, int]
        Second partition (node -> community).

    Returns
    -------
    float
        NMI score between 0 and 1. 0.0 if the partitions share no nodes.
    """
    common_nodes = sorted(set(partition1.keys()) & set(partition2.keys()))
    if len(common_nodes) == 0:
        return 0.0

    labels1 = get_labels_from_partition(partition1, common_nodes)
    labels2 = get_labels_from_partition(partition2, common_nodes)

    return float(normalized_mutual_info_score(labels1, labels2))


def calculate_ari(partition1: Dict[Any, int],
                  partition2: Dict[Any, int]) -> float:
    """
    Calculate Adjusted Rand Index between two partitions.

    Interpretation:
    - ARI = 1: Perfect agreement
    - ARI = 0: Random agreement (chance level)
    - ARI < 0: Less than random agreement
    """
    common_nodes = sorted(set(partition1.keys()) & set(partition2.keys()))
    if len(common_nodes) == 0:
        return 0.0

    labels1 = get_labels_from_partition(partition1, common_nodes)
    labels2 = get_labels_from_partition(partition2, common_nodes)

    return float(adjusted_rand_score(labels1, labels2))


def best_partition(graph: Graph,
                   dendrogram: Dendrogram) -> Tuple[Dict[int, int], float]:
    """
    Find the dendrogram cut with the highest modularity.

    Parameters
    ----------
    graph : Graph
        The graph before detection (its edges are needed for modularity).
    dendrogram : Dendrogram
        Dendrogram of that graph.

    Returns
    -------
    Tuple[Dict[int, int], float]
        - partition: Mapping of vertex to community ID
        - modularity: Its modularity (fewest communities wins ties)
    """
    best, best_mod = None, -np.inf
    for k in range(1, len(dendrogram.leaves()) + 1):
        partition = dendrogram_communities(dendrogram, k)
        mod = calculate_modularity(graph, partition)
        if mod > best_mod:
            best, best_mod = partition, mod
    return best, float(best_mod)


# ============================================================================
# RUN GIRVAN-NEWMAN
# ============================================================================

def run_girvan_newman(
    graph: Union[Graph, nx.Graph],
    connectivity: str = 'reachability',
    verbose: bool = True
) -> Tuple[Optional[Dendrogram], Dict[int, int], float]:
    """
    Run Girvan-Newman on a copy of a graph and pick its best partition.

    Parameters
    ----------
    graph : Graph or nx.Graph
        The graph to analyze. NetworkX graphs are converted with
        Graph.from_networkx(). The caller's graph is not modified.
    connectivity : str
        Component definition, see CONNECTIVITY_MODES.
    verbose : bool
        Whether to print progress and results.

    Returns
    -------
    Tuple[Optional[Dendrogram], Dict[int, int], float]
        - dendrogram: Root of the dendrogram (None for an empty graph)
        - partition: Highest-modularity cut, vertex -> community ID
        - modularity: Modularity of that cut
    """
    if isinstance(graph, nx.Graph):
        graph = Graph.from_networkx(graph)
    _check_graph(graph)

    if verbose:
        print("\n" + "=" * 60)
        print("GIRVAN-NEWMAN COMMUNITY DETECTION")
        print("=" * 60)

    dendrogram = CommunityDetector(graph.copy(), connectivity=connectivity,
                                   verbose=verbose).run()
    if dendrogram is None:
        return None, {}, 0.0

    partition, mod = best_partition(graph, dendrogram)

    if verbose:
        communities = dict_to_partition(partition)
        sizes = sorted([len(c) for c in communities], reverse=True)
        print(f"\nBest cut:")
        print(f"   - Number of communities: {len(communities)}")
        print(f"   - Community sizes (top 10): {sizes[:10]}")
        print(f"   - Modularity: {mod:.4f}")
        print("=" * 60)

    return dendrogram, partition, mod

"""
Girvan-Newman Hierarchical Community Detection Package

Modules:
    - graph: Directed weighted graph over dense integer vertex ids
    - shortest_paths: All-pairs shortest paths (Floyd-Warshall) with next hops
    - centrality: Count-based edge betweenness centrality
    - dendrogram: Binary dendrogram of community splits
    - communities: Girvan-Newman detector, partition utilities and metrics
"""

from .graph import Graph, show_graph
from .shortest_paths import (
    INFINITY,
    NO_HOP,
    ShortestPaths,
    floyd_warshall,
    show_shortest_paths
)
from .centrality import (
    NO_EDGE,
    EdgeValues,
    edge_betweenness_centrality,
    show_edge_values
)
from .dendrogram import (
    LEAF_SENTINEL,
    Dendrogram,
    show_dendrogram
)
from .communities import (
    CONNECTIVITY_MODES,
    ComponentTable,
    RemovalStep,
    CommunityDetector,
    girvan_newman,
    find_components,
    partition_to_dict,
    dict_to_partition,
    dendrogram_communities,
    calculate_modularity,
    calculate_nmi,
    calculate_ari,
    best_partition,
    run_girvan_newman
)

__all__ = [
    # Graph
    'Graph',
    'show_graph',
    # Shortest paths
    'INFINITY',
    'NO_HOP',
    'ShortestPaths',
    'floyd_warshall',
    'show_shortest_paths',
    # Centrality
    'NO_EDGE',
    'EdgeValues',
    'edge_betweenness_centrality',
    'show_edge_values',
    # Dendrogram
    'LEAF_SENTINEL',
    'Dendrogram',
    'show_dendrogram',
    # Communities
    'CONNECTIVITY_MODES',
    'ComponentTable',
    'RemovalStep',
    'CommunityDetector',
    'girvan_newman',
    'find_components',
    'partition_to_dict',
    'dict_to_partition',
    'dendrogram_communities',
    'calculate_modularity',
    'calculate_nmi',
    'calculate_ari',
    'best_partition',
    'run_girvan_newman'
]

__version__ = '1.0.0'

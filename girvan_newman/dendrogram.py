"""
dendrogram.py - Binary Dendrogram Module

A dendrogram records the order in which Girvan-Newman splits a graph:
every internal node is a split of its vertex set into two sub-communities,
every leaf is a single original vertex.

Author: Girvan-Newman Analysis Pipeline
"""

from collections import deque
from typing import Dict, List, Optional, Union

# vertex value of an internal node
LEAF_SENTINEL = -1

Nested = Union[int, tuple]


class Dendrogram:
    """
    Node of a binary dendrogram.

    Parameters
    ----------
    vertex : int
        Vertex id for a leaf, LEAF_SENTINEL for an internal node.
    left, right : Dendrogram, optional
        Children of an internal node. Leaves have none.
    """

    __slots__ = ('vertex', 'left', 'right')

    def __init__(self, vertex: int = LEAF_SENTINEL,
                 left: Optional['Dendrogram'] = None,
                 right: Optional['Dendrogram'] = None):
        self.vertex = vertex
        self.left = left
        self.right = right

    @classmethod
    def leaf(cls, vertex: int) -> 'Dendrogram':
        return cls(vertex)

    @classmethod
    def split(cls, left: 'Dendrogram', right: 'Dendrogram') -> 'Dendrogram':
        return cls(LEAF_SENTINEL, left, right)

    @property
    def is_leaf(self) -> bool:
        return self.vertex != LEAF_SENTINEL

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"Dendrogram.leaf({self.vertex})"
        return f"Dendrogram({self.to_nested()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dendrogram):
            return NotImplemented
        return self.to_nested() == other.to_nested()

    def children(self) -> List['Dendrogram']:
        return [c for c in (self.left, self.right) if c is not None]

    def leaves(self) -> List[int]:
        """Vertex ids of all leaves, left to right."""
        result = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                result.append(node.vertex)
            else:
                stack.extend(reversed(node.children()))
        return result

    def size(self) -> int:
        """Number of nodes in the tree."""
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children())
        return count

    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        best = 0
        stack = [(self, 0)]
        while stack:
            node, d = stack.pop()
            best = max(best, d)
            stack.extend((c, d + 1) for c in node.children())
        return best

    def to_nested(self) -> Nested:
        """
        Tree as nested tuples, e.g. ((0, 1), (2, 3)).

        Leaves are plain ints, internal nodes are (left, right) tuples.
        """
        # Post-order build with an explicit stack
        built: Dict[int, Nested] = {}
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if node.is_leaf:
                built[id(node)] = node.vertex
            elif expanded:
                built[id(node)] = tuple(built.pop(id(c)) for c in node.children())
            else:
                stack.append((node, True))
                stack.extend((c, False) for c in reversed(node.children()))
        return built[id(self)]

    def cut(self, num_communities: int) -> List[List[int]]:
        """
        Split the leaves into a given number of communities.

        Starting from the root, the frontier node with the most leaves is
        replaced by its children until the frontier holds num_communities
        nodes (ties go to the node reached first, breadth first).

        Parameters
        ----------
        num_communities : int
            Between 1 and the number of leaves.

        Returns
        -------
        List[List[int]]
            Communities as sorted vertex lists, ordered by smallest member.
        """
        n_leaves = len(self.leaves())
        if not 1 <= num_communities <= n_leaves:
            raise ValueError(f"num_communities must be in 1..{n_leaves}, "
                             f"got {num_communities}")

        frontier = deque([self])
        while len(frontier) < num_communities:
            widest = max(frontier, key=lambda node: len(node.leaves()))
            frontier.remove(widest)
            frontier.extend(widest.children())

        return sorted((sorted(node.leaves()) for node in frontier), key=lambda c: c[0])

    def release(self) -> None:
        """Detach every node of the tree from its children."""
        stack = [self]
        while stack:
            node = stack.pop()
            stack.extend(node.children())
            node.left = None
            node.right = None


def show_dendrogram(d: Optional[Dendrogram], indent: int = 0) -> None:
    """Print a dendrogram as an indented tree (debugging aid)."""
    if d is None:
        print("   (empty)")
        return
    stack = [(d, indent)]
    while stack:
        node, level = stack.pop()
        pad = "   " * level
        if node.is_leaf:
            print(f"{pad}- {node.vertex}")
        else:
            print(f"{pad}+ split ({len(node.leaves())} vertices)")
            stack.extend((c, level + 1) for c in reversed(node.children()))

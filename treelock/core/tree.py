"""
Fixed-shape m-ary tree used by the lock engine.

Nodes live in a flat arena: every node is an integer index, parent and
children are stored as indices. Labels are assigned breadth-first, each node
taking up to `branching` children before the next node starts filling, so the
non-root node at position i (1-based) hangs under position (i - 1) // branching.
"""
from __future__ import annotations
import networkx as nx
from typing import Dict, List, Optional, Sequence
from .types import DuplicateLabelError

NO_PARENT = -1


class LockTree:
    """Immutable tree shape plus the label -> index lookup."""

    def __init__(self, labels: List[str], parents: List[int], children: List[List[int]], index: Dict[str, int]):
        self.labels = labels
        self.parents = parents
        self.children = children
        self.index = index

    @property
    def root(self) -> int:
        return 0

    def __len__(self) -> int:
        return len(self.labels)

    def __contains__(self, label: str) -> bool:
        return label in self.index

    def index_of(self, label: str) -> Optional[int]:
        return self.index.get(label)

    def label_of(self, node: int) -> str:
        return self.labels[node]

    def parent_of(self, node: int) -> Optional[int]:
        p = self.parents[node]
        return None if p == NO_PARENT else p

    def children_of(self, node: int) -> List[int]:
        return self.children[node]

    def depth_of(self, node: int) -> int:
        depth = 0
        p = self.parents[node]
        while p != NO_PARENT:
            depth += 1
            p = self.parents[p]
        return depth

    def to_digraph(self) -> nx.DiGraph:
        """
        Export the shape as a NetworkX DiGraph (edges parent -> child).
        Nodes are arena indices; the label is kept as node attribute.
        """
        G = nx.DiGraph()
        for i, label in enumerate(self.labels):
            G.add_node(i, label=label)
        for i, p in enumerate(self.parents):
            if p != NO_PARENT:
                G.add_edge(p, i)
        return G


def build_tree(labels: Sequence[str], branching: int, duplicate_labels: str = "last") -> LockTree:
    """
    Build the tree for `labels`, first label at the root.

    Args:
        labels: node labels in breadth-first order
        branching: maximum number of children per node
        duplicate_labels: "last" keeps the last node carrying a repeated label
            in the index, "error" raises DuplicateLabelError

    Returns:
        LockTree
    """
    if not labels:
        raise ValueError("Tree needs at least one label.")
    if branching < 1 and len(labels) > 1:
        raise ValueError(f"Invalid branching factor: {branching}")
    if duplicate_labels not in ("last", "error"):
        raise ValueError(f"Unknown duplicate label policy: {duplicate_labels}")

    n = len(labels)
    parents = [NO_PARENT] * n
    children: List[List[int]] = [[] for _ in range(n)]
    for i in range(1, n):
        p = (i - 1) // branching
        parents[i] = p
        children[p].append(i)

    index: Dict[str, int] = {}
    for i, label in enumerate(labels):
        if label in index and duplicate_labels == "error":
            raise DuplicateLabelError(f"Duplicate label: {label}")
        index[label] = i

    return LockTree(list(labels), parents, children, index)

# python -m pytest -q tests/test_tree.py
"""
Unit tests for the m-ary tree builder.
"""
import networkx as nx
import pytest
from treelock.core.tree import build_tree
from treelock.core.types import DuplicateLabelError

LABELS = ["A", "B", "C", "D", "E", "F", "G"]

# 1) Breadth-first fill, binary
def test_binary_layout():
    tree = build_tree(LABELS, 2)
    assert tree.root == 0
    assert tree.children_of(0) == [1, 2]
    assert tree.children_of(1) == [3, 4]
    assert tree.children_of(2) == [5, 6]
    assert tree.parent_of(0) is None
    assert [tree.label_of(c) for c in tree.children_of(tree.index_of("C"))] == ["F", "G"]

# 2) Partial last level
def test_ternary_partial_level():
    tree = build_tree(["R", "a", "b", "c", "d"], 3)
    assert tree.children_of(0) == [1, 2, 3]
    assert tree.children_of(1) == [4]
    assert tree.children_of(2) == []
    assert tree.depth_of(4) == 2

# 3) Parent formula holds for every non-root node
def test_parent_formula():
    m = 4
    tree = build_tree([f"N{i}" for i in range(50)], m)
    for i in range(1, 50):
        assert tree.parent_of(i) == (i - 1) // m

# 4) Single node tree
def test_single_node():
    tree = build_tree(["only"], 0)
    assert len(tree) == 1
    assert "only" in tree
    assert tree.children_of(0) == []

# 5) Invalid input
def test_invalid_input():
    with pytest.raises(ValueError):
        build_tree([], 2)
    with pytest.raises(ValueError):
        build_tree(["A", "B"], 0)
    with pytest.raises(ValueError):
        build_tree(["A", "B"], 2, duplicate_labels="first")

# 6) Duplicate labels: default keeps the last one, strict policy refuses
def test_duplicate_labels():
    tree = build_tree(["A", "B", "A"], 2)
    assert tree.index_of("A") == 2
    with pytest.raises(DuplicateLabelError):
        build_tree(["A", "B", "A"], 2, duplicate_labels="error")

# 7) NetworkX export
def test_to_digraph():
    tree = build_tree(LABELS, 2)
    G = tree.to_digraph()
    assert nx.is_arborescence(G)
    assert G.number_of_edges() == len(LABELS) - 1
    assert G.nodes[3]["label"] == "D"
    assert nx.descendants(G, 1) == {3, 4}

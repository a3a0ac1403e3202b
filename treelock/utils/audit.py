"""
Brute-force checks of the lock engine's counters.

The engine maintains up_count / down_count incrementally. These helpers
recompute them from scratch over the NetworkX view of the tree, so any drift
is visible. O(n * size) per call: meant for tests, --check and benchmarks.
"""
import networkx as nx
import numpy as np
from typing import List, Optional, Tuple
from treelock.core.engine import LockEngine


def recompute_counters(engine: LockEngine) -> Tuple[np.ndarray, np.ndarray]:
    """
    Recompute both counters for every node.

    Returns:
        (up, down): int arrays indexed by arena position
    """
    G = engine.tree.to_digraph()
    n = len(engine.tree)
    locked = np.array([s.is_locked for s in engine.states()], dtype=bool)
    up = np.zeros(n, dtype=np.int64)
    down = np.zeros(n, dtype=np.int64)
    for i in range(n):
        anc = list(nx.ancestors(G, i))
        desc = list(nx.descendants(G, i))
        up[i] = int(locked[anc].sum()) if anc else 0
        down[i] = int(locked[desc].sum()) if desc else 0
    return up, down


def counter_mismatches(engine: LockEngine) -> List[str]:
    """Labels whose maintained counters differ from the recomputed ones."""
    up, down = recompute_counters(engine)
    states = engine.states()
    kept_up = np.array([s.up_count for s in states], dtype=np.int64)
    kept_down = np.array([s.down_count for s in states], dtype=np.int64)
    bad = np.flatnonzero((kept_up != up) | (kept_down != down))
    return [states[i].label for i in bad]


def locked_descendants(engine: LockEngine, label: str) -> Optional[List[str]]:
    """Locked descendants of `label` found by full traversal, None if unknown label."""
    tree = engine.tree
    i = tree.index_of(label)
    if i is None:
        return None
    G = tree.to_digraph()
    found = []
    for d in sorted(nx.descendants(G, i)):
        state = engine.node(tree.label_of(d))
        if state.is_locked:
            found.append(state.label)
    return found


def naive_upgrade(engine: LockEngine, label: str, uid: int) -> bool:
    """
    Reference upgrade: unlock every locked descendant one by one, then lock.
    Preconditions are checked up front so a refusal leaves state untouched.
    """
    state = engine.node(label)
    if state is None or state.is_locked or state.up_count > 0 or state.down_count == 0:
        return False
    below = locked_descendants(engine, label)
    if any(engine.node(d).owner != uid for d in below):
        return False
    for d in below:
        engine.unlock(d, uid)
    return engine.lock(label, uid)

# python -m pytest -q tests/test_engine.py
"""
Unit tests for lock / unlock on the lock engine.

Reference tree (m=2):

            A
          /   \\
         B     C
        / \\   / \\
       D   E F   G
"""
import random
import pytest
from treelock.core.engine import LockEngine
from treelock.core.tree import build_tree
from treelock.utils.audit import counter_mismatches


def make_engine(labels=("A", "B", "C", "D", "E", "F", "G"), m=2):
    return LockEngine(build_tree(list(labels), m))


# 1) Lock blocked by a locked descendant, then allowed after unlock
def test_scenario_lock_unlock_lock():
    eng = make_engine(("A", "B", "C"))
    assert eng.lock("B", 1) is True
    assert eng.lock("A", 1) is False
    assert eng.unlock("B", 1) is True
    assert eng.lock("A", 1) is True
    assert eng.node("A").owner == 1

# 2) Counters after a lock
def test_lock_updates_counters():
    eng = make_engine()
    assert eng.lock("B", 7)
    assert eng.node("A").down_count == 1
    assert eng.node("B").down_count == 0
    assert eng.node("D").up_count == 1
    assert eng.node("E").up_count == 1
    assert eng.node("C").up_count == 0
    assert eng.node("F").up_count == 0
    assert eng.locked_labels() == ["B"]

# 3) Round trip restores all counters
def test_lock_unlock_round_trip():
    eng = make_engine()
    eng.lock("F", 2)
    before = eng.states()
    assert eng.lock("D", 1) is True
    assert eng.unlock("D", 1) is True
    assert eng.states() == before

# 4) Lock refused with locked ancestor or descendant
def test_lock_refused_when_related_node_locked():
    eng = make_engine()
    assert eng.lock("B", 1)
    for label in ("A", "D", "E"):
        assert eng.lock(label, 1) is False
        assert eng.lock(label, 2) is False
    assert eng.lock("B", 1) is False
    # sibling branch is free
    assert eng.lock("C", 2) is True

# 5) Unlock ownership and state checks
def test_unlock_refusals():
    eng = make_engine()
    assert eng.unlock("B", 1) is False
    eng.lock("B", 1)
    assert eng.unlock("B", 2) is False
    assert eng.node("B").is_locked is True
    assert eng.unlock("B", 1) is True
    assert eng.node("B").owner is None

# 6) Unknown labels are refused, never raise
def test_unknown_label():
    eng = make_engine()
    assert eng.lock("Z", 1) is False
    assert eng.unlock("Z", 1) is False
    assert eng.upgrade("Z", 1) is False
    assert eng.node("Z") is None

# 7) Counters stay exact under random lock / unlock / upgrade streams
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_random_stream_counters_exact(seed):
    rng = random.Random(seed)
    labels = [f"N{i}" for i in range(40)]
    eng = LockEngine(build_tree(labels, 3))
    for _ in range(400):
        label = rng.choice(labels)
        uid = rng.randint(1, 2)
        op = rng.choice([eng.lock, eng.lock, eng.unlock, eng.upgrade])
        op(label, uid)
        assert counter_mismatches(eng) == []

# 8) No two locks on the same root-to-leaf path
def test_locked_nodes_never_nested():
    rng = random.Random(5)
    labels = [f"N{i}" for i in range(30)]
    tree = build_tree(labels, 2)
    eng = LockEngine(tree)
    for _ in range(300):
        rng.choice([eng.lock, eng.unlock, eng.upgrade])(rng.choice(labels), rng.randint(1, 3))
    for label in eng.locked_labels():
        state = eng.node(label)
        assert state.up_count == 0
        assert state.down_count == 0

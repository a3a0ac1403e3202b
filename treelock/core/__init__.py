"""Tree shape, lock engine and query dispatch."""
from .types import Operation, Query, QueryOutcome, NodeState, InputFormatError, DuplicateLabelError
from .tree import LockTree, build_tree
from .engine import LockEngine

__all__ = [
    'Operation', 'Query', 'QueryOutcome', 'NodeState', 'InputFormatError', 'DuplicateLabelError',
    'LockTree', 'build_tree', 'LockEngine',
]

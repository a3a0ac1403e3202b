"""Top-level package exports for treelock.

Convenience re-exports so users can:

	from treelock import build_tree, LockEngine

Versioning kept simple (manual bump).
"""

__all__ = [
	'build_tree', 'LockTree', 'LockEngine', 'Operation', 'Query', 'process_queries', 'VERSION'
]

from .core.tree import build_tree, LockTree
from .core.engine import LockEngine
from .core.types import Operation, Query
from .core.dispatch import process_queries

VERSION = '0.1.0'

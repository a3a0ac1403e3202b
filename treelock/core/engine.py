"""
Lock engine for a fixed-shape tree.

Each node carries two counters kept in sync with the lock flags:
- up_count: number of locked proper ancestors
- down_count: number of locked descendants

With them every legality check is O(1) and every update walks either the
ancestor chain (O(depth)) or the subtree of the node being (un)locked.

Operations never raise on refusal: an unknown label, a wrong lock state,
a blocking counter or a foreign owner all give False and leave state untouched.
"""
from __future__ import annotations
import logging
from collections import deque
from typing import List, Optional, Tuple
from .tree import LockTree, NO_PARENT
from .types import NodeState

logger = logging.getLogger(__name__)


class LockEngine:

    def __init__(self, tree: LockTree):
        self.tree = tree
        n = len(tree)
        self._locked = [False] * n
        self._owner: List[Optional[int]] = [None] * n
        self._up = [0] * n
        self._down = [0] * n

    # --- inspection ---

    def node(self, label: str) -> Optional[NodeState]:
        i = self.tree.index_of(label)
        if i is None:
            return None
        return self._state(i)

    def _state(self, i: int) -> NodeState:
        return NodeState(
            label=self.tree.labels[i],
            is_locked=self._locked[i],
            owner=self._owner[i],
            up_count=self._up[i],
            down_count=self._down[i],
        )

    def states(self) -> List[NodeState]:
        """Snapshot of every node, in arena order."""
        return [self._state(i) for i in range(len(self.tree))]

    def locked_labels(self) -> List[str]:
        return [self.tree.labels[i] for i, locked in enumerate(self._locked) if locked]

    # --- operations ---

    def lock(self, label: str, uid: int) -> bool:
        i = self.tree.index_of(label)
        if i is None:
            logger.debug(f"[LOCK] unknown node {label}")
            return False
        if self._locked[i] or self._up[i] > 0 or self._down[i] > 0:
            logger.debug(f"[LOCK] {label} refused for user {uid} (up={self._up[i]}, down={self._down[i]})")
            return False

        self._update_ancestors(i, 1)
        self._update_descendants(i, 1)
        self._locked[i] = True
        self._owner[i] = uid
        return True

    def unlock(self, label: str, uid: int) -> bool:
        i = self.tree.index_of(label)
        if i is None:
            logger.debug(f"[UNLOCK] unknown node {label}")
            return False
        if not self._locked[i] or self._owner[i] != uid:
            logger.debug(f"[UNLOCK] {label} refused for user {uid} (owner={self._owner[i]})")
            return False

        self._update_ancestors(i, -1)
        self._update_descendants(i, -1)
        self._locked[i] = False
        self._owner[i] = None
        return True

    def upgrade(self, label: str, uid: int) -> bool:
        """
        Replace every descendant lock of `uid` below `label` by a lock on `label`.

        Same end state as unlocking each locked descendant then locking the
        node, but the ancestor chain is walked once with the net delta
        1 - k (k = number of released locks) instead of k + 1 times.
        """
        i = self.tree.index_of(label)
        if i is None:
            logger.debug(f"[UPGRADE] unknown node {label}")
            return False
        if self._locked[i] or self._up[i] > 0 or self._down[i] == 0:
            logger.debug(f"[UPGRADE] {label} refused for user {uid} (up={self._up[i]}, down={self._down[i]})")
            return False

        found = self._collect_locked_descendants(i, uid)
        if found is None:
            logger.debug(f"[UPGRADE] {label} refused for user {uid}: descendant held by another user")
            return False
        released, visited = found

        # Validation done, mutate from here on.
        for d in released:
            self._locked[d] = False
            self._owner[d] = None
            self._update_descendants(d, -1)
        # Nothing stays locked below i, so every node the traversal walked
        # through (the only ones with down_count > 0 in the subtree) drops to 0.
        for v in visited:
            self._down[v] = 0

        self._update_ancestors(i, 1 - len(released))
        self._update_descendants(i, 1)
        self._locked[i] = True
        self._owner[i] = uid

        logger.info(f"[UPGRADE] {label} locked by user {uid}, released {len(released)} descendant lock(s)")
        return True

    # --- traversal helpers ---

    def _update_ancestors(self, i: int, delta: int) -> None:
        parents = self.tree.parents
        p = parents[i]
        while p != NO_PARENT:
            self._down[p] += delta
            p = parents[p]

    def _update_descendants(self, i: int, delta: int) -> None:
        children = self.tree.children
        queue = deque(children[i])
        while queue:
            node = queue.popleft()
            self._up[node] += delta
            queue.extend(children[node])

    def _collect_locked_descendants(self, i: int, uid: int) -> Optional[Tuple[List[int], List[int]]]:
        """
        BFS below `i` gathering locked descendants.

        Subtrees under a node with down_count == 0 hold no lock and are skipped.

        Returns:
            (locked nodes, nodes with down_count > 0 that were expanded),
            or None as soon as a locked node owned by someone else shows up.
        """
        children = self.tree.children
        locked: List[int] = []
        visited: List[int] = []
        queue = deque([i])
        while queue:
            node = queue.popleft()
            if self._locked[node]:
                if self._owner[node] != uid:
                    return None
                locked.append(node)
            if self._down[node] > 0:
                visited.append(node)
                queue.extend(children[node])
        return locked, visited

"""
Types shared by the tree builder, the lock engine and the query layer.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class Operation(IntEnum):
    """
    Query operation codes, as they appear in the input stream:
    - LOCK (1) → lock a free node
    - UNLOCK (2) → release a lock held by the same user
    - UPGRADE (3) → move every descendant lock of one user up to the node
    """

    LOCK = 1
    UNLOCK = 2
    UPGRADE = 3


@dataclass(frozen=True)
class Query:
    op: Operation
    label: str
    uid: int


@dataclass(frozen=True)
class QueryOutcome:
    query: Query
    result: bool


@dataclass(frozen=True)
class NodeState:
    """Read-only snapshot of one node's lock bookkeeping."""
    label: str
    is_locked: bool
    owner: Optional[int]
    up_count: int
    down_count: int


class InputFormatError(ValueError):
    """Raised when a problem description is truncated or malformed."""
    pass


class DuplicateLabelError(ValueError):
    """Raised when a tree is built with repeated labels under the strict policy."""
    pass

"""
Routes queries to the lock engine, strictly one at a time in arrival order.
"""
import logging
from typing import Iterable, List, Optional
from treelock.core.engine import LockEngine
from treelock.core.types import Operation, Query, QueryOutcome
from treelock.utils.log_utils import log_query_outcome

logger = logging.getLogger(__name__)


def dispatch(engine: LockEngine, query: Query) -> bool:
    """Run a single query; unknown operation codes are a caller error."""
    if query.op == Operation.LOCK:
        return engine.lock(query.label, query.uid)
    if query.op == Operation.UNLOCK:
        return engine.unlock(query.label, query.uid)
    if query.op == Operation.UPGRADE:
        return engine.upgrade(query.label, query.uid)
    raise ValueError(f"Unknown operation: {query.op}")


def process_queries(engine: LockEngine, queries: Iterable[Query], trace_path: Optional[str] = None) -> List[QueryOutcome]:
    """
    Apply every query in order.

    Args:
        engine: target engine
        queries: queries in arrival order
        trace_path: when set, each outcome is appended to this JSONL file

    Returns:
        one QueryOutcome per query, same order
    """
    outcomes = []
    for seq, query in enumerate(queries):
        outcome = QueryOutcome(query, dispatch(engine, query))
        outcomes.append(outcome)
        if trace_path:
            log_query_outcome(outcome, seq, trace_path)
    accepted = sum(1 for o in outcomes if o.result)
    logger.info(f"[QUERIES] {len(outcomes)} processed, {accepted} accepted")
    return outcomes

"""
JSONL trace of processed queries.
"""
import os
import json
from datetime import datetime, timezone
from enum import Enum
from treelock.core.types import QueryOutcome

TRACE_LOG_PATH = os.path.join("results", "traces", "queries.jsonl")


def append_jsonl(path: str, obj: dict) -> None:
    """Append a JSON object as a line in a .jsonl file, create folder if needed.
    Enums are written by name."""
    def default(o):
        if isinstance(o, Enum):
            return o.name
        if hasattr(o, "__dict__"):
            return o.__dict__
        return str(o)
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False, default=default) + "\n")


def log_query_outcome(outcome: QueryOutcome, seq: int, path: str = TRACE_LOG_PATH) -> None:
    """Log one query result to the .jsonl trace."""
    append_jsonl(path, {
        "seq": seq,
        "op": outcome.query.op.name,
        "label": outcome.query.label,
        "uid": outcome.query.uid,
        "result": outcome.result,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })

import json
from dataclasses import dataclass
from typing import Iterable, List, TextIO
from treelock.core.types import InputFormatError, Operation, Query


@dataclass
class Problem:
    branching: int
    labels: List[str]
    queries: List[Query]


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InputFormatError(f"Expected integer for {what}, got {token!r}") from None


def _to_operation(value, position: int) -> Operation:
    code = _to_int(str(value), f"operation of query {position}")
    try:
        return Operation(code)
    except ValueError:
        raise InputFormatError(f"Unknown operation code {code} in query {position}") from None


def parse_problem(text: str) -> Problem:
    """
    Parse the whitespace separated problem format:

        n m q
        label_1 ... label_n
        op label uid      (q times)

    Trailing tokens beyond the q-th query are ignored.

    Raises:
        InputFormatError: truncated input, bad integers, negative counts,
            unknown operation codes
    """
    tokens = text.split()
    if len(tokens) < 3:
        raise InputFormatError("Header must contain node count, branching factor and query count.")
    n = _to_int(tokens[0], "node count")
    m = _to_int(tokens[1], "branching factor")
    q = _to_int(tokens[2], "query count")
    if n < 1 or m < 0 or q < 0:
        raise InputFormatError(f"Invalid header values: n={n}, m={m}, q={q}")

    pos = 3
    labels = tokens[pos:pos + n]
    if len(labels) < n:
        raise InputFormatError(f"Expected {n} labels, got {len(labels)}")
    pos += n

    queries = []
    for k in range(q):
        chunk = tokens[pos:pos + 3]
        if len(chunk) < 3:
            raise InputFormatError(f"Expected {q} queries, input ends in query {k + 1}")
        op = _to_operation(chunk[0], k + 1)
        uid = _to_int(chunk[2], f"user id of query {k + 1}")
        queries.append(Query(op, chunk[1], uid))
        pos += 3

    return Problem(m, labels, queries)


def read_problem(stream: TextIO) -> Problem:
    return parse_problem(stream.read())


def load_problem_json(json_path) -> Problem:
    """
    Load a problem from JSON.
    Expected format: {"branching": 2, "labels": ["A", "B", "C"],
                      "queries": [[1, "B", 1], [3, "A", 1], ...]}
    """
    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        if not isinstance(data["labels"], list):
            raise TypeError("labels must be a list")
        labels = [str(label) for label in data["labels"]]
        branching = int(data["branching"])
        raw_queries = data.get("queries", [])
        if not isinstance(raw_queries, list):
            raise TypeError("queries must be a list")
    except (KeyError, TypeError, ValueError) as e:
        raise InputFormatError(f"Invalid problem file {json_path}: {e}") from e
    if not labels:
        raise InputFormatError(f"Problem file {json_path} has no labels")

    queries = []
    for k, item in enumerate(raw_queries):
        if not isinstance(item, (list, tuple)) or len(item) != 3:
            raise InputFormatError(f"Query {k + 1} must be [op, label, uid], got {item!r}")
        op = _to_operation(item[0], k + 1)
        uid = _to_int(str(item[2]), f"user id of query {k + 1}")
        queries.append(Query(op, str(item[1]), uid))
    return Problem(branching, labels, queries)


def format_results(results: Iterable[bool]) -> str:
    """Render results as `true` / `false`, one per line."""
    return "".join("true\n" if r else "false\n" for r in results)

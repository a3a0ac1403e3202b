"""
Batched vs naive upgrade benchmark
==================================

Builds random m-ary trees, replays the same random query stream on two
engines (one upgrading with the batched counter update, one with repeated
unlock + lock), checks that both end in the same lock state and saves the
timings as CSV.

Usage:
    python experiments/benchmark_upgrade.py --sizes 1000 10000 --queries 20000
"""
import os
import sys
import time
import random
import logging
import argparse
import pandas as pd
from datetime import datetime

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from treelock.core.engine import LockEngine
from treelock.core.tree import build_tree
from treelock.core.types import Operation, Query
from treelock.utils.audit import naive_upgrade


def random_queries(labels, n_queries, n_users, rng):
    ops = [Operation.LOCK, Operation.LOCK, Operation.UNLOCK, Operation.UPGRADE]
    return [Query(rng.choice(ops), rng.choice(labels), rng.randint(1, n_users)) for _ in range(n_queries)]


def replay(engine, queries, upgrade):
    start = time.perf_counter()
    results = []
    for q in queries:
        if q.op == Operation.LOCK:
            results.append(engine.lock(q.label, q.uid))
        elif q.op == Operation.UNLOCK:
            results.append(engine.unlock(q.label, q.uid))
        else:
            results.append(upgrade(engine, q.label, q.uid))
    return results, time.perf_counter() - start


def run_benchmark(sizes, branching, n_queries, n_users, runs, seed):
    rows = []
    for n in sizes:
        labels = [f"N{i}" for i in range(n)]
        for run_idx in range(runs):
            rng = random.Random(seed + run_idx)
            queries = random_queries(labels, n_queries, n_users, rng)

            batched = LockEngine(build_tree(labels, branching))
            naive = LockEngine(build_tree(labels, branching))
            res_b, t_b = replay(batched, queries, LockEngine.upgrade)
            res_n, t_n = replay(naive, queries, naive_upgrade)

            agree = res_b == res_n and batched.states() == naive.states()
            if not agree:
                logging.warning(f"   n={n} run {run_idx + 1}: batched and naive results differ")
            rows.append({
                "nodes": n, "branching": branching, "run": run_idx + 1,
                "queries": n_queries, "batched_s": t_b, "naive_s": t_n, "agree": agree,
            })
            logging.info(f"   n={n:6d} run {run_idx + 1}: batched={t_b:.3f}s naive={t_n:.3f}s")
    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--sizes", type=int, nargs="+", default=[1000, 10000])
    parser.add_argument("--branching", type=int, default=3)
    parser.add_argument("--queries", type=int, default=20000)
    parser.add_argument("--users", type=int, default=2)
    parser.add_argument("--runs", type=int, default=3)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--out", type=str, default="results/benchmarks")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    df = run_benchmark(args.sizes, args.branching, args.queries, args.users, args.runs, args.seed)

    summary = df.groupby("nodes")[["batched_s", "naive_s"]].mean()
    summary["speedup"] = summary["naive_s"] / summary["batched_s"]
    print(summary.to_string())

    os.makedirs(args.out, exist_ok=True)
    path = os.path.join(args.out, f"upgrade_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv")
    df.to_csv(path, index=False)
    print(f"Results saved to: {path}")
    if not df["agree"].all():
        sys.exit(1)


if __name__ == "__main__":
    main()

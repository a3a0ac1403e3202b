"""
Command line front end.

Usage:
    treelock < input.txt
    treelock --input input.txt --check
    treelock --input problem.json --json --save results --trace results/trace.jsonl

Prints one `true` / `false` line per query, in query order.
"""
import sys
import logging
import argparse
from treelock.config import load_config
from treelock.core.dispatch import process_queries
from treelock.core.engine import LockEngine
from treelock.core.tree import build_tree
from treelock.utils.audit import counter_mismatches
from treelock.utils.problem_io import format_results, load_problem_json, read_problem
from treelock.utils.save import save_results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Answer lock / unlock / upgrade queries on an m-ary tree")
    parser.add_argument('--input', type=str, default=None,
                        help="Problem file (default: stdin)")
    parser.add_argument('--json', action='store_true',
                        help="Input is a JSON problem file")
    parser.add_argument('--config', type=str, default=None,
                        help="JSON configuration file")
    parser.add_argument('--save', type=str, default=None, metavar='DIR',
                        help="Save outcomes as CSV under DIR")
    parser.add_argument('--trace', type=str, default=None, metavar='PATH',
                        help="Append every outcome to a JSONL trace")
    parser.add_argument('--check', action='store_true',
                        help="Recompute all counters after the run, exit 1 on drift")
    parser.add_argument('--verbose', action='store_true',
                        help="Debug logging on stderr")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config) if args.config else load_config()

    level = getattr(logging, str(cfg.log_level).upper(), None)
    if args.verbose:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    try:
        if args.json:
            if not args.input:
                raise ValueError("--json requires --input")
            problem = load_problem_json(args.input)
        elif args.input:
            with open(args.input, "r", encoding="utf-8") as f:
                problem = read_problem(f)
        else:
            problem = read_problem(sys.stdin)
        tree = build_tree(problem.labels, problem.branching, duplicate_labels=cfg.duplicate_labels)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    engine = LockEngine(tree)
    outcomes = process_queries(engine, problem.queries, trace_path=args.trace or cfg.trace_path)
    sys.stdout.write(format_results(o.result for o in outcomes))

    if args.save:
        path = save_results(outcomes, folder=args.save)
        logging.info(f"[SAVE] outcomes written to {path}")

    if args.check:
        bad = counter_mismatches(engine)
        if bad:
            print(f"Counter drift on {len(bad)} node(s): {bad[:10]}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

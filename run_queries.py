#!/usr/bin/env python3
"""
Answer tree lock queries from stdin or a file.

Usage:
    python run_queries.py < input.txt
    python run_queries.py --input input.txt --check
"""
import sys

from treelock.cli import main

if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Main entry point for KD-tree nearest neighbor search.

This script provides a command-line interface for building a KD-tree from a
points file and answering nearest neighbor queries against it.
"""

import argparse
import sys
import time

import numpy as np

from kdsearch import KDTree, read_points, print_points, parse_point, query_many
from kdsearch.visualization import plot_partitions


def build_tree(data_path, print_data=False, verbose=True):
    """Load points from a file and build the tree."""
    print(f"\nLoading points from {data_path}...")
    points = read_points(data_path)
    print(f"  Points: {len(points)}")

    if print_data:
        print_points(points)

    tree = KDTree(verbose=verbose)
    tree.build(points)
    print(f"  Tree: {len(tree)} points, dimension {tree.dimension}, depth {tree.depth}")
    return tree


def run_single_queries(tree, queries):
    """Answer each query and print its nearest node."""
    for query in queries:
        point_id, distance = tree.query_with_distance(query)
        values = " ".join(f"{v:g}" for v in query)
        print(f"nearest node to ({values}) = {point_id} (squared distance {distance:.6g})")


def run_batch_queries(tree, queries_path, n_jobs=4, output_path=None):
    """Answer every row of a queries file, optionally in parallel."""
    queries = [p.coords for p in read_points(queries_path)]
    print(f"\nRunning {len(queries)} queries (n_jobs={n_jobs})...")

    start = time.time()
    ids, distances = query_many(tree, queries, n_jobs=n_jobs)
    elapsed = time.time() - start

    print(f"  ✓ Done in {elapsed:.3f}s ({len(queries) / max(elapsed, 1e-9):,.0f} queries/s)")
    if output_path:
        np.savetxt(output_path, np.column_stack([ids, distances]), fmt=['%d', '%.10g'])
        print(f"Results saved to {output_path}")
    else:
        for i, (point_id, distance) in enumerate(zip(ids, distances)):
            print(f"  {i}: nearest node = {point_id} (squared distance {distance:.6g})")
    return ids, distances


def main():
    parser = argparse.ArgumentParser(
        description='KD-tree nearest neighbor search',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Single query
  python run_search.py points.txt --query "0.9 0.9"

  # Several queries, printing the loaded data first
  python run_search.py points.txt --print-data -q "0 0" -q "5 5"

  # Batch queries from a file, in parallel
  python run_search.py points.txt --queries-file queries.txt --n-jobs 4 --output nearest.txt

  # Plot a 2-D tree with a query
  python run_search.py points.txt --query "3 4" --plot
        """
    )

    parser.add_argument('data', help='Points file, one whitespace-separated point per line')
    parser.add_argument('-q', '--query', action='append', default=[],
                        help='Query point as a whitespace-separated string (repeatable)')
    parser.add_argument('--queries-file', help='File with one query point per line')
    parser.add_argument('--n-jobs', type=int, default=4,
                        help='Parallel workers for --queries-file (default: 4)')
    parser.add_argument('--output', help='Write batch results (id, squared distance) to this file')
    parser.add_argument('--print-data', action='store_true', help='Print the loaded points')
    parser.add_argument('--plot', action='store_true', help='Plot the tree partitions (2-D only)')
    parser.add_argument('--quiet', action='store_true', help='Do not print build timing')

    args = parser.parse_args()

    try:
        tree = build_tree(args.data, print_data=args.print_data, verbose=not args.quiet)

        queries = [parse_point(q) for q in args.query]
        if not queries and not args.queries_file:
            queries = [parse_point(input("Enter point: "))]

        run_single_queries(tree, queries)

        if args.queries_file:
            run_batch_queries(tree, args.queries_file, n_jobs=args.n_jobs, output_path=args.output)

        if args.plot:
            plot_partitions(tree, query_point=queries[0] if queries else None)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

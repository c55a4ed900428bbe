"""Batch nearest neighbor queries against a finished KD-tree."""

import numpy as np
from joblib import Parallel, delayed


def _query_chunk(tree, queries):
    return [tree.query_with_distance(q) for q in queries]


def query_many(tree, queries, n_jobs=1, backend='loky', chunk_size=256):
    """
    Find the nearest stored point for every query point.

    The tree is only read, so chunks of queries can run in parallel.

    Args:
        tree: Built, non-empty KDTree
        queries: Array-like of shape (m, k), or a sequence of Points
        n_jobs: Number of joblib workers (1 runs in-process)
        backend: joblib backend, 'loky' or 'threading'
        chunk_size: Queries handed to a worker at a time

    Returns:
        Tuple of (ids, squared_distances) as numpy arrays of length m
    """
    if tree.root is None:
        raise RuntimeError("Cannot query an empty KD-tree")
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")

    queries = list(queries)
    if not queries:
        return np.empty(0, dtype=np.int64), np.empty(0, dtype=np.float64)

    chunks = [queries[i:i + chunk_size] for i in range(0, len(queries), chunk_size)]

    if n_jobs == 1:
        results = [_query_chunk(tree, chunk) for chunk in chunks]
    else:
        results = Parallel(n_jobs=n_jobs, backend=backend)(
            delayed(_query_chunk)(tree, chunk) for chunk in chunks
        )

    flat = [r for chunk in results for r in chunk]
    ids, distances = zip(*flat)
    return np.array(ids, dtype=np.int64), np.array(distances, dtype=np.float64)

"""General utility functions."""

import time
from functools import wraps
import numpy as np

from .point import as_coordinates


def time_function(func):
    """
    Decorator to time a method when its instance is verbose.
    For recursive calls, only the top-level call is timed.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if not getattr(self, "verbose", False) or wrapper._in_call:
            return func(self, *args, **kwargs)

        wrapper._in_call = True
        start_time = time.time()
        try:
            result = func(self, *args, **kwargs)
            elapsed = time.time() - start_time
            print(f"{func.__name__} took {elapsed:.6f} seconds")
            return result
        finally:
            wrapper._in_call = False

    wrapper._in_call = False
    return wrapper


def squared_distance(a, b):
    """Sum of squared per-dimension differences (no square root)."""
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.dot(diff, diff))


def brute_force_nearest(points, query_point):
    """
    Linear scan nearest neighbor, used as a reference for the KD-tree.

    Args:
        points: Sequence of Point objects
        query_point: Point or coordinate sequence

    Returns:
        Tuple of (point_id, squared_distance) of the first closest point
    """
    if len(points) == 0:
        raise RuntimeError("Cannot search an empty point set")

    query = as_coordinates(query_point)
    coords = np.stack([p.coords for p in points])
    if coords.shape[1] != query.shape[0]:
        raise ValueError(f"Query has dimension {query.shape[0]}, "
                         f"points have dimension {coords.shape[1]}")

    diffs = coords - query
    dists = np.einsum("ij,ij->i", diffs, diffs)
    idx = int(np.argmin(dists))
    return points[idx].id, float(dists[idx])

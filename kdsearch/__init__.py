"""
kdsearch - Static KD-tree nearest neighbor search

A small spatial index library featuring:
- KD-tree construction with variance-guided split dimensions and median partitioning
- Branch-and-bound nearest neighbor queries under squared Euclidean distance
- Parallel batch queries against a finished tree
- Plain-text point loading and 2-D partition plots
"""

from .kdtree import KDTree, Node
from .loader import read_points, print_points, parse_point
from .point import Point, points_from_array
from .search import query_many
from .utils import brute_force_nearest
from .visualization import plot_partitions

__version__ = "1.0.0"
__all__ = ["KDTree", "Node", "Point", "points_from_array", "read_points",
           "print_points", "parse_point", "query_many", "brute_force_nearest",
           "plot_partitions"]

"""KD-Tree implementation for spatial partitioning and nearest neighbor search."""

import numpy as np

from .point import Point, as_coordinates, points_from_array
from .utils import time_function, squared_distance


class Node:
    def __init__(self):
        self.point = None
        self.axis = None
        self.split_value = None
        self.left = None
        self.right = None
    def set_point(self, point):
        self.point = point
    def set_split(self, axis, split_value):
        self.axis = axis
        self.split_value = split_value
    def set_left(self, left):
        self.left = left
    def set_right(self, right):
        self.right = right

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"Node(leaf, id={self.point.id})"
        return f"Node(id={self.point.id}, axis={self.axis}, split={self.split_value:g})"


def select_split_axis(coords):
    """
    Pick the dimension with the largest sample variance.

    Args:
        coords: Array of shape (n, k) with n >= 2

    Returns:
        Index of the first dimension whose variance is strictly the largest
    """
    variances = np.var(coords, axis=0, ddof=1)
    axis = 0
    max_var = -1.0
    for i, var in enumerate(variances):
        if var > max_var:
            axis = i
            max_var = var
    return axis


class KDTree:
    """
    Static KD-tree over identified points.

    Split dimension is chosen by maximum variance and every node holds the
    median point of its range, so each leaf holds exactly one point.
    """

    def __init__(self, verbose=False):
        self.root = None
        self.dimension = None
        self.size = 0
        self.verbose = verbose
        self._built = False

    @classmethod
    def from_array(cls, array, verbose=False):
        """Build a tree from an (n, k) array, using row indices as point ids."""
        tree = cls(verbose=verbose)
        tree.build(points_from_array(array))
        return tree

    @time_function
    def build(self, points):
        """
        Build the tree from a list of points.

        The list is permuted in place while partitioning, so callers must not
        rely on its order afterwards. Points themselves are never copied or
        modified.

        Args:
            points: List of Point objects sharing one dimensionality

        Returns:
            The root node, or None for an empty list
        """
        if self._built:
            raise RuntimeError("KD-tree is already built")
        if not isinstance(points, list):
            raise TypeError(f"build() needs a list it can reorder, got {type(points).__name__}; "
                            "use KDTree.from_array for arrays")

        self.dimension = self._check_dimensions(points)
        self.root = self._build_subtree(points, 0, len(points))
        self.size = len(points)
        self._built = True
        return self.root

    def _check_dimensions(self, points):
        if not points:
            return None
        for point in points:
            if not isinstance(point, Point):
                raise TypeError(f"Expected Point objects, got {type(point).__name__}")
        dimension = points[0].dimension
        if dimension == 0:
            raise ValueError(f"Point {points[0].id} has no coordinates")
        for point in points:
            if point.dimension != dimension:
                raise ValueError(f"Point {point.id} has dimension {point.dimension}, "
                                 f"expected {dimension}")
        return dimension

    def _build_subtree(self, points, lo, hi):
        n_points = hi - lo

        # No points
        if n_points == 0:
            return None

        # Leaf: single point, no split
        if n_points == 1:
            leaf = Node()
            leaf.set_point(points[lo])
            return leaf

        # Choose splitting axis and partition the range about its median
        axis, split_value = self._partition(points, lo, hi)
        median = lo + n_points // 2

        node = Node()
        node.set_point(points[median])
        node.set_split(axis, split_value)
        node.set_left(self._build_subtree(points, lo, median))
        node.set_right(self._build_subtree(points, median + 1, hi))
        return node

    def _partition(self, points, lo, hi):
        coords = np.stack([p.coords for p in points[lo:hi]])
        axis = select_split_axis(coords)

        median_index = (hi - lo) // 2
        # argpartition places the median at its sorted position, smaller before, larger after
        order = np.argpartition(coords[:, axis], median_index)
        points[lo:hi] = [points[lo + i] for i in order]

        return axis, float(coords[order[median_index], axis])

    def query(self, point):
        """Return the id of the stored point closest to ``point``."""
        point_id, _ = self.query_with_distance(point)
        return point_id

    def query_with_distance(self, point):
        """
        Nearest neighbor search.

        Args:
            point: Point or coordinate sequence of the tree's dimensionality

        Returns:
            Tuple of (point_id, squared_distance)
        """
        if self.root is None:
            raise RuntimeError("Cannot query an empty KD-tree")

        query = as_coordinates(point)
        if query.shape[0] != self.dimension:
            raise ValueError(f"Query has dimension {query.shape[0]}, "
                             f"tree has dimension {self.dimension}")
        if not np.all(np.isfinite(query)):
            raise ValueError(f"Query coordinates must be finite, got {query}")

        best = [None, np.inf]
        self._nearest(query, self.root, best)
        return best[0], best[1]

    def _nearest(self, query, node, best):
        distance = squared_distance(query, node.point.coords)
        if distance < best[1]:
            best[0] = node.point.id
            best[1] = distance

        if node.is_leaf:
            return

        offset = query[node.axis] - node.split_value
        if offset <= 0:
            near, far = node.left, node.right
        else:
            near, far = node.right, node.left

        if near is not None:
            self._nearest(query, near, best)

        # Far side can only help if the splitting plane is closer than the best so far
        if far is not None and offset * offset < best[1]:
            self._nearest(query, far, best)

    @property
    def depth(self):
        """Number of levels in the tree (0 when empty)."""
        def _depth(node):
            if node is None:
                return 0
            return 1 + max(_depth(node.left), _depth(node.right))
        return _depth(self.root)

    def nodes(self):
        """Iterate over nodes in pre-order."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def __iter__(self):
        for node in self.nodes():
            yield node.point

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"KDTree(size={self.size}, dimension={self.dimension}, depth={self.depth})"

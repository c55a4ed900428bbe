"""Point data model shared by the tree builder, the searcher and the loader."""

import numpy as np


class Point:
    """An identified, immutable k-dimensional point."""

    __slots__ = ("_id", "_coords")

    def __init__(self, point_id, coords):
        """
        Create a point.

        Args:
            point_id: Non-negative integer identifier
            coords: Sequence of real coordinates (copied, then frozen)
        """
        point_id = int(point_id)
        if point_id < 0:
            raise ValueError(f"Point id must be non-negative, got {point_id}")
        coords = np.array(coords, dtype=np.float64)
        if coords.ndim > 1:
            raise ValueError(f"Point {point_id} coordinates must be 1D, got shape {coords.shape}")
        coords = coords.reshape(-1)
        if not np.all(np.isfinite(coords)):
            raise ValueError(f"Point {point_id} has non-finite coordinates: {coords}")
        coords.flags.writeable = False
        self._id = point_id
        self._coords = coords

    @property
    def id(self):
        return self._id

    @property
    def coords(self):
        return self._coords

    @property
    def dimension(self):
        return self.coords.shape[0]

    def __len__(self):
        return self.coords.shape[0]

    def __repr__(self):
        values = ", ".join(f"{v:g}" for v in self.coords)
        return f"Point(id={self.id}, coords=[{values}])"


def points_from_array(array, ids=None):
    """
    Wrap the rows of an (n, k) array as points.

    Args:
        array: Array-like of shape (n, k); a 1D array is treated as n 1-D points
        ids: Optional identifiers, defaults to row indices

    Returns:
        List of Point objects, in row order
    """
    array = np.asarray(array, dtype=np.float64)
    if array.ndim == 1:
        array = array[:, np.newaxis]
    if array.ndim != 2:
        raise ValueError(f"Expected a 2D array of points, got shape {array.shape}")
    if ids is None:
        ids = range(array.shape[0])
    ids = list(ids)
    if len(ids) != array.shape[0]:
        raise ValueError(f"Got {len(ids)} ids for {array.shape[0]} points")
    return [Point(i, row) for i, row in zip(ids, array)]


def as_coordinates(point):
    # Accept a Point, a scalar or a flat sequence of numbers
    if isinstance(point, Point):
        return point.coords
    coords = np.asarray(point, dtype=np.float64)
    if coords.ndim > 1:
        raise ValueError(f"Query point must be 1D, got shape {coords.shape}")
    return coords.reshape(-1)

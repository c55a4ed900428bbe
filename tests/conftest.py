import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from kdsearch import KDTree, Point


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def scenario_tree():
    points = [Point(0, [0.0, 0.0]), Point(1, [10.0, 10.0]), Point(2, [1.0, 1.0])]
    tree = KDTree()
    tree.build(points)
    return tree


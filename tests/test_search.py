from __future__ import annotations

import numpy as np
import pytest

from kdsearch import KDTree, Point, brute_force_nearest, points_from_array, query_many


@pytest.fixture
def tree_and_points(rng):
    points = points_from_array(rng.uniform(0.0, 50.0, size=(300, 3)))
    reference = list(points)
    tree = KDTree()
    tree.build(points)
    return tree, reference


def test_batch_matches_single_queries(tree_and_points, rng) -> None:
    tree, _ = tree_and_points
    queries = rng.uniform(-5.0, 55.0, size=(100, 3))

    ids, distances = query_many(tree, queries, chunk_size=7)

    assert ids.shape == (100,)
    assert distances.shape == (100,)
    for q, point_id, dist in zip(queries, ids, distances):
        assert tree.query_with_distance(q) == (point_id, dist)


@pytest.mark.parametrize("backend", ["threading", "loky"])
def test_parallel_batch_matches_brute_force(tree_and_points, rng, backend: str) -> None:
    tree, reference = tree_and_points
    queries = rng.uniform(-5.0, 55.0, size=(60, 3))

    _, distances = query_many(tree, queries, n_jobs=2, backend=backend, chunk_size=16)

    expected = [brute_force_nearest(reference, q)[1] for q in queries]
    np.testing.assert_allclose(distances, expected, rtol=1e-12)


def test_batch_accepts_points(scenario_tree) -> None:
    ids, _ = query_many(scenario_tree, [Point(0, [0.9, 0.9]), Point(1, [9.0, 9.0])])
    assert ids.tolist() == [2, 1]


def test_batch_with_no_queries(scenario_tree) -> None:
    ids, distances = query_many(scenario_tree, np.empty((0, 2)))
    assert ids.size == 0
    assert distances.size == 0


def test_batch_on_empty_tree() -> None:
    tree = KDTree()
    tree.build([])
    with pytest.raises(RuntimeError):
        query_many(tree, [[0.0, 0.0]])


def test_batch_rejects_bad_chunk_size(scenario_tree) -> None:
    with pytest.raises(ValueError):
        query_many(scenario_tree, [[0.0, 0.0]], chunk_size=0)


def test_batch_propagates_dimension_errors(scenario_tree) -> None:
    with pytest.raises(ValueError, match="dimension"):
        query_many(scenario_tree, [[0.0, 0.0, 0.0]])


def test_brute_force_returns_first_of_ties() -> None:
    points = [Point(4, [1.0]), Point(9, [-1.0])]
    assert brute_force_nearest(points, [0.0]) == (4, 1.0)

    with pytest.raises(RuntimeError):
        brute_force_nearest([], [0.0])

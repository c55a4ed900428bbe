from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pytest

from kdsearch import KDTree, plot_partitions


def test_plot_partitions_saves_figure(rng, tmp_path: Path) -> None:
    tree = KDTree.from_array(rng.uniform(0.0, 10.0, size=(40, 2)))
    save_path = tmp_path / "partitions.png"

    fig = plot_partitions(tree, query_point=[5.0, 5.0], save_path=save_path, show=False)

    assert save_path.exists()
    assert "Nearest: id" in fig.axes[0].get_title()
    plt.close(fig)


def test_plot_partitions_without_saving(scenario_tree) -> None:
    fig = plot_partitions(scenario_tree, save_path=None, show=False)
    assert len(fig.axes) == 1
    plt.close(fig)


def test_plot_partitions_needs_2d_tree(rng) -> None:
    tree = KDTree.from_array(rng.uniform(size=(10, 3)))
    with pytest.raises(ValueError, match="2-D"):
        plot_partitions(tree, save_path=None, show=False)

    empty = KDTree()
    empty.build([])
    with pytest.raises(RuntimeError):
        plot_partitions(empty, save_path=None, show=False)

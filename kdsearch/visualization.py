"""Visualization utilities for 2-D KD-trees."""

import matplotlib.pyplot as plt
import numpy as np


def _draw_splits(ax, node, bounds, depth, max_depth):
    if node is None or node.is_leaf:
        return
    (x_min, x_max), (y_min, y_max) = bounds
    alpha = max(0.25, 1.0 - depth / max(max_depth, 1))

    if node.axis == 0:
        ax.plot([node.split_value, node.split_value], [y_min, y_max],
                color='#C0392B', linewidth=1.2, alpha=alpha)
        left_bounds = ((x_min, node.split_value), (y_min, y_max))
        right_bounds = ((node.split_value, x_max), (y_min, y_max))
    else:
        ax.plot([x_min, x_max], [node.split_value, node.split_value],
                color='#2E86AB', linewidth=1.2, alpha=alpha)
        left_bounds = ((x_min, x_max), (y_min, node.split_value))
        right_bounds = ((x_min, x_max), (node.split_value, y_max))

    _draw_splits(ax, node.left, left_bounds, depth + 1, max_depth)
    _draw_splits(ax, node.right, right_bounds, depth + 1, max_depth)


def plot_partitions(tree, query_point=None, save_path='kdtree_partitions.png',
                    show=True, annotate=None):
    """
    Plot the points of a 2-D KD-tree with its splitting lines.

    Args:
        tree: Built KDTree of dimension 2
        query_point: Optional query; its nearest neighbor is highlighted
        save_path: Path to save the plot (None to skip saving)
        show: Whether to open a window with the plot
        annotate: Label points with their ids (default: only for small trees)

    Returns:
        The matplotlib Figure
    """
    if tree.root is None:
        raise RuntimeError("Cannot plot an empty KD-tree")
    if tree.dimension != 2:
        raise ValueError(f"Only 2-D trees can be plotted, tree has dimension {tree.dimension}")

    points = list(tree)
    coords = np.stack([p.coords for p in points])
    if annotate is None:
        annotate = len(points) <= 50

    fig, ax = plt.subplots(figsize=(9, 9))

    # Pad the bounding box so border splits stay visible
    lo = coords.min(axis=0)
    hi = coords.max(axis=0)
    pad = np.maximum((hi - lo) * 0.05, 1.0)
    bounds = ((lo[0] - pad[0], hi[0] + pad[0]), (lo[1] - pad[1], hi[1] + pad[1]))

    _draw_splits(ax, tree.root, bounds, 0, tree.depth)
    ax.scatter(coords[:, 0], coords[:, 1], s=18, color='black', zorder=3, label='Points')

    if annotate:
        for p in points:
            ax.annotate(str(p.id), p.coords, textcoords='offset points', xytext=(4, 4), fontsize=8)

    title = f'KD-Tree Partitions ({len(points)} points, depth {tree.depth})'
    if query_point is not None:
        query = np.asarray(query_point, dtype=np.float64)
        nearest_id, distance = tree.query_with_distance(query)
        nearest = next(p for p in points if p.id == nearest_id)
        ax.scatter([query[0]], [query[1]], s=80, marker='x', color='#E67E22',
                   zorder=4, label='Query')
        ax.scatter([nearest.coords[0]], [nearest.coords[1]], s=120, facecolors='none',
                   edgecolors='#27AE60', linewidths=2, zorder=4, label=f'Nearest (id {nearest_id})')
        ax.plot([query[0], nearest.coords[0]], [query[1], nearest.coords[1]],
                color='#27AE60', linestyle='--', linewidth=1)
        title += f'\nNearest: id {nearest_id} (squared distance {distance:.4f})'

    ax.set_xlim(*bounds[0])
    ax.set_ylim(*bounds[1])
    ax.set_xlabel('x', fontsize=12)
    ax.set_ylabel('y', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')

    plt.tight_layout()
    if save_path is not None:
        plt.savefig(save_path, dpi=150)
        print(f"Partition plot saved to '{save_path}'")
    if show:
        plt.show()
    return fig

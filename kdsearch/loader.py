"""Reading points from whitespace-separated text files and printing them."""

import numpy as np

from .point import Point


def read_points(filepath):
    """
    Load points from a text file, one point per line.

    The id of each point is its 0-based line number. Blank lines are
    skipped but still counted.

    Args:
        filepath: Path to the data file

    Returns:
        List of Point objects in file order
    """
    points = []
    dimension = None

    with open(filepath, 'r') as f:
        for line_number, line in enumerate(f):
            tokens = line.split()
            if not tokens:
                continue
            try:
                values = [float(t) for t in tokens]
            except ValueError:
                raise ValueError(f"{filepath}:{line_number + 1}: non-numeric value in {line.strip()!r}") from None

            if dimension is None:
                dimension = len(values)
            elif len(values) != dimension:
                raise ValueError(f"{filepath}:{line_number + 1}: expected {dimension} values, "
                                 f"got {len(values)}")
            if not np.all(np.isfinite(values)):
                raise ValueError(f"{filepath}:{line_number + 1}: non-finite value in {line.strip()!r}")

            points.append(Point(line_number, values))

    return points


def parse_point(text):
    """Parse a whitespace-separated coordinate line typed by a user."""
    tokens = text.split()
    if not tokens:
        raise ValueError("Empty point")
    try:
        return np.array([float(t) for t in tokens], dtype=np.float64)
    except ValueError:
        raise ValueError(f"Could not parse point {text.strip()!r}") from None


def format_points(points):
    lines = []
    for p in points:
        values = " ".join(f"{v:g}" for v in p.coords)
        lines.append(f"{p.id} : {values}")
    return "\n".join(lines)


def print_points(points):
    text = format_points(points)
    if text:
        print(text)

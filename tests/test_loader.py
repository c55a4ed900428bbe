from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from kdsearch import KDTree, parse_point, print_points, read_points
from kdsearch.loader import format_points


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "points.txt"
    path.write_text(text)
    return path


def test_read_points_uses_line_numbers_as_ids(tmp_path: Path) -> None:
    path = _write(tmp_path, "0 0\n10 10\n\n1 1\n")

    points = read_points(path)

    assert [p.id for p in points] == [0, 1, 3]
    np.testing.assert_array_equal(points[2].coords, [1.0, 1.0])


def test_read_points_handles_mixed_whitespace(tmp_path: Path) -> None:
    path = _write(tmp_path, "  1.5\t-2e3   4\n0 0 0")

    points = read_points(path)

    assert len(points) == 2
    np.testing.assert_array_equal(points[0].coords, [1.5, -2000.0, 4.0])


def test_loaded_points_build_a_searchable_tree(tmp_path: Path) -> None:
    path = _write(tmp_path, "0 0\n10 10\n1 1\n")
    tree = KDTree()
    tree.build(read_points(path))
    assert tree.query(parse_point("0.9 0.9")) == 2


def test_read_points_rejects_non_numeric(tmp_path: Path) -> None:
    path = _write(tmp_path, "1 2\n3 x\n")
    with pytest.raises(ValueError, match=":2:"):
        read_points(path)


def test_read_points_rejects_ragged_rows(tmp_path: Path) -> None:
    path = _write(tmp_path, "1 2\n3 4 5\n")
    with pytest.raises(ValueError, match="expected 2 values"):
        read_points(path)


def test_read_points_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_points(tmp_path / "missing.txt")


def test_read_points_empty_file(tmp_path: Path) -> None:
    assert read_points(_write(tmp_path, "\n\n")) == []


def test_parse_point() -> None:
    np.testing.assert_array_equal(parse_point(" 0.5  -1 3 "), [0.5, -1.0, 3.0])
    with pytest.raises(ValueError):
        parse_point("   ")
    with pytest.raises(ValueError):
        parse_point("1 two")


def test_print_points(tmp_path: Path, capsys) -> None:
    points = read_points(_write(tmp_path, "0 0.5\n10 10\n"))

    assert format_points(points) == "0 : 0 0.5\n1 : 10 10"
    print_points(points)
    assert capsys.readouterr().out == "0 : 0 0.5\n1 : 10 10\n"

    print_points([])
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("token", ["nan", "inf", "-inf", "NaN"])
def test_read_points_rejects_non_finite_values(tmp_path: Path, token: str) -> None:
    path = _write(tmp_path, f"1 2\n3 4\n{token} 0\n")
    with pytest.raises(ValueError, match=":3: non-finite"):
        read_points(path)

"""
Tests for box geometry and grid helpers.

Usage:
    pytest tests/test_board.py
"""

import pytest

from gridsolver.solver import (
    BoxShape,
    InvalidGridError,
    count_filled,
    empty_grid,
    find_conflicts,
    is_solved,
    is_valid_placement,
    validate_grid,
)


@pytest.mark.parametrize("size,box_rows,box_cols", [
    (1, 1, 1),
    (4, 2, 2),
    (6, 2, 3),
    (8, 2, 4),
    (9, 3, 3),
    (12, 3, 4),
    (16, 4, 4),
    (25, 5, 5),
])
def test_box_shape_for_size(size, box_rows, box_cols):
    """Box partition is derived from N, preferring the squarest rectangle."""
    shape = BoxShape.for_size(size)
    assert (shape.box_rows, shape.box_cols) == (box_rows, box_cols)
    assert shape.total_cells == size * size


def test_box_shape_rejects_bad_partition():
    """Box dimensions must multiply to N."""
    with pytest.raises(InvalidGridError):
        BoxShape(size=9, box_rows=2, box_cols=3)
    with pytest.raises(InvalidGridError):
        BoxShape.for_size(0)


def test_peers_are_unique():
    """A 9x9 cell has 20 distinct peers and never itself."""
    shape = BoxShape.for_size(9)
    peers = shape.peers(4, 4)
    assert len(peers) == 20
    assert len(set(peers)) == 20
    assert (4, 4) not in peers
    assert (3, 3) in peers  # box only
    assert (4, 0) in peers  # row
    assert (0, 4) in peers  # column


def test_peers_rectangular_box():
    """6x6 with 2x3 boxes: 5 row + 5 column + 2 box-only peers."""
    shape = BoxShape.for_size(6)
    peers = shape.peers(0, 0)
    assert len(peers) == 12
    assert (1, 2) in peers
    assert (2, 0) in peers  # column, not box
    assert (1, 3) not in peers


def test_box_origin():
    shape = BoxShape(size=6, box_rows=2, box_cols=3)
    assert shape.box_origin(3, 4) == (2, 3)
    assert shape.box_origin(0, 2) == (0, 0)


def test_validity_and_conflicts(classic_puzzle, classic_solution):
    """Placement check and conflict scan agree with the classic puzzle."""
    shape = BoxShape.for_size(9)
    assert not is_valid_placement(classic_puzzle, shape, 0, 2, 5)  # row
    assert not is_valid_placement(classic_puzzle, shape, 0, 2, 8)  # box
    assert is_valid_placement(classic_puzzle, shape, 0, 2, 4)
    assert find_conflicts(classic_puzzle, shape) == []

    classic_puzzle[0][2] = 3
    assert find_conflicts(classic_puzzle, shape) == [(0, 1), (0, 2)]

    assert is_solved(classic_solution, shape)
    assert not is_solved(classic_puzzle, shape)


def test_count_filled(classic_puzzle):
    assert count_filled(classic_puzzle) == 30
    assert count_filled(empty_grid(4)) == 0


@pytest.mark.parametrize("grid", [
    [[0, 0, 0], [0, 0, 0], [0, 0, 0]],
    [[0, 0, 0, 0], [0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    [[0, 0, 0, 5], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    [[0, 0, 0, -1], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    [[0, 0, 0, "1"], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
])
def test_validate_grid_rejects_malformed(grid):
    """Wrong dimensions or values outside 0..N are rejected."""
    with pytest.raises(InvalidGridError):
        validate_grid(grid, BoxShape.for_size(4))

"""
Board Module - Grid representation and box geometry for Sudoku-style grids.

Grids are N x N lists of lists of ints, 0 meaning empty. The box partition
(box_rows x box_cols = N) is fixed for the lifetime of a request.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from .errors import InvalidGridError

Grid = List[List[int]]
Cell = Tuple[int, int]


@dataclass(frozen=True)
class BoxShape:
    """
    Box partition of an N x N grid.

    Attributes:
        size: Grid side length N (values run 1..N)
        box_rows: Rows per box
        box_cols: Columns per box
    """
    size: int
    box_rows: int
    box_cols: int

    def __post_init__(self):
        if self.size < 1:
            raise InvalidGridError(f"Grid size must be positive, got {self.size}")
        if self.box_rows < 1 or self.box_cols < 1:
            raise InvalidGridError(
                f"Box dimensions must be positive, got {self.box_rows}x{self.box_cols}"
            )
        if self.box_rows * self.box_cols != self.size:
            raise InvalidGridError(
                f"Box {self.box_rows}x{self.box_cols} does not partition a "
                f"{self.size}x{self.size} grid"
            )

    @classmethod
    def for_size(cls, size: int) -> 'BoxShape':
        """
        Derive the box partition from the grid size.

        Perfect squares get square boxes (4 -> 2x2, 9 -> 3x3, 16 -> 4x4).
        Other sizes use the largest divisor not exceeding sqrt(N) as the
        box height (6 -> 2x3, 12 -> 3x4).

        Args:
            size: Grid side length N

        Returns:
            BoxShape for the grid

        Raises:
            InvalidGridError: If size is not positive
        """
        if size < 1:
            raise InvalidGridError(f"Grid size must be positive, got {size}")

        box_rows = 1
        for candidate in range(math.isqrt(size), 0, -1):
            if size % candidate == 0:
                box_rows = candidate
                break
        return cls(size=size, box_rows=box_rows, box_cols=size // box_rows)

    @property
    def total_cells(self) -> int:
        """Number of cells in the grid."""
        return self.size * self.size

    def box_origin(self, row: int, col: int) -> Cell:
        """Top-left cell of the box containing (row, col)."""
        return (row // self.box_rows) * self.box_rows, (col // self.box_cols) * self.box_cols

    def peers(self, row: int, col: int) -> Tuple[Cell, ...]:
        """
        Cells sharing a row, column or box with (row, col).

        Each peer appears once, even where row and box overlap.
        Order is row peers, then column peers, then the rest of the box.
        """
        return _peer_cells(self, row, col)


@lru_cache(maxsize=None)
def _peer_cells(shape: BoxShape, row: int, col: int) -> Tuple[Cell, ...]:
    seen = set()
    peers: List[Cell] = []

    def add(cell: Cell):
        if cell != (row, col) and cell not in seen:
            seen.add(cell)
            peers.append(cell)

    for c in range(shape.size):
        add((row, c))
    for r in range(shape.size):
        add((r, col))
    br, bc = shape.box_origin(row, col)
    for r in range(br, br + shape.box_rows):
        for c in range(bc, bc + shape.box_cols):
            add((r, c))

    return tuple(peers)


def empty_grid(size: int) -> Grid:
    """Create an N x N grid of empty cells."""
    return [[0] * size for _ in range(size)]


def copy_grid(grid: Grid) -> Grid:
    """Deep copy a grid (rows are copied, not shared)."""
    return [list(row) for row in grid]


def count_filled(grid: Grid) -> int:
    """Count non-empty cells."""
    return sum(1 for row in grid for value in row if value != 0)


def is_valid_placement(grid: Grid, shape: BoxShape, row: int, col: int, value: int) -> bool:
    """
    Check that value does not already occur in the row, column or box of (row, col).

    The cell itself is not inspected, so this also works for a cell that
    currently holds a value.
    """
    for r, c in shape.peers(row, col):
        if grid[r][c] == value:
            return False
    return True


def find_conflicts(grid: Grid, shape: BoxShape) -> List[Cell]:
    """
    Find filled cells whose value also appears among their peers.

    Args:
        grid: Grid to scan
        shape: Box partition

    Returns:
        List of (row, col) in row-major order, empty if the grid is consistent
    """
    conflicts = []
    for r in range(shape.size):
        for c in range(shape.size):
            value = grid[r][c]
            if value != 0 and not is_valid_placement(grid, shape, r, c, value):
                conflicts.append((r, c))
    return conflicts


def is_solved(grid: Grid, shape: BoxShape) -> bool:
    """True if every cell is filled and no row, column or box repeats a value."""
    if count_filled(grid) != shape.total_cells:
        return False
    return not find_conflicts(grid, shape)


def validate_grid(grid: Grid, shape: BoxShape) -> None:
    """
    Check grid dimensions and value range against the box shape.

    Raises:
        InvalidGridError: If the grid is not N x N or holds values outside 0..N
    """
    if len(grid) != shape.size:
        raise InvalidGridError(f"Expected {shape.size} rows, got {len(grid)}")

    for r, row in enumerate(grid):
        if len(row) != shape.size:
            raise InvalidGridError(f"Row {r} has {len(row)} cells, expected {shape.size}")
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidGridError(f"Cell ({r},{c}) is not an integer: {value!r}")
            if not 0 <= value <= shape.size:
                raise InvalidGridError(
                    f"Cell ({r},{c}) value {value} outside 0..{shape.size}"
                )

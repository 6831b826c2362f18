"""
Generator Module - Random complete grids and puzzles derived from them.

generate_solved_board() fills an empty grid by randomized backtracking:
first empty cell in scan order, values tried in shuffled order, validity
checked directly against the grid. remove_cells() then clears a random
subset of cells. Puzzles are not checked for uniqueness and may admit
more than one solution.
"""

import logging
import random
from typing import List, Optional

from .board import BoxShape, Cell, Grid, copy_grid, count_filled, empty_grid, is_valid_placement
from .context import SearchContext, ensure_recursion_limit
from .errors import GeneratorFailure, InvalidGridError
from .progress import ProgressReporter
from .solution import GenerateResult

logger = logging.getLogger(__name__)

# Grids at least this large get a random first row before searching
PRE_SEED_MIN_SIZE = 16

# Share of cells kept as clues for sizes without a dedicated range
DEFAULT_CLUE_RATIO = 0.35


def get_clue_count(size: int, rng: Optional[random.Random] = None) -> int:
    """
    Number of clues to keep for a grid of the given size.

    4x4 keeps 6-8, 9x9 keeps 28-32 and 16x16 keeps 80-100 (uniformly
    chosen). Any other size keeps 35% of its cells.

    Args:
        size: Grid side length N
        rng: Random source (module random if None)

    Returns:
        Clue count
    """
    rng = rng or random
    if size == 4:
        return rng.randint(6, 8)
    if size == 9:
        return rng.randint(28, 32)
    if size == 16:
        return rng.randint(80, 100)
    return int(size * size * DEFAULT_CLUE_RATIO)


def generate_solved_board(
    shape: BoxShape,
    reporter: Optional[ProgressReporter] = None,
    rng: Optional[random.Random] = None,
    pre_seed_min_size: int = PRE_SEED_MIN_SIZE,
) -> Grid:
    """
    Build a random completely filled grid.

    Args:
        shape: Box partition
        reporter: Optional progress reporter
        rng: Random source (module random if None)
        pre_seed_min_size: Grids this large start from a shuffled first row

    Returns:
        N x N grid with every value once per row, column and box

    Raises:
        GeneratorFailure: If the search is exhausted without a full grid
    """
    rng = rng or random
    context = SearchContext(shape=shape, reporter=reporter)
    board = _fill_board(shape, context, rng, pre_seed_min_size)
    metrics = context.finish()
    logger.info(f"Generated full {shape.size}x{shape.size} board in "
                f"{metrics.computation_time_ms:.1f}ms, {metrics.backtracks} backtracks")
    return board


def remove_cells(solved: Grid, clue_count: int, rng: Optional[random.Random] = None) -> Grid:
    """
    Clear cells from a solved grid until clue_count filled cells remain.

    Positions are taken from a uniform shuffle of all cells. The input grid
    is not modified.

    Args:
        solved: Completely filled grid
        clue_count: Filled cells to keep
        rng: Random source (module random if None)

    Returns:
        Puzzle grid with exactly clue_count non-zero cells

    Raises:
        InvalidGridError: If clue_count is outside 0..N*N
    """
    rng = rng or random
    size = len(solved)
    total = size * size
    if not 0 <= clue_count <= total:
        raise InvalidGridError(f"Clue count {clue_count} outside 0..{total}")

    puzzle = copy_grid(solved)
    positions: List[Cell] = [(r, c) for r in range(size) for c in range(size)]
    rng.shuffle(positions)

    for r, c in positions[:total - clue_count]:
        puzzle[r][c] = 0

    return puzzle


def generate_puzzle(
    shape: BoxShape,
    reporter: Optional[ProgressReporter] = None,
    rng: Optional[random.Random] = None,
    pre_seed_min_size: int = PRE_SEED_MIN_SIZE,
) -> GenerateResult:
    """
    Generate a full board and strip it down to a puzzle.

    Args:
        shape: Box partition
        reporter: Optional progress reporter
        rng: Random source (module random if None)
        pre_seed_min_size: See generate_solved_board()

    Returns:
        GenerateResult holding the puzzle (never the full solution)
    """
    rng = rng or random
    context = SearchContext(shape=shape, reporter=reporter)
    solved = _fill_board(shape, context, rng, pre_seed_min_size)

    clue_count = get_clue_count(shape.size, rng)
    puzzle = remove_cells(solved, clue_count, rng)
    metrics = context.finish()

    logger.info(f"Generated {shape.size}x{shape.size} puzzle with {count_filled(puzzle)} clues "
                f"in {metrics.computation_time_ms:.1f}ms")
    return GenerateResult(grid=puzzle, clue_count=clue_count, metrics=metrics)


def _fill_board(shape: BoxShape, context: SearchContext, rng, pre_seed_min_size: int) -> Grid:
    board = empty_grid(shape.size)
    if shape.size >= pre_seed_min_size:
        first_row = list(range(1, shape.size + 1))
        rng.shuffle(first_row)
        board[0] = first_row

    ensure_recursion_limit(shape.total_cells)
    if not _fill_random(board, shape, context, rng):
        raise GeneratorFailure(
            f"No complete {shape.size}x{shape.size} grid found for box "
            f"{shape.box_rows}x{shape.box_cols}"
        )
    return board


def _find_empty(board: Grid, size: int) -> Optional[Cell]:
    for r in range(size):
        for c in range(size):
            if board[r][c] == 0:
                return r, c
    return None


def _fill_random(board: Grid, shape: BoxShape, context: SearchContext, rng) -> bool:
    context.metrics.states_explored += 1
    empty = _find_empty(board, shape.size)
    if empty is None:
        return True
    row, col = empty

    values = list(range(1, shape.size + 1))
    rng.shuffle(values)
    for value in values:
        if not is_valid_placement(board, shape, row, col, value):
            continue
        board[row][col] = value
        context.report_progress(board)
        if _fill_random(board, shape, context, rng):
            return True
        board[row][col] = 0
        context.metrics.backtracks += 1

    return False

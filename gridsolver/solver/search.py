"""
Search Engine Module - Deterministic constraint-propagation solver.

Depth-first backtracking over the empty cells. At each step the cell with
the fewest live candidates is chosen (minimum remaining values, ties go to
the first cell in row-major order) and its candidates are tried in
ascending order. Each placement prunes the value from its peers through the
CandidateTracker; the returned removal log undoes exactly that placement
when the subtree fails.
"""

import logging
from typing import Optional, Tuple

from .board import BoxShape, Grid, copy_grid, find_conflicts, is_valid_placement, validate_grid
from .candidates import CandidateTracker
from .context import SearchContext, ensure_recursion_limit
from .progress import ProgressReporter
from .solution import SolveResult

logger = logging.getLogger(__name__)


def solve(grid: Grid, shape: BoxShape, reporter: Optional[ProgressReporter] = None) -> SolveResult:
    """
    Solve a partially filled grid.

    The input grid is copied; it is never modified.

    Args:
        grid: N x N grid, 0 = empty
        shape: Box partition
        reporter: Optional progress reporter (not reset here)

    Returns:
        SolveResult with the solution and success=True, or the untouched
        input and success=False if no solution exists or the clues conflict

    Raises:
        InvalidGridError: If the grid does not match the shape
    """
    validate_grid(grid, shape)
    board = copy_grid(grid)
    context = SearchContext(shape=shape, reporter=reporter)

    conflicts = find_conflicts(board, shape)
    if conflicts:
        logger.warning(f"Refusing to solve grid with {len(conflicts)} conflicting clues: {conflicts[:5]}")
        return SolveResult(grid=board, success=False, metrics=context.finish())

    ensure_recursion_limit(shape.total_cells)
    tracker = CandidateTracker(board, shape)

    logger.info(f"Solving {shape.size}x{shape.size} grid "
                f"(box {shape.box_rows}x{shape.box_cols})")
    success = _backtrack(board, tracker, context)
    metrics = context.finish()

    logger.info(f"Solve {'succeeded' if success else 'failed'} in {metrics.computation_time_ms:.1f}ms, "
                f"{metrics.states_explored} states, {metrics.backtracks} backtracks")

    return SolveResult(grid=board, success=success, metrics=metrics)


def select_cell(grid: Grid, tracker: CandidateTracker, size: int) -> Tuple[Optional[Tuple[int, int]], bool]:
    """
    Pick the empty cell with the fewest candidates.

    Args:
        grid: Live grid
        tracker: Candidate sets for grid
        size: Grid side length

    Returns:
        (cell, feasible): cell is None when the grid is full; feasible is
        False if some empty cell has no candidates left
    """
    best = None
    best_count = size + 1

    for r in range(size):
        for c in range(size):
            if grid[r][c] != 0:
                continue
            count = tracker.count(r, c)
            if count == 0:
                return None, False
            if count < best_count:
                best = (r, c)
                best_count = count
                if count == 1:
                    return best, True

    return best, True


def _backtrack(grid: Grid, tracker: CandidateTracker, context: SearchContext) -> bool:
    context.metrics.states_explored += 1
    context.report_progress(grid)

    cell, feasible = select_cell(grid, tracker, context.shape.size)
    if not feasible:
        return False
    if cell is None:
        return True

    row, col = cell
    for value in sorted(tracker.candidates(row, col)):
        # The grid is authoritative if a candidate set is ever stale
        if not is_valid_placement(grid, context.shape, row, col, value):
            logger.debug(f"Stale candidate {value} at ({row},{col}) skipped")
            continue

        grid[row][col] = value
        log = tracker.remove_from_peers(row, col, value)

        if _backtrack(grid, tracker, context):
            return True

        grid[row][col] = 0
        tracker.restore(log)
        context.metrics.backtracks += 1

    return False


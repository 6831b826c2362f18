"""
Solver Package - Constraint-propagation engine for Sudoku-style grids.

Solves partially filled N x N grids with rectangular boxes, generates
random complete grids and derives puzzles from them by clue removal.

Public API:
    - BoxShape: Box partition of a grid
    - CandidateTracker: Incremental candidate sets with exact undo
    - ProgressReporter / ProgressUpdate: Rate-limited fill statistics
    - solve(): Deterministic MCV backtracking solver
    - generate_solved_board(), remove_cells(), generate_puzzle()
    - SolveResult, GenerateResult, SearchMetrics

Usage:
    from gridsolver.solver import BoxShape, solve

    shape = BoxShape.for_size(9)
    result = solve(grid, shape)
    if result.success:
        print(result.grid)
"""

# Core data structures
from .board import (
    BoxShape,
    Grid,
    copy_grid,
    count_filled,
    empty_grid,
    find_conflicts,
    is_solved,
    is_valid_placement,
    validate_grid,
)
from .candidates import CandidateTracker
from .progress import ProgressReporter, ProgressUpdate
from .solution import SearchMetrics, SolveResult, GenerateResult
from .context import SearchContext
from .errors import (
    GridSolverError,
    InvalidGridError,
    UnknownRequestError,
    EngineBusyError,
    GeneratorFailure,
)

# Search routines
from .search import solve
from .generator import generate_solved_board, get_clue_count, remove_cells, generate_puzzle

__all__ = [
    # Data structures
    "BoxShape",
    "Grid",
    "copy_grid",
    "count_filled",
    "empty_grid",
    "find_conflicts",
    "is_solved",
    "is_valid_placement",
    "validate_grid",
    "CandidateTracker",
    "ProgressReporter",
    "ProgressUpdate",
    "SearchMetrics",
    "SolveResult",
    "GenerateResult",
    "SearchContext",
    # Errors
    "GridSolverError",
    "InvalidGridError",
    "UnknownRequestError",
    "EngineBusyError",
    "GeneratorFailure",
    # Search routines
    "solve",
    "generate_solved_board",
    "get_clue_count",
    "remove_cells",
    "generate_puzzle",
]

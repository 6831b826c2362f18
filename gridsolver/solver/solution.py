"""
Solution Module - Results of solve and generate requests.
"""

from dataclasses import dataclass, field

from .board import Grid


@dataclass
class SearchMetrics:
    """
    Performance metrics for one search.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Recursive descents into the search
        backtracks: Placements undone after a failed subtree
        progress_emitted: Progress notifications sent
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    backtracks: int = 0
    progress_emitted: int = 0


@dataclass
class SolveResult:
    """
    Result of solving a grid.

    Attributes:
        grid: Final grid (the solution on success, the input otherwise)
        success: True if a complete valid assignment was found
        metrics: Performance statistics
    """
    grid: Grid
    success: bool
    metrics: SearchMetrics = field(default_factory=SearchMetrics)


@dataclass
class GenerateResult:
    """
    Result of generating a puzzle.

    Attributes:
        grid: The puzzle, after clue removal
        clue_count: Number of filled cells left in the puzzle
        metrics: Statistics of the full-board search
    """
    grid: Grid
    clue_count: int
    metrics: SearchMetrics = field(default_factory=SearchMetrics)

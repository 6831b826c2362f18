"""
Candidate Tracker Module - Incremental per-cell candidate sets.

Each empty cell holds the set of values not yet ruled out by its row,
column or box. Sets are computed once in the constructor and afterwards
only edited through remove_from_peers()/restore(), which are exact inverses.
"""

from typing import Dict, FrozenSet, List, Set, Tuple

from .board import BoxShape, Cell, Grid

# (row, col, value) of a candidate removed from a peer
Removal = Tuple[int, int, int]


class CandidateTracker:
    """
    Live candidate sets for the empty cells of a grid.

    The tracker keeps a reference to the grid being searched (not a copy),
    so "empty" always means empty in the live grid.

    Example:
        tracker = CandidateTracker(grid, shape)
        grid[r][c] = v
        log = tracker.remove_from_peers(r, c, v)
        ...
        grid[r][c] = 0
        tracker.restore(log)
    """

    def __init__(self, grid: Grid, shape: BoxShape):
        """
        Compute initial candidate sets for every empty cell.

        Args:
            grid: Live grid (0 = empty)
            shape: Box partition
        """
        self._grid = grid
        self._shape = shape
        self._candidates: List[List[Set[int]]] = [
            [set() for _ in range(shape.size)] for _ in range(shape.size)
        ]

        for r in range(shape.size):
            for c in range(shape.size):
                if grid[r][c] != 0:
                    continue
                used = {grid[pr][pc] for pr, pc in shape.peers(r, c)}
                self._candidates[r][c] = {
                    v for v in range(1, shape.size + 1) if v not in used
                }

    def candidates(self, row: int, col: int) -> Set[int]:
        """Live candidate set of (row, col). Do not mutate the returned set."""
        return self._candidates[row][col]

    def count(self, row: int, col: int) -> int:
        """Number of live candidates at (row, col)."""
        return len(self._candidates[row][col])

    def remove_from_peers(self, row: int, col: int, value: int) -> List[Removal]:
        """
        Remove value from the candidate sets of all empty peers of (row, col).

        Args:
            row: Row of the cell just filled
            col: Column of the cell just filled
            value: Value placed there

        Returns:
            Removal log with one (peer_row, peer_col, value) entry per peer
            whose set actually changed
        """
        log: List[Removal] = []
        for r, c in self._shape.peers(row, col):
            if self._grid[r][c] != 0:
                continue
            peer_set = self._candidates[r][c]
            if value in peer_set:
                peer_set.discard(value)
                log.append((r, c, value))
        return log

    def restore(self, log: List[Removal]) -> None:
        """Undo a remove_from_peers() call by re-inserting each logged value."""
        for r, c, value in reversed(log):
            self._candidates[r][c].add(value)

    def snapshot(self) -> Dict[Cell, FrozenSet[int]]:
        """
        Frozen copy of all candidate sets, keyed by cell.

        Returns:
            Dict mapping (row, col) to the cell's candidates
        """
        return {
            (r, c): frozenset(self._candidates[r][c])
            for r in range(self._shape.size)
            for c in range(self._shape.size)
        }

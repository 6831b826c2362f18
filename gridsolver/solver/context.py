"""
Search Context Module - Per-request state shared by the search routines.
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Optional

from .board import BoxShape
from .progress import ProgressReporter
from .solution import SearchMetrics

logger = logging.getLogger(__name__)

# Frames kept free for callers above the search
RECURSION_HEADROOM = 200


@dataclass
class SearchContext:
    """
    State created at the start of one request and discarded at its end.

    Attributes:
        shape: Box partition of the grid being searched
        reporter: Progress reporter (None disables progress)
        metrics: Counters updated during the search
        start_time: perf_counter() value when the request started
    """
    shape: BoxShape
    reporter: Optional[ProgressReporter] = None
    metrics: SearchMetrics = field(default_factory=SearchMetrics)
    start_time: float = field(default_factory=time.perf_counter)

    def report_progress(self, grid) -> None:
        """Forward the grid to the reporter, if any."""
        if self.reporter and self.reporter.report(grid):
            self.metrics.progress_emitted += 1

    def elapsed_ms(self) -> float:
        """Milliseconds since the request started."""
        return (time.perf_counter() - self.start_time) * 1000

    def finish(self) -> SearchMetrics:
        """Stamp the elapsed time into the metrics and return them."""
        self.metrics.computation_time_ms = self.elapsed_ms()
        return self.metrics


def ensure_recursion_limit(total_cells: int) -> None:
    """Make room for one search frame per cell."""
    needed = total_cells + RECURSION_HEADROOM
    if sys.getrecursionlimit() < needed:
        logger.debug(f"Raising recursion limit to {needed}")
        sys.setrecursionlimit(needed)

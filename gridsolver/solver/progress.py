"""
Progress Reporter Module - Rate-limited fill statistics during a search.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .board import Grid, count_filled

logger = logging.getLogger(__name__)

# Minimum time between two notifications for the same request
DEFAULT_INTERVAL_MS = 60


@dataclass(frozen=True)
class ProgressUpdate:
    """
    Snapshot of how full the grid is.

    Attributes:
        filled: Non-empty cells
        empty: Empty cells
        total: All cells (filled + empty)
    """
    filled: int
    empty: int
    total: int

    @property
    def percent(self) -> float:
        """Fill ratio from 0.0 to 1.0."""
        return self.filled / self.total if self.total else 0.0


class ProgressReporter:
    """
    Emits ProgressUpdate notifications at most once per interval.

    The first report() after reset() always emits. Reporting never
    influences the search: report() only reads the grid.

    Attributes:
        interval_ms: Minimum milliseconds between notifications
        emitted: Notifications sent since the last reset
    """

    def __init__(
        self,
        callback: Optional[Callable[[ProgressUpdate], None]] = None,
        interval_ms: float = DEFAULT_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize reporter.

        Args:
            callback: Receives each emitted ProgressUpdate (None to only count)
            interval_ms: Minimum interval between notifications
            clock: Monotonic clock returning seconds
        """
        self.callback = callback
        self.interval_ms = interval_ms
        self._clock = clock
        self._last_emit: Optional[float] = None
        self.emitted = 0

    def reset(self) -> None:
        """Start a fresh request: the next report() emits unconditionally."""
        self._last_emit = None
        self.emitted = 0

    def report(self, grid: Grid) -> bool:
        """
        Emit a notification for grid if the interval has elapsed.

        Args:
            grid: Current grid

        Returns:
            True if a notification was emitted
        """
        now = self._clock()
        if self._last_emit is not None and (now - self._last_emit) * 1000 < self.interval_ms:
            return False
        self._last_emit = now

        total = len(grid) * len(grid)
        filled = count_filled(grid)
        update = ProgressUpdate(filled=filled, empty=total - filled, total=total)
        self.emitted += 1

        logger.debug(f"Progress: {filled}/{total} filled")
        if self.callback:
            self.callback(update)
        return True

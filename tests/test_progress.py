"""
Tests for rate-limited progress reporting.

Usage:
    pytest tests/test_progress.py
"""

from gridsolver.solver import ProgressReporter, ProgressUpdate, empty_grid


class FakeClock:
    """Monotonic clock advanced by hand (seconds)."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_first_report_always_emits():
    clock = FakeClock()
    updates = []
    reporter = ProgressReporter(updates.append, interval_ms=60, clock=clock)

    assert reporter.report(empty_grid(4))
    assert updates == [ProgressUpdate(filled=0, empty=16, total=16)]


def test_reports_are_rate_limited():
    clock = FakeClock()
    updates = []
    reporter = ProgressReporter(updates.append, interval_ms=60, clock=clock)
    grid = empty_grid(4)

    assert reporter.report(grid)
    clock.now += 0.010
    assert not reporter.report(grid)
    clock.now += 0.055  # 65ms since last emission
    grid[0][0] = 1
    assert reporter.report(grid)
    clock.now += 0.010
    assert not reporter.report(grid)

    assert [u.filled for u in updates] == [0, 1]
    assert reporter.emitted == 2


def test_reset_starts_a_fresh_request():
    clock = FakeClock()
    updates = []
    reporter = ProgressReporter(updates.append, interval_ms=60, clock=clock)
    grid = empty_grid(9)

    reporter.report(grid)
    clock.now += 0.001
    reporter.reset()
    assert reporter.report(grid)
    assert reporter.emitted == 1
    assert len(updates) == 2


def test_report_without_callback():
    reporter = ProgressReporter(interval_ms=60)
    assert reporter.report(empty_grid(4))
    assert reporter.emitted == 1


def test_percent():
    assert ProgressUpdate(filled=27, empty=54, total=81).percent == 27 / 81
    assert ProgressUpdate(filled=0, empty=0, total=0).percent == 0.0

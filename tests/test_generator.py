"""
Tests for full-board generation, clue counts and clue removal.

Usage:
    pytest tests/test_generator.py
"""

import random

import pytest

from gridsolver.solver import (
    BoxShape,
    GeneratorFailure,
    InvalidGridError,
    ProgressReporter,
    count_filled,
    copy_grid,
    find_conflicts,
    generate_puzzle,
    generate_solved_board,
    get_clue_count,
    is_solved,
    remove_cells,
    solve,
)
from gridsolver.solver import generator


@pytest.mark.parametrize("size", [4, 6, 8, 9, 16])
def test_generated_board_is_valid(size):
    """Every row, column and box holds 1..N exactly once."""
    shape = BoxShape.for_size(size)
    board = generate_solved_board(shape, rng=random.Random(0))
    assert is_solved(board, shape)


def test_generated_boards_differ():
    shape = BoxShape.for_size(9)
    rng = random.Random(42)
    boards = [generate_solved_board(shape, rng=rng) for _ in range(3)]
    assert boards[0] != boards[1] or boards[1] != boards[2]


def test_default_pre_seed_for_16x16():
    """16x16 boards start from a shuffled first row without any override."""
    shape = BoxShape.for_size(16)
    board = generate_solved_board(shape, rng=random.Random(0))
    assert sorted(board[0]) == list(range(1, 17))
    assert is_solved(board, shape)


def test_pre_seeded_first_row():
    """With pre-seeding the first row is a permutation and the board stays valid."""
    shape = BoxShape.for_size(4)
    board = generate_solved_board(shape, rng=random.Random(3), pre_seed_min_size=4)
    assert sorted(board[0]) == [1, 2, 3, 4]
    assert is_solved(board, shape)


def test_generator_reports_progress():
    updates = []
    reporter = ProgressReporter(updates.append, interval_ms=0)
    generate_solved_board(BoxShape.for_size(4), reporter=reporter, rng=random.Random(1))
    assert updates
    assert updates[-1].total == 16


def test_generator_failure_is_raised(monkeypatch):
    """An exhausted search is fatal, not retried."""
    calls = []

    def exhausted(board, shape, context, rng):
        calls.append(1)
        return False

    monkeypatch.setattr(generator, "_fill_random", exhausted)
    with pytest.raises(GeneratorFailure):
        generate_solved_board(BoxShape.for_size(4))
    assert len(calls) == 1


@pytest.mark.parametrize("size,low,high", [
    (4, 6, 8),
    (9, 28, 32),
    (16, 80, 100),
])
def test_clue_count_ranges(size, low, high):
    rng = random.Random(0)
    counts = {get_clue_count(size, rng) for _ in range(300)}
    assert min(counts) >= low
    assert max(counts) <= high
    assert len(counts) > 1


@pytest.mark.parametrize("size,expected", [(6, 12), (8, 22), (12, 50), (25, 218)])
def test_clue_count_default_ratio(size, expected):
    assert get_clue_count(size) == expected


@pytest.mark.parametrize("clue_count", [0, 17, 30, 81])
def test_remove_cells_keeps_exact_clue_count(clue_count, classic_solution):
    original = copy_grid(classic_solution)
    puzzle = remove_cells(classic_solution, clue_count, random.Random(clue_count))

    assert count_filled(puzzle) == clue_count
    assert sum(row.count(0) for row in puzzle) == 81 - clue_count
    assert classic_solution == original
    for r in range(9):
        for c in range(9):
            assert puzzle[r][c] in (0, original[r][c])


def test_remove_cells_rejects_bad_count(classic_solution):
    with pytest.raises(InvalidGridError):
        remove_cells(classic_solution, 82)
    with pytest.raises(InvalidGridError):
        remove_cells(classic_solution, -1)


def test_generate_puzzle_9x9():
    """Generated 9x9 puzzles keep 28-32 consistent, solvable clues."""
    shape = BoxShape.for_size(9)
    result = generate_puzzle(shape, rng=random.Random(2024))

    assert 28 <= count_filled(result.grid) <= 32
    assert count_filled(result.grid) == result.clue_count
    assert find_conflicts(result.grid, shape) == []
    assert solve(result.grid, shape).success


def test_generate_puzzle_4x4():
    result = generate_puzzle(BoxShape.for_size(4), rng=random.Random(5))
    assert 6 <= count_filled(result.grid) <= 8

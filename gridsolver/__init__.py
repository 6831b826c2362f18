"""Grid Solver - Sudoku-style solver and puzzle generator with a background worker."""

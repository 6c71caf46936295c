"""Line search: stuck detection, bounded solvability and path counting."""

from __future__ import annotations

from backend.engine.gamerules import SumCalculator
from backend.engine.gamesolver import StuckDetector
from backend.models.grid import Grid


def test_all_nines_is_stuck():
    grid = Grid.create(3, [[9] * 3 for _ in range(3)])
    assert StuckDetector.is_game_stuck(grid, 10, 3)


def test_top_row_line_is_not_stuck():
    grid = Grid.create(3, [[2, 3, 5], [9, 9, 9], [9, 9, 9]])
    assert not StuckDetector.is_game_stuck(grid, 10, 3)


def test_cleared_grid_is_not_stuck():
    grid = Grid.create(2, [[1, 1], [1, 1]])
    cleared = grid.mark_cells_as_spent(["0-0", "0-1", "1-0", "1-1"])
    assert not StuckDetector.is_game_stuck(cleared, 4, 2)


def test_too_few_cells_left_is_stuck():
    grid = Grid.create(2, [[1, 1], [1, 1]])
    nearly = grid.mark_cells_as_spent(["0-0", "0-1", "1-0"])
    assert StuckDetector.is_game_stuck(nearly, 1, 2)


def test_spent_cells_break_lines():
    grid = Grid.create(3, [[2, 3, 5], [9, 9, 9], [9, 9, 9]])
    blocked = grid.mark_cells_as_spent(["0-1"])
    assert StuckDetector.is_game_stuck(blocked, 10, 3)


def test_find_valid_lines_are_distinct_and_correct():
    grid = Grid.create(3, [[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    lines = StuckDetector.find_valid_lines(grid, 3, 3)
    keys = {tuple(sorted(line)) for line in lines}
    assert len(keys) == len(lines)
    assert all(SumCalculator.is_sum_correct(grid, line, 3) for line in lines)
    assert all(len(line) == 3 for line in lines)
    # Straights and L-trominoes in a 3×3 grid.
    assert len(lines) == 6 + 16


def test_find_valid_lines_respects_budget():
    grid = Grid.create(3, [[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    unbounded = StuckDetector.find_valid_lines(grid, 3, 3)
    bounded = StuckDetector.find_valid_lines(grid, 3, 3, max_iterations=5)
    assert len(bounded) < len(unbounded)


def test_count_valid_paths_capped():
    grid = Grid.create(3, [[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    assert StuckDetector.count_valid_paths(grid, 3, 3) == 22
    assert StuckDetector.count_valid_paths(grid, 3, 3, max_paths=4) == 4


def test_count_valid_paths_none():
    grid = Grid.create(3, [[9] * 3 for _ in range(3)])
    assert StuckDetector.count_valid_paths(grid, 10, 3) == 0


def test_reasonable_solvability():
    grid = Grid.create(3, [[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    assert StuckDetector.has_reasonable_solvability(grid, 3, 3)


def test_reasonable_solvability_needs_two_lines():
    grid = Grid.create(3, [[2, 3, 5], [9, 9, 9], [9, 9, 9]])
    assert not StuckDetector.has_reasonable_solvability(grid, 10, 3)

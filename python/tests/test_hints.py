"""Hints come from the stored solution, or a checked search for old saves."""

from __future__ import annotations

from datetime import date

from conftest import ROWS_SOLUTION, ROWS_VALUES

from backend.engine.gamegenerator import PuzzleGenerator
from backend.engine.gamerules import SumCalculator
from backend.engine.gamesolver import HintGenerator, StuckDetector
from backend.engine.gamesolver.hints import LEGACY_MESSAGE, SOLUTION_MESSAGE
from backend.models.grid import CellState, Grid
from backend.models.results import HintType


def _grid() -> Grid:
    return Grid.create(3, ROWS_VALUES)


def test_first_available_solution_path():
    hint = HintGenerator.generate_hint(_grid(), [], 10, 3, ROWS_SOLUTION)
    assert hint is not None
    assert hint.cell_ids == ("0-0", "0-1", "0-2")
    assert hint.type is HintType.FULL_LINE
    assert hint.message == SOLUTION_MESSAGE


def test_skips_used_solution_paths():
    grid = _grid().mark_cells_as_spent(ROWS_SOLUTION[0])
    hint = HintGenerator.generate_hint(grid, [], 10, 3, ROWS_SOLUTION)
    assert hint is not None
    assert hint.cell_ids == tuple(ROWS_SOLUTION[1])


def test_no_hint_once_solution_is_cut():
    # The player's own line crosses every stored path, so nothing is certified.
    grid = _grid().mark_cells_as_spent(["0-1", "1-1", "2-1"])
    assert HintGenerator.generate_hint(grid, [], 10, 3, ROWS_SOLUTION) is None


def test_no_hint_on_cleared_grid():
    grid = _grid()
    for path in ROWS_SOLUTION:
        grid = grid.mark_cells_as_spent(path)
    assert HintGenerator.generate_hint(grid, [], 10, 3, ROWS_SOLUTION) is None


def test_hint_does_not_touch_grid():
    grid = _grid()
    HintGenerator.generate_hint(grid, [], 10, 3, ROWS_SOLUTION)
    assert all(cell.state is CellState.AVAILABLE for cell in grid)


def test_legacy_search_without_solution_paths():
    grid = _grid()
    hint = HintGenerator.generate_hint(grid, [], 10, 3)
    assert hint is not None
    assert hint.message == LEGACY_MESSAGE
    assert SumCalculator.is_sum_correct(grid, hint.cell_ids, 10)
    assert len(hint.cell_ids) >= 3


def test_legacy_search_finds_nothing():
    grid = Grid.create(3, [[9] * 3 for _ in range(3)])
    assert HintGenerator.generate_hint(grid, [], 10, 3) is None


def test_hint_on_generated_puzzle():
    state = PuzzleGenerator.generate_daily_puzzle(date(2024, 6, 1))
    hint = HintGenerator.generate_hint(
        state.grid, [], state.target_sum, state.min_line_length, state.solution_paths
    )
    assert hint is not None
    assert all(
        state.grid.get_cell_by_id(cell_id).state is CellState.AVAILABLE
        for cell_id in hint.cell_ids
    )
    assert SumCalculator.is_sum_correct(state.grid, hint.cell_ids, state.target_sum)


def test_legacy_search_refuses_unchecked_lines():
    # Either line through the 1s leaves a remainder with no line left in it.
    grid = Grid.create(3, [[1, 1, 1], [1, 9, 9], [9, 9, 9]])
    assert len(StuckDetector.find_valid_lines(grid, 3, 3)) == 2
    assert HintGenerator.generate_hint(grid, [], 3, 3) is None

"""Path validation and sum arithmetic used while drawing a line."""

from __future__ import annotations

import pytest

from backend.engine.gamerules import PathValidator, SumCalculator
from backend.models.grid import CellState, Grid
from backend.models.results import PathAction, PathRejectReason


@pytest.fixture
def grid() -> Grid:
    return Grid.create(3, [[1, 2, 3], [4, 5, 6], [7, 8, 9]])


def _reason(grid, path, cell_id):
    result = PathValidator.can_add_to_path(grid, path, cell_id)
    assert not result.success
    return result.reason


# -- PathValidator ------------------------------------------------------------


def test_start_on_available_cell(grid):
    result = PathValidator.can_add_to_path(grid, [], "1-1")
    assert result.success
    assert result.action is PathAction.ADDED


def test_start_on_spent_cell(grid):
    spent = grid.mark_cells_as_spent(["1-1"])
    assert _reason(spent, [], "1-1") is PathRejectReason.SPENT


def test_unknown_cell_is_not_adjacent(grid):
    assert _reason(grid, [], "5-5") is PathRejectReason.NOT_ADJACENT
    assert _reason(grid, ["0-0"], "garbage") is PathRejectReason.NOT_ADJACENT


def test_re_adding_single_start_is_already_in_path(grid):
    # A one-cell path has no previous cell to step back onto.
    assert _reason(grid, ["0-0"], "0-0") is PathRejectReason.ALREADY_IN_PATH


def test_backtrack_onto_previous_cell(grid):
    result = PathValidator.can_add_to_path(grid, ["0-0", "0-1"], "0-0")
    assert result.success
    assert result.action is PathAction.BACKTRACKED


def test_revisit_older_cell_rejected(grid):
    path = ["0-0", "0-1", "1-1", "1-0"]
    assert _reason(grid, path, "0-0") is PathRejectReason.ALREADY_IN_PATH


def test_spent_neighbour_rejected(grid):
    spent = grid.mark_cells_as_spent(["0-1"])
    assert _reason(spent, ["0-0"], "0-1") is PathRejectReason.SPENT


def test_diagonal_and_distant_rejected(grid):
    assert _reason(grid, ["0-0"], "1-1") is PathRejectReason.NOT_ADJACENT
    assert _reason(grid, ["0-0"], "0-2") is PathRejectReason.NOT_ADJACENT


def test_in_path_neighbour_is_accepted(grid):
    # Only cells of the current path block; an in-path state alone does not.
    drawn = grid.update_cell_state("0-1", CellState.IN_PATH)
    result = PathValidator.can_add_to_path(drawn, ["0-0"], "0-1")
    assert result.success


def test_can_start_path(grid):
    assert PathValidator.can_start_path(grid, "2-2")
    assert not PathValidator.can_start_path(grid.mark_cells_as_spent(["2-2"]), "2-2")
    assert not PathValidator.can_start_path(grid, "3-0")


def test_valid_next_cells(grid):
    spent = grid.mark_cells_as_spent(["1-0"])
    ids = {cell.id for cell in PathValidator.get_valid_next_cells(spent, ["0-0", "0-1"])}
    assert ids == {"0-2", "1-1"}
    assert len(PathValidator.get_valid_next_cells(grid, [])) == 9


def test_validate_path(grid):
    assert PathValidator.validate_path(grid, ["0-0", "0-1", "1-1"])
    assert not PathValidator.validate_path(grid, ["0-0", "1-1"])
    assert not PathValidator.validate_path(grid, ["0-0", "0-9"])
    spent = grid.mark_cells_as_spent(["0-1"])
    assert not PathValidator.validate_path(spent, ["0-0", "0-1", "1-1"])


# -- SumCalculator ------------------------------------------------------------


def test_top_row_sum(grid):
    path = ["0-0", "0-1", "0-2"]
    assert SumCalculator.calculate_path_sum(grid, path) == 6
    assert SumCalculator.is_sum_correct(grid, path, 6)
    assert not SumCalculator.is_sum_correct(grid, path, 5)


def test_unknown_ids_count_zero(grid):
    assert SumCalculator.calculate_path_sum(grid, ["0-0", "7-7", "bad"]) == 1


def test_sum_difference_sign(grid):
    assert SumCalculator.get_sum_difference(grid, ["2-2", "2-1"], 10) == 7
    assert SumCalculator.get_sum_difference(grid, ["0-0"], 10) == -9


def test_meets_min_length():
    assert SumCalculator.meets_min_length(["a", "b", "c"], 3)
    assert not SumCalculator.meets_min_length(["a", "b"], 3)


def test_would_exceed_target(grid):
    assert SumCalculator.would_exceed_target(grid, ["0-0", "0-1"], "0-2", 5)
    assert not SumCalculator.would_exceed_target(grid, ["0-0", "0-1"], "0-2", 6)
    assert not SumCalculator.would_exceed_target(grid, ["0-0"], "9-9", 1)


def test_remaining_sum_ignores_spent(grid):
    assert SumCalculator.calculate_remaining_sum(grid) == 45
    spent = grid.mark_cells_as_spent(["2-0", "2-1", "2-2"])
    assert SumCalculator.calculate_remaining_sum(spent) == 21

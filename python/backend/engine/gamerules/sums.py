"""Sum arithmetic over paths of cells."""

from __future__ import annotations

from collections.abc import Sequence

from backend.models.grid import CellId, CellState, Grid


class SumCalculator:
    """Stateless helpers — all methods are static.

    Ids that do not resolve to a cell count as 0 so stale ids from a fast
    gesture never raise.
    """

    @staticmethod
    def calculate_path_sum(grid: Grid, cell_ids: Sequence[CellId]) -> int:
        total = 0
        for cell_id in cell_ids:
            cell = grid.get_cell_by_id(cell_id)
            if cell is not None:
                total += cell.value
        return total

    @staticmethod
    def is_sum_correct(grid: Grid, cell_ids: Sequence[CellId], target_sum: int) -> bool:
        """Exact match only; overshooting the target is not correct."""
        return SumCalculator.calculate_path_sum(grid, cell_ids) == target_sum

    @staticmethod
    def meets_min_length(cell_ids: Sequence[CellId], min_length: int) -> bool:
        return len(cell_ids) >= min_length

    @staticmethod
    def get_sum_difference(grid: Grid, cell_ids: Sequence[CellId], target_sum: int) -> int:
        """Positive when over the target, negative when under."""
        return SumCalculator.calculate_path_sum(grid, cell_ids) - target_sum

    @staticmethod
    def would_exceed_target(
        grid: Grid,
        current_path: Sequence[CellId],
        new_cell_id: CellId,
        target_sum: int,
    ) -> bool:
        new_cell = grid.get_cell_by_id(new_cell_id)
        if new_cell is None:
            return False
        current = SumCalculator.calculate_path_sum(grid, current_path)
        return current + new_cell.value > target_sum

    @staticmethod
    def calculate_remaining_sum(grid: Grid) -> int:
        return sum(cell.value for cell in grid if cell.state is CellState.AVAILABLE)

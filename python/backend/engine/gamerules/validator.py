"""Move validation while a line is being drawn."""

from __future__ import annotations

from collections.abc import Sequence

from backend.models.grid import (
    Cell,
    CellId,
    CellState,
    Grid,
    are_adjacent,
    position_from_cell_id,
)
from backend.models.results import PathAddResult, PathRejectReason


class PathValidator:
    """Stateless validator — all methods are static."""

    @staticmethod
    def can_add_to_path(
        grid: Grid,
        current_path: Sequence[CellId],
        cell_id: CellId,
    ) -> PathAddResult:
        """Decide what touching *cell_id* does to the path being drawn.

        Rules apply in order: unknown cell, path start, backtrack onto the
        second-to-last cell, revisiting a path cell, spent cell, adjacency.
        """
        cell = grid.get_cell_by_id(cell_id)
        if cell is None:
            return PathAddResult.rejected(PathRejectReason.NOT_ADJACENT)

        if not current_path:
            if cell.state is not CellState.AVAILABLE:
                return PathAddResult.rejected(PathRejectReason.SPENT)
            return PathAddResult.added()

        # Stepping back onto the previous cell is the only legal revisit.
        if len(current_path) >= 2 and current_path[-2] == cell_id:
            return PathAddResult.backtracked()

        if cell_id in current_path:
            return PathAddResult.rejected(PathRejectReason.ALREADY_IN_PATH)

        if cell.state is CellState.SPENT:
            return PathAddResult.rejected(PathRejectReason.SPENT)

        last_pos = position_from_cell_id(current_path[-1])
        if last_pos is None or not are_adjacent(last_pos, cell.position):
            return PathAddResult.rejected(PathRejectReason.NOT_ADJACENT)

        return PathAddResult.added()

    @staticmethod
    def can_start_path(grid: Grid, cell_id: CellId) -> bool:
        cell = grid.get_cell_by_id(cell_id)
        return cell is not None and cell.state is CellState.AVAILABLE

    @staticmethod
    def get_valid_next_cells(grid: Grid, current_path: Sequence[CellId]) -> list[Cell]:
        """Cells that would be accepted as the next step of the path."""
        if not current_path:
            return grid.get_available_cells()

        last_pos = position_from_cell_id(current_path[-1])
        if last_pos is None:
            return []
        in_path = set(current_path)
        return [
            cell
            for cell in grid.get_adjacent_available_cells(last_pos)
            if cell.id not in in_path
        ]

    @staticmethod
    def validate_path(grid: Grid, path: Sequence[CellId]) -> bool:
        """Replay a saved path: every cell exists, is unspent and adjacent."""
        previous = None
        for cell_id in path:
            cell = grid.get_cell_by_id(cell_id)
            if cell is None or cell.state is CellState.SPENT:
                return False
            if previous is not None and not are_adjacent(previous, cell.position):
                return False
            previous = cell.position
        return True

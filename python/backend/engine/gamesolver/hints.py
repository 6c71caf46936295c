"""Full-line hints that cannot lead the player into a dead end."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from backend.engine.gamesolver.stuck_detector import StuckDetector
from backend.models.grid import CellId, CellState, Grid
from backend.models.results import HintResult

logger = logging.getLogger(__name__)

LEGACY_SEARCH_ITERATIONS = 500
LEGACY_CANDIDATES = 20

SOLUTION_MESSAGE = "This line is part of the solution"
LEGACY_MESSAGE = "This line leads to a solvable state"


class HintGenerator:
    """Stateless hint lookup — all methods are static."""

    @staticmethod
    def generate_hint(
        grid: Grid,
        current_path_cell_ids: Sequence[CellId],
        target_sum: int,
        min_line_length: int,
        solution_paths: Sequence[Sequence[CellId]] = (),
    ) -> HintResult | None:
        """Return a complete line to draw next, or ``None``.

        Stored solution paths are used when present: the grid was generated
        from them, so any path whose cells are all still available is safe.
        Once the player has cut across every remaining solution path there
        is no certified line and the answer is ``None``. Older saves without
        solution paths fall back to a bounded search that only returns a
        line when the remainder still looks solvable. The grid is never
        modified.
        """
        if grid.count_available_cells() == 0:
            return None

        if solution_paths:
            line = HintGenerator._available_solution_path(grid, solution_paths)
            if line:
                return HintResult(cell_ids=tuple(line), message=SOLUTION_MESSAGE)
        else:
            line = HintGenerator._solvable_line_legacy(grid, target_sum, min_line_length)
            if line:
                return HintResult(cell_ids=tuple(line), message=LEGACY_MESSAGE)

        logger.debug(
            "No safe hint (path in progress: %d cells)", len(current_path_cell_ids)
        )
        return None

    @staticmethod
    def _available_solution_path(
        grid: Grid,
        solution_paths: Sequence[Sequence[CellId]],
    ) -> Sequence[CellId] | None:
        for path in solution_paths:
            cells = [grid.get_cell_by_id(cell_id) for cell_id in path]
            if all(cell is not None and cell.state is CellState.AVAILABLE for cell in cells):
                return path
        return None

    @staticmethod
    def _solvable_line_legacy(
        grid: Grid,
        target_sum: int,
        min_line_length: int,
    ) -> list[CellId] | None:
        lines = StuckDetector.find_valid_lines(
            grid, target_sum, min_line_length, LEGACY_SEARCH_ITERATIONS
        )
        for line in lines[:LEGACY_CANDIDATES]:
            after = grid.mark_cells_as_spent(line)
            if after.count_available_cells() == 0:
                return line
            if StuckDetector.has_reasonable_solvability(after, target_sum, min_line_length):
                return line
        # Any other line found is unchecked and could strand the player.
        return None

"""Search for lines that can still be drawn on a grid.

All searches are depth-first over available cells with an explicit stack.
Lines found from different starts or in reverse order are the same line;
they are de-duplicated on their sorted cell ids.
"""

from __future__ import annotations

from collections.abc import Iterator

from backend.models.grid import Cell, CellId, CellState, Grid

REASONABLE_SEARCH_ITERATIONS = 1000
REASONABLE_MIN_LINES = 2
REASONABLE_CANDIDATES = 5
REASONABLE_FOLLOWUP_ITERATIONS = 200
DEFAULT_MAX_PATHS = 100

_StackEntry = tuple[tuple[CellId, ...], int, frozenset[CellId], Cell]


class _IterationBudget:
    """Hard cap on DFS pops, shared across every start cell of one search."""

    def __init__(self, limit: int | None) -> None:
        self.remaining = limit

    def spend(self) -> bool:
        if self.remaining is None:
            return True
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0


def _line_key(line: list[CellId]) -> tuple[CellId, ...]:
    return tuple(sorted(line))


def _walk_lines(
    grid: Grid,
    start: Cell,
    target_sum: int,
    min_line_length: int,
    budget: _IterationBudget,
) -> Iterator[list[CellId]]:
    """Yield every line from *start* that hits the target, in DFS order."""
    stack: list[_StackEntry] = [((start.id,), start.value, frozenset((start.id,)), start)]
    while stack:
        if not budget.spend():
            return
        path, total, visited, cell = stack.pop()

        if total == target_sum and len(path) >= min_line_length:
            yield list(path)

        # Values are positive, so nothing past the target can come back to it.
        if total >= target_sum:
            continue

        for neighbor in grid.get_adjacent_cells(cell.position):
            if neighbor.state is CellState.AVAILABLE and neighbor.id not in visited:
                stack.append(
                    (
                        path + (neighbor.id,),
                        total + neighbor.value,
                        visited | {neighbor.id},
                        neighbor,
                    )
                )


class StuckDetector:
    """Stateless search helpers — all methods are static."""

    @staticmethod
    def is_game_stuck(grid: Grid, target_sum: int, min_line_length: int) -> bool:
        """True when no line can be completed from the available cells.

        An empty grid is not stuck: that is a win, which the caller checks.
        The search is exhaustive; grid sizes are kept small enough for it.
        """
        available = grid.get_available_cells()
        if not available:
            return False
        if len(available) < min_line_length:
            return True

        budget = _IterationBudget(None)
        for start in available:
            line = next(_walk_lines(grid, start, target_sum, min_line_length, budget), None)
            if line is not None:
                return False
        return True

    @staticmethod
    def find_valid_lines(
        grid: Grid,
        target_sum: int,
        min_line_length: int,
        max_iterations: int | None = None,
    ) -> list[list[CellId]]:
        """Distinct valid lines, within an optional iteration budget."""
        budget = _IterationBudget(max_iterations)
        lines: list[list[CellId]] = []
        seen: set[tuple[CellId, ...]] = set()
        for start in grid.get_available_cells():
            if budget.exhausted:
                break
            for line in _walk_lines(grid, start, target_sum, min_line_length, budget):
                key = _line_key(line)
                if key not in seen:
                    seen.add(key)
                    lines.append(line)
        return lines

    @staticmethod
    def has_reasonable_solvability(
        grid: Grid,
        target_sum: int,
        min_line_length: int,
    ) -> bool:
        """Bounded guess at whether the grid can still be cleared.

        Needs two distinct lines, then checks one level deep that some line
        either clears the grid or leaves another line behind. This is an
        approximation, not a proof.
        """
        if grid.count_available_cells() < min_line_length:
            return False

        lines = StuckDetector.find_valid_lines(
            grid, target_sum, min_line_length, REASONABLE_SEARCH_ITERATIONS
        )
        if len(lines) < REASONABLE_MIN_LINES:
            return False

        for line in lines[:REASONABLE_CANDIDATES]:
            after = grid.mark_cells_as_spent(line)
            remaining = after.count_available_cells()
            if remaining == 0:
                return True
            if remaining < min_line_length:
                continue
            follow_ups = StuckDetector.find_valid_lines(
                after, target_sum, min_line_length, REASONABLE_FOLLOWUP_ITERATIONS
            )
            if follow_ups:
                return True
        return False

    @staticmethod
    def count_valid_paths(
        grid: Grid,
        target_sum: int,
        min_line_length: int,
        max_paths: int = DEFAULT_MAX_PATHS,
    ) -> int:
        """Number of distinct valid lines, capped at *max_paths*."""
        budget = _IterationBudget(None)
        seen: set[tuple[CellId, ...]] = set()
        for start in grid.get_available_cells():
            for line in _walk_lines(grid, start, target_sum, min_line_length, budget):
                seen.add(_line_key(line))
                if len(seen) >= max_paths:
                    return max_paths
        return len(seen)

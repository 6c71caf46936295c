"""Tracks the state of a puzzle in progress."""

from __future__ import annotations

import time
from collections.abc import Sequence

from backend.models.grid import CellId, Grid
from backend.models.puzzle import CurrentPath, GameMode, Line


def now_ms() -> int:
    return int(time.time() * 1000)


class GameState:
    """Holds the grid snapshot, committed lines, flags and timing.

    The grid itself is immutable; every move swaps in a new snapshot.
    """

    def __init__(
        self,
        puzzle_id: str,
        mode: GameMode,
        grid: Grid,
        target_sum: int,
        min_line_length: int,
        solution_paths: Sequence[Sequence[CellId]] = (),
        started_at: int | None = None,
    ) -> None:
        self.puzzle_id = puzzle_id
        self.mode = mode
        self.grid = grid
        self.target_sum = target_sum
        self.min_line_length = min_line_length
        self.solution_paths: list[list[CellId]] = [list(p) for p in solution_paths]
        self.lines: list[Line] = []
        self.current_path: CurrentPath | None = None
        self.is_won: bool = False
        self.is_stuck: bool = False
        self.started_at: int = started_at if started_at is not None else now_ms()
        self.completed_at: int | None = None
        self.hint_used: bool = False
        self.hint_cell_ids: list[CellId] = []
        self._paused_ms: int = 0
        self._paused_since: int | None = None

    # -- queries --------------------------------------------------------------

    @property
    def remaining_cells(self) -> int:
        return self.grid.count_available_cells()

    @property
    def current_sum(self) -> int:
        return self.current_path.sum if self.current_path else 0

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        """Seconds played, excluding pauses; frozen once the puzzle is won."""
        end = self.completed_at
        if end is None:
            end = self._paused_since if self._paused_since is not None else now_ms()
        return max(0, end - self.started_at - self._paused_ms) / 1000

    def pause(self) -> None:
        if self._paused_since is None:
            self._paused_since = now_ms()

    def resume(self) -> None:
        if self._paused_since is not None:
            self._paused_ms += now_ms() - self._paused_since
            self._paused_since = None

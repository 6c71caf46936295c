"""Core gameplay logic — draws paths, commits lines and tracks the outcome."""

from __future__ import annotations

import logging
from datetime import date

from backend.config import unlimited_hints_enabled
from backend.engine.gamegenerator import PuzzleGenerator
from backend.engine.gamerules import PathValidator, SumCalculator
from backend.engine.gamesolver import HintGenerator, StuckDetector
from backend.engine.gamesolver.hints import LEGACY_MESSAGE, SOLUTION_MESSAGE
from backend.engine.gamestate import GameState, now_ms
from backend.models.grid import CellId, CellState
from backend.models.progress import SavedGameProgress
from backend.models.puzzle import CurrentPath, Difficulty, Line
from backend.models.results import (
    CommitRejectReason,
    CommitResult,
    HintResult,
    PathAction,
    PathAddResult,
    PathRejectReason,
)

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single puzzle session."""

    def __init__(self, state: GameState, unlimited_hints: bool | None = None) -> None:
        self.state = state
        if unlimited_hints is None:
            unlimited_hints = unlimited_hints_enabled()
        self.unlimited_hints = unlimited_hints

    @classmethod
    def daily(cls, day: date | None = None) -> GamePlay:
        return cls(PuzzleGenerator.generate_daily_puzzle(day))

    @classmethod
    def practice(cls, difficulty: Difficulty | str = Difficulty.MEDIUM) -> GamePlay:
        return cls(PuzzleGenerator.generate_practice_puzzle(difficulty))

    # -- drawing --------------------------------------------------------------

    def start_path(self, cell_id: CellId) -> PathAddResult:
        """Begin a new path at *cell_id*, dropping any path in progress."""
        self.clear_path()
        result = PathValidator.can_add_to_path(self.state.grid, [], cell_id)
        if not result.success:
            return result
        grid = self.state.grid.mark_cells_in_path([cell_id])
        self.state.grid = grid
        self.state.current_path = CurrentPath(
            cell_ids=[cell_id],
            sum=SumCalculator.calculate_path_sum(grid, [cell_id]),
        )
        return result

    def add_to_path(self, cell_id: CellId) -> PathAddResult:
        """Extend the current path, or step back if *cell_id* is the previous cell."""
        path = self.state.current_path
        if path is None:
            return PathAddResult.rejected(PathRejectReason.NO_PATH)

        result = PathValidator.can_add_to_path(self.state.grid, path.cell_ids, cell_id)
        if not result.success:
            return result

        if result.action is PathAction.BACKTRACKED:
            removed = path.cell_ids[-1]
            cell_ids = path.cell_ids[:-1]
            self.state.grid = self.state.grid.clear_path_cells([removed])
        else:
            cell_ids = [*path.cell_ids, cell_id]
            self.state.grid = self.state.grid.mark_cells_in_path([cell_id])

        if cell_ids:
            self.state.current_path = CurrentPath(
                cell_ids=cell_ids,
                sum=SumCalculator.calculate_path_sum(self.state.grid, cell_ids),
            )
        else:
            self.state.current_path = None
        return result

    def clear_path(self) -> None:
        path = self.state.current_path
        if path is None:
            return
        self.state.grid = self.state.grid.clear_path_cells(path.cell_ids)
        self.state.current_path = None

    # -- committing -----------------------------------------------------------

    def commit_line(self) -> CommitResult:
        """Turn the current path into a line if its length and sum are right."""
        state = self.state
        path = state.current_path
        if path is None:
            return CommitResult.rejected(CommitRejectReason.NO_PATH)
        if not SumCalculator.meets_min_length(path.cell_ids, state.min_line_length):
            return CommitResult.rejected(CommitRejectReason.TOO_SHORT)
        if not SumCalculator.is_sum_correct(state.grid, path.cell_ids, state.target_sum):
            return CommitResult.rejected(CommitRejectReason.WRONG_SUM)

        state.lines.append(
            Line(id=f"line-{len(state.lines)}", cell_ids=list(path.cell_ids), sum=path.sum)
        )
        state.grid = state.grid.mark_cells_as_spent(path.cell_ids)
        state.current_path = None
        self._refresh_outcome()
        return CommitResult.committed(is_win=state.is_won, is_stuck=state.is_stuck)

    def reset(self) -> None:
        """Start the puzzle over; values, solution and hint stay as they are."""
        state = self.state
        state.grid = state.grid.reset()
        state.lines = []
        state.current_path = None
        state.is_won = False
        state.is_stuck = False
        state.completed_at = None

    # -- hints ----------------------------------------------------------------

    def request_hint(self) -> HintResult | None:
        """One certified line per puzzle, unless hints are unlimited.

        Asking again shows the same line while its cells are still free.
        """
        state = self.state
        if state.hint_used and not self.unlimited_hints:
            return self._locked_hint()

        self.clear_path()
        hint = HintGenerator.generate_hint(
            state.grid,
            [],
            state.target_sum,
            state.min_line_length,
            state.solution_paths,
        )
        if hint is None:
            return None
        state.hint_used = True
        state.hint_cell_ids = list(hint.cell_ids)
        return hint

    def _locked_hint(self) -> HintResult | None:
        cell_ids = self.state.hint_cell_ids
        if not cell_ids:
            return None
        for cell_id in cell_ids:
            cell = self.state.grid.get_cell_by_id(cell_id)
            if cell is None or cell.state is not CellState.AVAILABLE:
                return None
        # Same source the hint was drawn from: stored paths, else the search.
        message = SOLUTION_MESSAGE if self.state.solution_paths else LEGACY_MESSAGE
        return HintResult(cell_ids=tuple(cell_ids), message=message)

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_won

    @property
    def is_stuck(self) -> bool:
        return self.state.is_stuck

    # -- persistence ----------------------------------------------------------

    def to_progress(self) -> SavedGameProgress:
        state = self.state
        return SavedGameProgress(
            puzzle_id=state.puzzle_id,
            mode=state.mode,
            grid_values=state.grid.extract_values(),
            target_sum=state.target_sum,
            min_line_length=state.min_line_length,
            completed_lines_cell_ids=[list(line.cell_ids) for line in state.lines],
            saved_at=now_ms(),
            started_at=state.started_at,
            solution_paths=[list(path) for path in state.solution_paths],
            hint_used=state.hint_used,
            hint_cell_ids=list(state.hint_cell_ids),
        )

    @classmethod
    def from_progress(
        cls,
        progress: SavedGameProgress,
        unlimited_hints: bool | None = None,
    ) -> GamePlay:
        """Rebuild a session from saved progress without regenerating."""
        state = PuzzleGenerator.restore_puzzle_from_values(
            progress.puzzle_id,
            progress.mode,
            progress.grid_values,
            progress.target_sum,
            progress.min_line_length,
            progress.started_at or progress.saved_at or now_ms(),
            progress.solution_paths,
        )
        # Replayed one by one so overlapping saved lines are caught.
        replay = state.grid
        for cell_ids in progress.completed_lines_cell_ids:
            if not PathValidator.validate_path(replay, cell_ids):
                logger.warning(
                    "Dropping invalid saved line %s from %s", cell_ids, progress.puzzle_id
                )
                continue
            state.lines.append(
                Line(
                    id=f"line-{len(state.lines)}",
                    cell_ids=list(cell_ids),
                    sum=SumCalculator.calculate_path_sum(replay, cell_ids),
                )
            )
            replay = replay.mark_cells_as_spent(cell_ids)
        state.grid = state.grid.restore_from_progress(line.cell_ids for line in state.lines)
        state.hint_used = progress.hint_used
        state.hint_cell_ids = list(progress.hint_cell_ids)

        game = cls(state, unlimited_hints=unlimited_hints)
        game._refresh_outcome()
        return game

    # -- helpers --------------------------------------------------------------

    def _refresh_outcome(self) -> None:
        state = self.state
        state.is_won = state.remaining_cells == 0
        state.is_stuck = not state.is_won and StuckDetector.is_game_stuck(
            state.grid, state.target_sum, state.min_line_length
        )
        if state.is_won and state.completed_at is None:
            state.completed_at = now_ms()

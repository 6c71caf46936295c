"""Daily and practice puzzles, seeded and materialised as ``GameState``."""

from __future__ import annotations

import secrets
import string
from collections.abc import Sequence
from datetime import date

from backend.config import DAILY_CONFIG, get_difficulty_config, puzzle_day
from backend.engine.gamegenerator.constructive import ConstructiveGenerator
from backend.engine.gamegenerator.rng import create_rng
from backend.engine.gamestate import GameState, now_ms
from backend.models.grid import CellId, Grid
from backend.models.puzzle import (
    Difficulty,
    GameMode,
    GeneratedPuzzle,
    GenerationConfig,
)

SEED_PREFIX = "sumtrails"
_TOKEN_ALPHABET = string.digits + string.ascii_lowercase
_TOKEN_LENGTH = 9


class PuzzleGenerator:
    """Creates puzzles; daily ones are identical for every player."""

    # -- identifiers ----------------------------------------------------------

    @staticmethod
    def daily_puzzle_id(day: date) -> str:
        return f"daily-{day.isoformat()}"

    @staticmethod
    def day_from_puzzle_id(puzzle_id: str) -> date | None:
        """The calendar day of a daily puzzle id; ``None`` for anything else."""
        if not puzzle_id.startswith("daily-"):
            return None
        try:
            return date.fromisoformat(puzzle_id.removeprefix("daily-"))
        except ValueError:
            return None

    @staticmethod
    def practice_puzzle_id() -> str:
        token = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(_TOKEN_LENGTH))
        return f"practice-{now_ms()}-{token}"

    @staticmethod
    def daily_seed(puzzle_id: str) -> str:
        return f"{SEED_PREFIX}-{puzzle_id}"

    # -- generation -----------------------------------------------------------

    @staticmethod
    def generate_puzzle(seed: str, config: GenerationConfig) -> GeneratedPuzzle:
        """Values and solution paths for *seed*; same seed, same puzzle."""
        return ConstructiveGenerator.generate(config, create_rng(seed))

    @staticmethod
    def generate_daily_puzzle(
        day: date | None = None,
        config: GenerationConfig = DAILY_CONFIG,
    ) -> GameState:
        """The shared puzzle for *day* (the live puzzle day by default)."""
        if day is None:
            day = puzzle_day()
        puzzle_id = PuzzleGenerator.daily_puzzle_id(day)
        puzzle = PuzzleGenerator.generate_puzzle(
            PuzzleGenerator.daily_seed(puzzle_id), config
        )
        return PuzzleGenerator.materialize(puzzle_id, GameMode.DAILY, puzzle, config)

    @staticmethod
    def generate_practice_puzzle(
        difficulty: Difficulty | str = Difficulty.MEDIUM,
    ) -> GameState:
        """A fresh random puzzle, seeded from its own unique id."""
        config = get_difficulty_config(difficulty)
        puzzle_id = PuzzleGenerator.practice_puzzle_id()
        puzzle = PuzzleGenerator.generate_puzzle(puzzle_id, config)
        return PuzzleGenerator.materialize(puzzle_id, GameMode.PRACTICE, puzzle, config)

    @staticmethod
    def materialize(
        puzzle_id: str,
        mode: GameMode,
        puzzle: GeneratedPuzzle,
        config: GenerationConfig,
    ) -> GameState:
        grid = Grid.create(config.grid_size, puzzle.values_matrix())
        return GameState(
            puzzle_id=puzzle_id,
            mode=mode,
            grid=grid,
            target_sum=config.target_sum,
            min_line_length=config.min_line_length,
            solution_paths=puzzle.paths_list(),
        )

    # -- restore --------------------------------------------------------------

    @staticmethod
    def restore_puzzle_from_values(
        puzzle_id: str,
        mode: GameMode,
        grid_values: list[list[int]],
        target_sum: int,
        min_line_length: int,
        started_at: int,
        solution_paths: Sequence[Sequence[CellId]] = (),
    ) -> GameState:
        """A fresh state over saved values, without regenerating."""
        grid = Grid.create(len(grid_values), grid_values)
        return GameState(
            puzzle_id=puzzle_id,
            mode=mode,
            grid=grid,
            target_sum=target_sum,
            min_line_length=min_line_length,
            solution_paths=solution_paths,
            started_at=started_at,
        )

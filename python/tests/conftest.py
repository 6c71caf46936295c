"""Shared fixtures: a tiny hand-made puzzle with a known solution."""

from __future__ import annotations

import pytest

from backend.engine.gamestate import GameState
from backend.models.grid import Grid
from backend.models.puzzle import GameMode

# Every row sums to 10; so does the L through 0-0, 1-0 and 1-1.
ROWS_VALUES = [[2, 3, 5], [4, 4, 2], [1, 8, 1]]
ROWS_SOLUTION = [
    ["0-0", "0-1", "0-2"],
    ["1-0", "1-1", "1-2"],
    ["2-0", "2-1", "2-2"],
]


def make_state(
    values: list[list[int]] = ROWS_VALUES,
    solution_paths: list[list[str]] = ROWS_SOLUTION,
    target_sum: int = 10,
    min_line_length: int = 3,
    puzzle_id: str = "daily-2024-03-15",
    mode: GameMode = GameMode.DAILY,
) -> GameState:
    return GameState(
        puzzle_id=puzzle_id,
        mode=mode,
        grid=Grid.create(len(values), values),
        target_sum=target_sum,
        min_line_length=min_line_length,
        solution_paths=solution_paths,
        started_at=1_000,
    )


@pytest.fixture
def rows_state() -> GameState:
    return make_state()


@pytest.fixture(autouse=True)
def _no_env_overrides(monkeypatch):
    monkeypatch.delenv("SUMTRAILS_UNLIMITED_HINTS", raising=False)
    monkeypatch.delenv("SUMTRAILS_DATA_DIR", raising=False)

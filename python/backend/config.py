"""Puzzle presets and runtime flags."""

from __future__ import annotations

import os
from datetime import date, datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from backend.models.puzzle import Difficulty, GenerationConfig, ValueRange

# Every player gets the same daily grid, so this preset never changes.
DAILY_CONFIG = GenerationConfig(
    grid_size=7,
    min_line_length=3,
    target_sum=18,
    value_range=ValueRange(min=1, max=8),
)

DIFFICULTY_CONFIGS: dict[Difficulty, GenerationConfig] = {
    Difficulty.EASY: GenerationConfig(
        grid_size=5,
        min_line_length=3,
        target_sum=12,
        value_range=ValueRange(min=1, max=6),
    ),
    Difficulty.MEDIUM: DAILY_CONFIG,
    Difficulty.HARD: GenerationConfig(
        grid_size=8,
        min_line_length=4,
        target_sum=24,
        value_range=ValueRange(min=1, max=9),
    ),
}

DAILY_RESET_HOUR = 8
DAILY_TIMEZONE = "America/New_York"


def read_bool_env(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def unlimited_hints_enabled() -> bool:
    return read_bool_env(os.environ.get("SUMTRAILS_UNLIMITED_HINTS"))


def default_data_dir() -> Path:
    override = os.environ.get("SUMTRAILS_DATA_DIR")
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent.parent / "data"


def get_difficulty_config(difficulty: Difficulty | str) -> GenerationConfig:
    try:
        return DIFFICULTY_CONFIGS[Difficulty(difficulty)]
    except ValueError:
        raise ValueError(f"Unknown difficulty: {difficulty!r}") from None


def puzzle_day(
    now: datetime | None = None,
    reset_hour: int = DAILY_RESET_HOUR,
    tz: str = DAILY_TIMEZONE,
) -> date:
    """Calendar day of the daily puzzle that is live at *now*.

    The puzzle rolls over at *reset_hour* local time in *tz*; before that the
    previous day's puzzle is still current. Naive datetimes are read as UTC.
    """
    if now is None:
        now = datetime.now(tz=ZoneInfo("UTC"))
    elif now.tzinfo is None:
        now = now.replace(tzinfo=ZoneInfo("UTC"))
    local = now.astimezone(ZoneInfo(tz))
    if local.hour < reset_hour:
        return local.date() - timedelta(days=1)
    return local.date()

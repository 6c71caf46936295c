"""Player stats — completions, times, lines drawn and the daily streak."""

from __future__ import annotations

import json
import logging
from datetime import date

from conftest import ROWS_SOLUTION, make_state

from backend.engine.gamegenerator import PuzzleGenerator
from backend.engine.gameplay import GamePlay
from backend.models.puzzle import GameMode
from backend.models.stats import PlayerStats, StatsStore
from frontend.cli.rich.app import _record_win


def _store(tmp_path) -> StatsStore:
    return StatsStore(tmp_path / "stats.json")


# -- completions --------------------------------------------------------------


def test_fresh_stats(tmp_path):
    assert _store(tmp_path).stats == PlayerStats()


def test_puzzle_counted_once(tmp_path):
    store = _store(tmp_path)
    assert store.record_puzzle_complete(60_000, "daily-2024-03-15")
    assert not store.record_puzzle_complete(30_000, "daily-2024-03-15")
    assert store.stats.total_puzzles_completed == 1
    assert store.stats.best_time_ms == 60_000


def test_best_and_average_time(tmp_path):
    store = _store(tmp_path)
    store.record_puzzle_complete(60_000, "daily-2024-03-15")
    store.record_puzzle_complete(30_000, "practice-1-abc")
    store.record_puzzle_complete(90_001, "daily-2024-03-16")
    assert store.stats.total_puzzles_completed == 3
    assert store.stats.best_time_ms == 30_000
    assert store.stats.average_time_ms == 60_000
    assert store.stats.last_completed_puzzle_id == "daily-2024-03-16"


def test_lines_drawn(tmp_path):
    store = _store(tmp_path)
    for _ in range(3):
        store.record_line_drawn()
    assert store.stats.total_lines_drawn == 3


# -- daily streak -------------------------------------------------------------


def test_streak_grows_on_consecutive_days(tmp_path):
    store = _store(tmp_path)
    assert store.update_daily_streak(date(2024, 3, 15)) == 1
    assert store.update_daily_streak(date(2024, 3, 16)) == 2
    assert store.update_daily_streak(date(2024, 3, 17)) == 3
    assert store.stats.last_daily_date == "2024-03-17"


def test_streak_same_day_unchanged(tmp_path):
    store = _store(tmp_path)
    store.update_daily_streak(date(2024, 3, 15))
    store.update_daily_streak(date(2024, 3, 16))
    assert store.update_daily_streak(date(2024, 3, 16)) == 2


def test_streak_resets_after_gap(tmp_path):
    store = _store(tmp_path)
    store.update_daily_streak(date(2024, 3, 15))
    store.update_daily_streak(date(2024, 3, 16))
    assert store.update_daily_streak(date(2024, 3, 18)) == 1
    assert store.stats.last_daily_date == "2024-03-18"


def test_streak_across_month_end(tmp_path):
    store = _store(tmp_path)
    store.update_daily_streak(date(2024, 2, 29))
    assert store.update_daily_streak(date(2024, 3, 1)) == 2


# -- persistence --------------------------------------------------------------


def test_stats_persist(tmp_path):
    store = _store(tmp_path)
    store.record_puzzle_complete(45_000, "daily-2024-03-15")
    store.record_line_drawn()
    store.update_daily_streak(date(2024, 3, 15))

    reopened = _store(tmp_path)
    assert reopened.stats == store.stats
    assert reopened.stats.daily_streak == 1


def test_unknown_keys_are_dropped(tmp_path):
    path = tmp_path / "stats.json"
    path.write_text(json.dumps({"daily_streak": 2, "favourite_colour": "blue"}))
    assert StatsStore(path).stats == PlayerStats(daily_streak=2)


def test_corrupt_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "stats.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING):
        store = StatsStore(path)
    assert store.stats == PlayerStats()
    assert "unreadable" in caplog.text


def test_non_object_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "stats.json"
    path.write_text("[1, 2]")
    with caplog.at_level(logging.WARNING):
        store = StatsStore(path)
    assert store.stats == PlayerStats()
    assert "expected a JSON object" in caplog.text


# -- winning a game -----------------------------------------------------------


def test_day_from_puzzle_id():
    assert PuzzleGenerator.day_from_puzzle_id("daily-2024-03-15") == date(2024, 3, 15)
    assert PuzzleGenerator.day_from_puzzle_id("practice-1-abc") is None
    assert PuzzleGenerator.day_from_puzzle_id("daily-someday") is None


def _won_game(**overrides) -> GamePlay:
    game = GamePlay(make_state(**overrides))
    for path in ROWS_SOLUTION:
        game.start_path(path[0])
        for cell_id in path[1:]:
            game.add_to_path(cell_id)
        game.commit_line()
    assert game.is_won
    return game


def test_daily_win_updates_stats(tmp_path):
    store = _store(tmp_path)
    _record_win(_won_game(), store)
    assert store.stats.total_puzzles_completed == 1
    assert store.stats.daily_streak == 1
    assert store.stats.last_daily_date == "2024-03-15"
    assert store.stats.best_time_ms is not None


def test_practice_win_leaves_streak(tmp_path):
    store = _store(tmp_path)
    _record_win(_won_game(puzzle_id="practice-1-abc", mode=GameMode.PRACTICE), store)
    assert store.stats.total_puzzles_completed == 1
    assert store.stats.daily_streak == 0

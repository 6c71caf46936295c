"""Player statistics and their JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from backend.models.progress import load_json_object

logger = logging.getLogger(__name__)


@dataclass
class PlayerStats:
    daily_streak: int = 0
    last_daily_date: str | None = None
    last_completed_puzzle_id: str | None = None
    total_puzzles_completed: int = 0
    total_lines_drawn: int = 0
    best_time_ms: int | None = None
    average_time_ms: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerStats:
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


class StatsStore:
    """Loads, updates, and saves the player's stats in a JSON file.

    Every update writes the file straight away.
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self.stats = PlayerStats()
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        data = load_json_object(self.filepath)
        if data is None:
            return
        try:
            self.stats = PlayerStats.from_dict(data)
        except TypeError:
            logger.warning("Ignoring corrupt stats file %s", self.filepath)

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self.filepath.write_text(
            json.dumps(asdict(self.stats), indent=2) + "\n", encoding="utf-8"
        )

    # -- updates --------------------------------------------------------------

    def record_puzzle_complete(self, time_ms: int, puzzle_id: str) -> bool:
        """Count a solved puzzle once; a replay after reset is ignored."""
        stats = self.stats
        if stats.last_completed_puzzle_id == puzzle_id:
            return False

        count = stats.total_puzzles_completed
        total_time = (stats.average_time_ms or 0) * count + time_ms
        stats.total_puzzles_completed = count + 1
        stats.last_completed_puzzle_id = puzzle_id
        stats.best_time_ms = (
            time_ms if stats.best_time_ms is None else min(stats.best_time_ms, time_ms)
        )
        stats.average_time_ms = round(total_time / stats.total_puzzles_completed)
        self.save()
        return True

    def record_line_drawn(self) -> None:
        self.stats.total_lines_drawn += 1
        self.save()

    def update_daily_streak(self, day: date) -> int:
        """Extend the streak if *day* follows the last daily, else restart it."""
        stats = self.stats
        today = day.isoformat()
        yesterday = (day - timedelta(days=1)).isoformat()
        if stats.last_daily_date == yesterday:
            stats.daily_streak += 1
        elif stats.last_daily_date != today:
            stats.daily_streak = 1
        stats.last_daily_date = today
        self.save()
        return stats.daily_streak

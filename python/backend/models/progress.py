"""Saved game progress and its JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from backend.models.grid import CellId
from backend.models.puzzle import GameMode

logger = logging.getLogger(__name__)


def load_json_object(filepath: Path) -> dict[str, Any] | None:
    """Read a JSON object from *filepath*; ``None`` if missing or unusable.

    Unreadable files, bad encodings, broken JSON and top-level values that
    are not objects are logged and ignored.
    """
    if not filepath.exists():
        return None
    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable file %s", filepath)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", filepath)
        return None
    return data


def _parse_grid_values(raw: Any) -> list[list[int]]:
    """Square matrix of positive ints, or ``ValueError``."""
    rows = [list(row) for row in raw]
    size = len(rows)
    if size == 0 or any(len(row) != size for row in rows):
        raise ValueError(f"Saved grid is not square: {rows!r}")
    for row in rows:
        for value in row:
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"Saved grid has a bad cell value: {value!r}")
    return rows


@dataclass
class SavedGameProgress:
    """Everything needed to rebuild a game without regenerating it.

    ``solution_paths`` is empty for saves written before solution paths were
    stored; hints then fall back to search.
    """

    puzzle_id: str
    mode: GameMode
    grid_values: list[list[int]]
    target_sum: int
    min_line_length: int
    completed_lines_cell_ids: list[list[CellId]]
    saved_at: int
    started_at: int
    solution_paths: list[list[CellId]] = field(default_factory=list)
    hint_used: bool = False
    hint_cell_ids: list[CellId] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "puzzle_id": self.puzzle_id,
            "mode": self.mode.value,
            "grid_values": self.grid_values,
            "target_sum": self.target_sum,
            "min_line_length": self.min_line_length,
            "completed_lines_cell_ids": self.completed_lines_cell_ids,
            "saved_at": self.saved_at,
            "started_at": self.started_at,
            "solution_paths": self.solution_paths,
            "hint_used": self.hint_used,
            "hint_cell_ids": self.hint_cell_ids,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedGameProgress:
        return cls(
            puzzle_id=data["puzzle_id"],
            mode=GameMode(data["mode"]),
            grid_values=_parse_grid_values(data["grid_values"]),
            target_sum=int(data["target_sum"]),
            min_line_length=int(data["min_line_length"]),
            completed_lines_cell_ids=[
                list(line) for line in data.get("completed_lines_cell_ids", [])
            ],
            saved_at=int(data.get("saved_at", 0)),
            started_at=int(data.get("started_at", 0)),
            solution_paths=[list(path) for path in data.get("solution_paths") or []],
            hint_used=bool(data.get("hint_used", False)),
            hint_cell_ids=list(data.get("hint_cell_ids") or []),
        )


class ProgressStore:
    """Loads, saves, and queries saved games from a single JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._games: dict[str, SavedGameProgress] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        data = load_json_object(self.filepath)
        if data is None:
            return
        for puzzle_id, record in data.items():
            try:
                self._games[puzzle_id] = SavedGameProgress.from_dict(record)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping corrupt saved game %s", puzzle_id)

    def _write(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {puzzle_id: p.to_dict() for puzzle_id, p in self._games.items()}
        self.filepath.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    # -- queries --------------------------------------------------------------

    def save(self, progress: SavedGameProgress) -> None:
        self._games[progress.puzzle_id] = progress
        self._write()

    def load(self, puzzle_id: str) -> SavedGameProgress | None:
        return self._games.get(puzzle_id)

    def has(self, puzzle_id: str) -> bool:
        return puzzle_id in self._games

    def clear(self, puzzle_id: str) -> None:
        if self._games.pop(puzzle_id, None) is not None:
            self._write()

    def list_ids(self) -> list[str]:
        return sorted(self._games)

"""Spoiler-free result text for sharing a daily puzzle."""

from __future__ import annotations

from backend.engine.gamestate import GameState
from backend.models.grid import Position, cell_id_from_position

LINE_COLORS = (
    "\U0001f7e9",
    "\U0001f7e6",
    "\U0001f7e8",
    "\U0001f7ea",
    "\U0001f7e7",
    "\U0001f7eb",
)
EMPTY_CELL = "\u2b1c"


def generate_emoji_grid(state: GameState) -> str:
    """One square per cell, coloured by the line that used it."""
    line_of: dict[str, int] = {}
    for index, line in enumerate(state.lines):
        for cell_id in line.cell_ids:
            line_of[cell_id] = index

    size = state.grid.size
    rows: list[str] = []
    for r in range(size):
        row = ""
        for c in range(size):
            index = line_of.get(cell_id_from_position(Position(r, c)))
            row += EMPTY_CELL if index is None else LINE_COLORS[index % len(LINE_COLORS)]
        rows.append(row)
    return "\n".join(rows)


def format_duration(ms: int) -> str:
    minutes, seconds = divmod(ms // 1000, 60)
    return f"{minutes}m {seconds}s" if minutes else f"{seconds}s"


def generate_share_text(state: GameState) -> str:
    day = state.puzzle_id.removeprefix("daily-")
    time_text = ""
    if state.completed_at is not None:
        time_text = f" in {format_duration(state.completed_at - state.started_at)}"
    return (
        f"Sum Trails {day}\n"
        f"{len(state.lines)} lines{time_text}\n\n"
        f"{generate_emoji_grid(state)}"
    )

"""Medal scoring for a finished (or abandoned) puzzle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.engine.gamestate import GameState

SILVER_PERCENTAGE = 75


class ScoreRank(StrEnum):
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"


RANK_EMOJI: dict[ScoreRank, str] = {
    ScoreRank.GOLD: "\U0001f947",
    ScoreRank.SILVER: "\U0001f948",
    ScoreRank.BRONZE: "\U0001f949",
}

RANK_TITLE: dict[ScoreRank, str] = {
    ScoreRank.GOLD: "Perfect!",
    ScoreRank.SILVER: "Great Job!",
    ScoreRank.BRONZE: "Nice Try!",
}


@dataclass(frozen=True)
class ScoreResult:
    rank: ScoreRank
    lines_found: int
    total_possible_lines: int
    percentage: int
    is_perfect: bool


def calculate_score(state: GameState) -> ScoreResult:
    """Gold for a cleared grid, silver from 75% of the solution's lines."""
    lines_found = len(state.lines)
    total = len(state.solution_paths)
    is_perfect = state.remaining_cells == 0
    percentage = round(lines_found / total * 100) if total else 0

    if is_perfect:
        rank = ScoreRank.GOLD
    elif percentage >= SILVER_PERCENTAGE:
        rank = ScoreRank.SILVER
    else:
        rank = ScoreRank.BRONZE

    return ScoreResult(
        rank=rank,
        lines_found=lines_found,
        total_possible_lines=total,
        percentage=percentage,
        is_perfect=is_perfect,
    )

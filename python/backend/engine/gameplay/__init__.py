from backend.engine.gameplay.game import GamePlay
from backend.engine.gameplay.scoring import ScoreRank, ScoreResult, calculate_score
from backend.engine.gameplay.share import generate_share_text

__all__ = [
    "GamePlay",
    "ScoreRank",
    "ScoreResult",
    "calculate_score",
    "generate_share_text",
]

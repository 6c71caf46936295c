from backend.models.grid import (
    Cell,
    CellId,
    CellState,
    Grid,
    Position,
    are_adjacent,
    cell_id_from_position,
    position_from_cell_id,
)
from backend.models.progress import ProgressStore, SavedGameProgress, load_json_object
from backend.models.puzzle import (
    CurrentPath,
    Difficulty,
    DifficultyConfig,
    GameMode,
    GeneratedPuzzle,
    GenerationConfig,
    Line,
    ValueRange,
)
from backend.models.results import (
    CommitRejectReason,
    CommitResult,
    HintResult,
    HintType,
    PathAction,
    PathAddResult,
    PathRejectReason,
)
from backend.models.stats import PlayerStats, StatsStore

__all__ = [
    "Cell",
    "CellId",
    "CellState",
    "CommitRejectReason",
    "CommitResult",
    "CurrentPath",
    "Difficulty",
    "DifficultyConfig",
    "GameMode",
    "GeneratedPuzzle",
    "GenerationConfig",
    "Grid",
    "HintResult",
    "HintType",
    "Line",
    "PlayerStats",
    "PathAction",
    "PathAddResult",
    "PathRejectReason",
    "Position",
    "ProgressStore",
    "SavedGameProgress",
    "StatsStore",
    "ValueRange",
    "are_adjacent",
    "cell_id_from_position",
    "load_json_object",
    "position_from_cell_id",
]

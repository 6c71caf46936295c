from backend.engine.gamegenerator.constructive import ConstructiveGenerator, DirectionBalance
from backend.engine.gamegenerator.generator import PuzzleGenerator
from backend.engine.gamegenerator.rng import Rng, create_rng

__all__ = [
    "ConstructiveGenerator",
    "DirectionBalance",
    "PuzzleGenerator",
    "Rng",
    "create_rng",
]

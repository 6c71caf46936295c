from backend.engine.gamerules.sums import SumCalculator
from backend.engine.gamerules.validator import PathValidator

__all__ = ["PathValidator", "SumCalculator"]

from backend.engine.gamesolver.hints import HintGenerator
from backend.engine.gamesolver.stuck_detector import StuckDetector

__all__ = ["HintGenerator", "StuckDetector"]

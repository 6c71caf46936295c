from backend.engine.gamestate.state import GameState, now_ms

__all__ = ["GameState", "now_ms"]

"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when a client starts a game
- Holds the current game state and the session's AI
- Processes human moves and AI turns
- Removed when the client deletes it

Sessions are EPHEMERAL: there is no persistence.
"""

from .manager import (
    AI_PLAYER_ID,
    DEFAULT_DIFFICULTY,
    HUMAN_PLAYER_ID,
    MoveRecord,
    Session,
    SessionManager,
    build_options,
    sanitize_for_ai,
)
from .game_loop import AnalysisReport, GameLoop, TurnResult

__all__ = [
    "AI_PLAYER_ID",
    "DEFAULT_DIFFICULTY",
    "HUMAN_PLAYER_ID",
    "MoveRecord",
    "Session",
    "SessionManager",
    "build_options",
    "sanitize_for_ai",
    "AnalysisReport",
    "GameLoop",
    "TurnResult",
]

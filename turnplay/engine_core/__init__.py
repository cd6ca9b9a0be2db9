"""
Engine Core - Shared state types, the game contract and errors.

Each game engine:
1. Creates the initial GameState
2. Validates moves
3. Applies moves, returning a new state
4. Enumerates legal moves
5. Detects the end of the game
"""

from .state import BaseGameState, GameResult, GameStatus, Player, DRAW
from .game import Game
from .errors import (
    GameError,
    InvalidMoveError,
    NoValidMovesError,
    GameNotFoundError,
    UnsupportedGameTypeError,
    GameNotPlayingError,
    NotAITurnError,
)

__all__ = [
    "BaseGameState",
    "GameResult",
    "GameStatus",
    "Player",
    "DRAW",
    "Game",
    "GameError",
    "InvalidMoveError",
    "NoValidMovesError",
    "GameNotFoundError",
    "UnsupportedGameTypeError",
    "GameNotPlayingError",
    "NotAITurnError",
]

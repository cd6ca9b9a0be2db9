"""
Error taxonomy for engines, bots and sessions.

Each error carries a machine-readable error_code that the API layer
passes through to clients unchanged.
"""


class GameError(Exception):
    """Base class for all game errors."""
    error_code = "GAME_ERROR"

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        if error_code:
            self.error_code = error_code


class InvalidMoveError(GameError):
    """A move failed engine validation."""
    error_code = "INVALID_MOVE"


class NoValidMovesError(GameError):
    """The AI was asked to move but has no legal move."""
    error_code = "NO_VALID_MOVES"


class GameNotFoundError(GameError):
    error_code = "GAME_NOT_FOUND"


class UnsupportedGameTypeError(GameError):
    error_code = "UNSUPPORTED_GAME_TYPE"


class GameNotPlayingError(GameError):
    """The game has already finished."""
    error_code = "GAME_NOT_PLAYING"


class NotAITurnError(GameError):
    error_code = "NOT_AI_TURN"

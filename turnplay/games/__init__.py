"""
Games module - Game-specific implementations.

Each game has its own subpackage with:
- Game-specific state, move and option types
- The rules engine implementing the Game contract
"""

from __future__ import annotations
from enum import Enum

from ..engine_core.errors import UnsupportedGameTypeError
from ..engine_core.game import Game
from .tic_tac_toe import TicTacToeGame
from .rock_paper_scissors import RockPaperScissorsGame


class GameType(str, Enum):
    TIC_TAC_TOE = "tic-tac-toe"
    ROCK_PAPER_SCISSORS = "rock-paper-scissors"

    @classmethod
    def parse(cls, value: str | GameType) -> GameType:
        """Raises UnsupportedGameTypeError for anything but a known type."""
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedGameTypeError(f"Unsupported game type: {value}") from None


GAME_NAMES: dict[GameType, str] = {
    GameType.TIC_TAC_TOE: "Tic-Tac-Toe",
    GameType.ROCK_PAPER_SCISSORS: "Rock Paper Scissors",
}


def create_game(game_type: str | GameType) -> Game:
    """Create the rules engine for a game type."""
    game_type = GameType.parse(game_type)
    if game_type == GameType.TIC_TAC_TOE:
        return TicTacToeGame()
    return RockPaperScissorsGame()


__all__ = [
    "GameType",
    "GAME_NAMES",
    "create_game",
    "TicTacToeGame",
    "RockPaperScissorsGame",
]

"""
Bots module - Computer opponents.

Provides:
- GameAI: Interface for AI decision-making
- TicTacToeAI: random, heuristic and minimax play
- RockPaperScissorsAI: random, frequency and pattern play
- create_ai: a fresh AI for a game type
"""

from __future__ import annotations

from ..games import GameType
from .policy import GameAI, BotDecision, Difficulty
from .tic_tac_toe_ai import TicTacToeAI
from .rps_ai import RockPaperScissorsAI


def create_ai(
    game_type: str | GameType,
    player_id: str | None = None,
    seed: int | None = None,
) -> GameAI:
    """
    Create a new AI for a game type.

    Each game session needs its own instance.

    Raises:
        UnsupportedGameTypeError: for an unknown game type
    """
    game_type = GameType.parse(game_type)
    if game_type == GameType.TIC_TAC_TOE:
        return TicTacToeAI(player_id=player_id, seed=seed)
    return RockPaperScissorsAI(player_id=player_id, seed=seed)


__all__ = [
    "GameAI",
    "BotDecision",
    "Difficulty",
    "TicTacToeAI",
    "RockPaperScissorsAI",
    "create_ai",
]

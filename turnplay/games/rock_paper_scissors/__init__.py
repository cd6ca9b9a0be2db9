"""
Rock-Paper-Scissors - A best-of-N match of rock, paper and scissors.
"""

from .state import (
    BEATS,
    CHOICES,
    COUNTERS,
    DEFAULT_MAX_ROUNDS,
    PLAYER1,
    PLAYER2,
    ROUND_DRAW,
    RPSChoice,
    RPSMove,
    RPSOptions,
    RPSState,
    Round,
    parse_choice,
    round_winner,
)
from .game import RockPaperScissorsGame

__all__ = [
    "BEATS",
    "CHOICES",
    "COUNTERS",
    "DEFAULT_MAX_ROUNDS",
    "PLAYER1",
    "PLAYER2",
    "ROUND_DRAW",
    "RPSChoice",
    "RPSMove",
    "RPSOptions",
    "RPSState",
    "Round",
    "parse_choice",
    "round_winner",
    "RockPaperScissorsGame",
]

"""
Bot Policy - Interface for AI decision-making.

A GameAI takes a game state and a difficulty and returns a decision.
Decisions include:
- The move to make
- Which strategy produced it
- An explanation (for UI/debugging)

One AI instance belongs to one game session. AIs may keep per-game
memory (the Rock-Paper-Scissors AI remembers the opponent's choices),
so an instance must never be shared between games.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any
import random

if TYPE_CHECKING:
    from ..engine_core.state import BaseGameState


class Difficulty(str, Enum):
    """AI difficulty tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Any, default: Difficulty) -> Difficulty:
        """
        Map a selector to a Difficulty.

        Anything unrecognized (None, typos, other types) maps to default.
        """
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return default


@dataclass
class BotDecision:
    """
    A decision made by an AI.

    Contains:
    - The move to make
    - Difficulty and strategy that produced it
    - Explanation (for UI/debugging)
    """
    move: Any
    difficulty: Difficulty
    strategy: str
    explanation: str = ""

    # Evaluation details (for debugging)
    evaluated_positions: int = 0
    details: dict[str, Any] = field(default_factory=dict)


class GameAI(ABC):
    """
    Abstract base class for game AIs.

    Subclasses map each Difficulty to a strategy and set
    fallback_difficulty, the tier used for unrecognized selectors.
    """

    fallback_difficulty: Difficulty = Difficulty.MEDIUM

    def __init__(self, player_id: str | None = None, seed: int | None = None):
        """
        Args:
            player_id: Player the AI controls. None means the first player
                flagged is_ai, or the current player if none is flagged.
            seed: Random seed for reproducible play
        """
        self.player_id = player_id
        self.rng = random.Random(seed)

    def resolve_difficulty(self, difficulty: Any) -> Difficulty:
        return Difficulty.parse(difficulty, self.fallback_difficulty)

    def resolve_players(self, state: BaseGameState) -> tuple[str, str]:
        """Return (ai_player_id, opponent_player_id) for state."""
        ai_id = self.player_id
        if ai_id is None:
            flagged = [p.id for p in state.players if p.is_ai]
            ai_id = flagged[0] if flagged else state.current_player_id
        return ai_id, state.other_player_id(ai_id)

    @abstractmethod
    def decide(self, state: BaseGameState, difficulty: Any = Difficulty.MEDIUM) -> BotDecision:
        """
        Choose a move for the AI player.

        Args:
            state: Current game state
            difficulty: Difficulty tier or its name

        Returns:
            BotDecision with the selected move
        """

    @abstractmethod
    def analyze_game_state(self, state: BaseGameState) -> str:
        """Human-readable summary of the position."""

    def get_name(self) -> str:
        """Get the AI's name/identifier."""
        return self.__class__.__name__

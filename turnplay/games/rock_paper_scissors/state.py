"""
Rock-Paper-Scissors State - Game-specific state model.

A match is a fixed number of rounds. Each round records one choice
per player and, once both are in, the round winner.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from ...engine_core.state import BaseGameState


DEFAULT_MAX_ROUNDS = 3

PLAYER1 = "player1"
PLAYER2 = "player2"
ROUND_DRAW = "draw"


class RPSChoice(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


# Iteration order matters: frequency ties resolve to the earlier choice
CHOICES: list[RPSChoice] = [RPSChoice.ROCK, RPSChoice.PAPER, RPSChoice.SCISSORS]

# choice -> the choice it beats
BEATS: dict[RPSChoice, RPSChoice] = {
    RPSChoice.ROCK: RPSChoice.SCISSORS,
    RPSChoice.SCISSORS: RPSChoice.PAPER,
    RPSChoice.PAPER: RPSChoice.ROCK,
}

# choice -> the choice that beats it
COUNTERS: dict[RPSChoice, RPSChoice] = {
    beaten: winner for winner, beaten in BEATS.items()
}


def parse_choice(value: Any) -> RPSChoice | None:
    """Return the RPSChoice for value, or None if it is not one."""
    if isinstance(value, RPSChoice):
        return value
    if isinstance(value, str):
        try:
            return RPSChoice(value)
        except ValueError:
            return None
    return None


def round_winner(choice1: RPSChoice, choice2: RPSChoice) -> str:
    """'player1', 'player2' or 'draw' for one pair of choices."""
    if choice1 == choice2:
        return ROUND_DRAW
    return PLAYER1 if BEATS[choice1] == choice2 else PLAYER2


@dataclass(frozen=True)
class RPSMove:
    choice: RPSChoice

    def to_dict(self) -> dict[str, Any]:
        return {"choice": RPSChoice(self.choice).value}


@dataclass(frozen=True)
class RPSOptions:
    """Options for a new match."""
    max_rounds: int = DEFAULT_MAX_ROUNDS

    def __post_init__(self):
        if isinstance(self.max_rounds, bool) or not isinstance(self.max_rounds, int):
            raise ValueError(f"max_rounds must be an integer, got {self.max_rounds!r}")
        if self.max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {self.max_rounds}")


@dataclass(frozen=True)
class Round:
    """
    One exchange of choices.

    winner is set exactly when both choices are present and never
    changes afterwards.
    """
    player1_choice: RPSChoice | None = None
    player2_choice: RPSChoice | None = None
    winner: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.player1_choice is not None and self.player2_choice is not None

    def choice_for(self, slot: int) -> RPSChoice | None:
        return self.player1_choice if slot == 0 else self.player2_choice

    def with_choice(self, slot: int, choice: RPSChoice) -> Round:
        if slot == 0:
            return replace(self, player1_choice=choice)
        return replace(self, player2_choice=choice)

    def to_dict(self) -> dict[str, Any]:
        return {
            "player1_choice": RPSChoice(self.player1_choice).value if self.player1_choice else None,
            "player2_choice": RPSChoice(self.player2_choice).value if self.player2_choice else None,
            "winner": self.winner,
        }


@dataclass
class RPSState(BaseGameState):
    """
    Rock-Paper-Scissors match state.

    Adds:
    - rounds, pre-allocated to max_rounds
    - index of the round in progress
    - per-player match score
    """
    rounds: list[Round] = field(default_factory=list)
    current_round: int = 0
    max_rounds: int = DEFAULT_MAX_ROUNDS
    scores: dict[str, int] = field(default_factory=dict)

    @property
    def rounds_complete(self) -> bool:
        return self.current_round >= self.max_rounds

    @property
    def completed_rounds(self) -> list[Round]:
        """Rounds before current_round. The round in progress is excluded."""
        return self.rounds[:min(self.current_round, len(self.rounds))]

    @property
    def active_round(self) -> Round | None:
        if self.rounds_complete or self.current_round >= len(self.rounds):
            return None
        return self.rounds[self.current_round]

    def score_of(self, player_id: str) -> int:
        return self.scores.get(player_id, 0)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["rounds"] = [r.to_dict() for r in self.rounds]
        data["current_round"] = self.current_round
        data["max_rounds"] = self.max_rounds
        data["scores"] = dict(self.scores)
        return data

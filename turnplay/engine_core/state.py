"""
Game State - Common state container specialized per game.

Design principles:
- Immutable-friendly: all mutations return new state
- Serializable: can be turned into plain dicts for the API
- Game-agnostic: Tic-Tac-Toe and Rock-Paper-Scissors states inherit from this
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
import uuid


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_game_id() -> str:
    return str(uuid.uuid4())


class GameStatus(str, Enum):
    """High-level game status."""
    PLAYING = "playing"
    FINISHED = "finished"


DRAW = "draw"


@dataclass(frozen=True)
class Player:
    """
    A participant in a game.

    Created once at game start and never modified afterwards.
    """
    id: str
    name: str
    is_ai: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "is_ai": self.is_ai}


@dataclass(frozen=True)
class GameResult:
    """
    Outcome reported by an engine's end check.

    winner is a player id or "draw".
    """
    winner: str
    reason: str

    @property
    def is_draw(self) -> bool:
        return self.winner == DRAW


@dataclass
class BaseGameState:
    """
    Fields shared by every game state.

    States are owned by the engine that created them. Engines never
    modify a state handed to a caller; they return a new one.
    """
    id: str
    players: tuple[Player, Player]
    current_player_id: str
    status: GameStatus = GameStatus.PLAYING
    winner: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def player_ids(self) -> list[str]:
        return [p.id for p in self.players]

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def other_player_id(self, player_id: str) -> str:
        """Get the id of the player who is not player_id."""
        for p in self.players:
            if p.id != player_id:
                return p.id
        return self.players[0].id

    def player_index(self, player_id: str) -> int | None:
        for idx, p in enumerate(self.players):
            if p.id == player_id:
                return idx
        return None

    def _copy_with(self, **kwargs) -> BaseGameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def finished(self, result: GameResult) -> BaseGameState:
        """Return a copy marked finished with the given result."""
        return self._copy_with(
            status=GameStatus.FINISHED,
            winner=result.winner,
            updated_at=utc_now(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "players": [p.to_dict() for p in self.players],
            "current_player_id": self.current_player_id,
            "status": self.status.value,
            "winner": self.winner,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

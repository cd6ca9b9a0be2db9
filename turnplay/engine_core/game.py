"""
Game contract - The interface every game engine implements.

An engine is stateless. All game data lives in the state object, and
every transition returns a new state:

    state = game.get_initial_state(players)
    if game.validate_move(state, move, player_id):
        state = game.apply_move(state, move, player_id)
    result = game.check_game_end(state)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

from .state import BaseGameState, GameResult, Player

StateT = TypeVar("StateT", bound=BaseGameState)
MoveT = TypeVar("MoveT")


class Game(ABC, Generic[StateT, MoveT]):
    """
    Abstract base class for game engines.

    Engines validate, apply and enumerate moves and detect the end of
    the game. They never touch a state they did not just create.
    """

    game_type: str = ""

    @abstractmethod
    def get_initial_state(self, players: Sequence[Player], options: Any = None) -> StateT:
        """Create the state for a new game between exactly two players."""

    @abstractmethod
    def validate_move(self, state: StateT, move: MoveT, player_id: str) -> bool:
        """
        Check whether player_id may make move in state.

        Malformed moves return False; this method never raises on
        bad input.
        """

    @abstractmethod
    def apply_move(self, state: StateT, move: MoveT, player_id: str) -> StateT:
        """
        Apply a move and return the new state.

        Raises:
            InvalidMoveError: if validate_move rejects the move
        """

    @abstractmethod
    def check_game_end(self, state: StateT) -> GameResult | None:
        """Return the result if the game is over, None otherwise."""

    @abstractmethod
    def get_valid_moves(self, state: StateT, player_id: str) -> list[MoveT]:
        """List every move player_id could make right now."""

    def finalize(self, state: StateT) -> StateT:
        """
        Mark the state finished if the game has ended.

        status moves from playing to finished at most once; a finished
        state is returned as is.
        """
        if not state.is_playing:
            return state
        result = self.check_game_end(state)
        if result is None:
            return state
        return state.finished(result)

    @staticmethod
    def _check_players(players: Sequence[Player]) -> tuple[Player, Player]:
        if len(players) != 2:
            raise ValueError(f"Exactly two players required, got {len(players)}")
        if players[0].id == players[1].id:
            raise ValueError(f"Player ids must differ, both are {players[0].id!r}")
        return players[0], players[1]

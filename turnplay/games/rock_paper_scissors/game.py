"""
Rock-Paper-Scissors engine - Best-of-N rounds.

Rock beats scissors, scissors beats paper, paper beats rock. Within a
round the players choose in turn; the round resolves when the second
choice arrives. The match ends after max_rounds and is decided on
total score.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Sequence
import logging

from ...engine_core.errors import InvalidMoveError
from ...engine_core.game import Game
from ...engine_core.state import DRAW, GameResult, GameStatus, Player, new_game_id, utc_now
from .state import (
    CHOICES,
    PLAYER1,
    ROUND_DRAW,
    RPSChoice,
    RPSMove,
    RPSOptions,
    RPSState,
    Round,
    parse_choice,
    round_winner,
)

logger = logging.getLogger(__name__)


def _choice_of(move: Any) -> Any:
    if isinstance(move, Mapping):
        return move.get("choice")
    return getattr(move, "choice", None)


class RockPaperScissorsGame(Game[RPSState, RPSMove]):
    """
    Rock-Paper-Scissors engine.

    Usage:
        game = RockPaperScissorsGame()
        state = game.get_initial_state([human, ai], RPSOptions(max_rounds=5))
        state = game.apply_move(state, RPSMove(RPSChoice.ROCK), human.id)
        state = game.apply_move(state, RPSMove(RPSChoice.PAPER), ai.id)
    """

    game_type = "rock-paper-scissors"

    def get_initial_state(
        self,
        players: Sequence[Player],
        options: RPSOptions | None = None,
    ) -> RPSState:
        """
        Sets up:
        - max_rounds empty rounds (default 3)
        - zero scores for both players
        - players[0] to choose first
        """
        first, second = self._check_players(players)
        options = options or RPSOptions()

        now = utc_now()
        return RPSState(
            id=new_game_id(),
            players=(first, second),
            current_player_id=first.id,
            created_at=now,
            updated_at=now,
            rounds=[Round() for _ in range(options.max_rounds)],
            current_round=0,
            max_rounds=options.max_rounds,
            scores={first.id: 0, second.id: 0},
        )

    def validate_move(self, state: RPSState, move: Any, player_id: str) -> bool:
        """
        A move is valid if:
        - The choice is rock, paper or scissors
        - The game is still playing
        - Rounds remain
        - player_id has not chosen yet in the current round
        """
        if parse_choice(_choice_of(move)) is None:
            return False

        if state.status != GameStatus.PLAYING:
            return False

        active = state.active_round
        if active is None:
            return False

        slot = state.player_index(player_id)
        if slot is None:
            return False

        return active.choice_for(slot) is None

    def apply_move(self, state: RPSState, move: Any, player_id: str) -> RPSState:
        """
        Record a choice.

        - First choice of the round: the turn passes to the other player.
        - Second choice: the round is resolved, the winner's score goes
          up, the next round starts and the first player is up again.
        """
        if not self.validate_move(state, move, player_id):
            raise InvalidMoveError(f"Invalid move {move!r} for player {player_id}")

        choice = parse_choice(_choice_of(move))
        slot = state.player_index(player_id)

        new_rounds = list(state.rounds)
        current = new_rounds[state.current_round].with_choice(slot, choice)
        new_scores = dict(state.scores)
        new_current_round = state.current_round

        if current.is_resolved:
            choice1 = RPSChoice(current.player1_choice)
            choice2 = RPSChoice(current.player2_choice)
            winner = round_winner(choice1, choice2)
            current = Round(player1_choice=choice1, player2_choice=choice2, winner=winner)
            if winner != ROUND_DRAW:
                winner_id = state.players[0].id if winner == PLAYER1 else state.players[1].id
                new_scores[winner_id] = new_scores.get(winner_id, 0) + 1

            logger.debug("Game %s: round %d resolved (%s vs %s, winner %s)",
                         state.id, state.current_round + 1,
                         current.player1_choice.value, current.player2_choice.value, winner)

            new_current_round += 1
            next_player_id = state.players[0].id
        else:
            next_player_id = state.other_player_id(player_id)

        new_rounds[state.current_round] = current

        return state._copy_with(
            rounds=new_rounds,
            current_round=new_current_round,
            scores=new_scores,
            current_player_id=next_player_id,
            updated_at=utc_now(),
        )

    def check_game_end(self, state: RPSState) -> GameResult | None:
        """
        Once every round is played, the higher score wins ("Won X-Y");
        equal scores are a draw ("Tied X-Y").
        """
        if not state.rounds_complete:
            return None

        first, second = state.players
        score1 = state.score_of(first.id)
        score2 = state.score_of(second.id)

        if score1 > score2:
            return GameResult(winner=first.id, reason=f"Won {score1}-{score2}")
        if score2 > score1:
            return GameResult(winner=second.id, reason=f"Won {score2}-{score1}")
        return GameResult(winner=DRAW, reason=f"Tied {score1}-{score2}")

    def get_valid_moves(self, state: RPSState, player_id: str) -> list[RPSMove]:
        """
        All three choices if player_id is up and has not chosen this
        round, otherwise nothing.
        """
        if state.current_player_id != player_id:
            return []

        probe = RPSMove(CHOICES[0])
        if not self.validate_move(state, probe, player_id):
            return []

        return [RPSMove(choice) for choice in CHOICES]

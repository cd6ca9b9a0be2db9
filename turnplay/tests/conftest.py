"""
Pytest fixtures for Turnplay tests.
"""

import pytest

from ..engine_core.state import Player
from ..games.tic_tac_toe import TicTacToeGame, TicTacToeState
from ..games.rock_paper_scissors import RockPaperScissorsGame, RPSState
from ..session import SessionManager


@pytest.fixture
def human() -> Player:
    return Player(id="player1", name="Human Player")


@pytest.fixture
def ai_player() -> Player:
    return Player(id="ai", name="AI", is_ai=True)


@pytest.fixture
def players(human: Player, ai_player: Player) -> list[Player]:
    """Human first, AI second (the usual seating)."""
    return [human, ai_player]


@pytest.fixture
def ttt_game() -> TicTacToeGame:
    return TicTacToeGame()


@pytest.fixture
def rps_game() -> RockPaperScissorsGame:
    return RockPaperScissorsGame()


@pytest.fixture
def ttt_state(ttt_game: TicTacToeGame, players) -> TicTacToeState:
    """Fresh Tic-Tac-Toe game: player1 is X and moves first."""
    return ttt_game.get_initial_state(players)


@pytest.fixture
def rps_state(rps_game: RockPaperScissorsGame, players) -> RPSState:
    """Fresh best-of-3 Rock-Paper-Scissors match."""
    return rps_game.get_initial_state(players)


@pytest.fixture
def make_ttt_state(ttt_state: TicTacToeState):
    """
    Build a Tic-Tac-Toe state from rows of "X", "O" or None.

    player1 holds X and ai holds O; current is whoever is to move.
    """
    def _make(rows, current="ai"):
        return ttt_state._copy_with(
            board=TicTacToeGame.board_from_rows(rows),
            current_player_id=current,
        )
    return _make


@pytest.fixture
def make_rps_state(rps_game: RockPaperScissorsGame, players):
    """
    Play a sequence of (player1_choice, ai_choice) rounds.

    Returns the state after the last round resolves.
    """
    from ..games.rock_paper_scissors import RPSMove, RPSOptions

    def _make(rounds, max_rounds=10):
        state = rps_game.get_initial_state(players, RPSOptions(max_rounds=max_rounds))
        for human_choice, ai_choice in rounds:
            state = rps_game.apply_move(state, RPSMove(human_choice), "player1")
            state = rps_game.apply_move(state, RPSMove(ai_choice), "ai")
        return state
    return _make


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager(seed=7)

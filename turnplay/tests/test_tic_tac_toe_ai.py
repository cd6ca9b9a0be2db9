"""
Tests for the Tic-Tac-Toe AI.

Tests:
- Each difficulty tier picks legal moves
- Medium priority order (win, block, center, corner)
- Minimax never loses and draws against itself
- Position analysis text
"""

import pytest

from ..bots import BotDecision, Difficulty, TicTacToeAI, create_ai
from ..engine_core.errors import NoValidMovesError
from ..games.tic_tac_toe import CORNERS, TicTacToeMove

X, O = "X", "O"
EMPTY_ROW = [None, None, None]


def _explore_all_replies(game, ai, state, losses):
    """Play the hard AI against every possible sequence of human replies."""
    state = game.finalize(state)
    if not state.is_playing:
        if state.winner == "player1":
            losses.append(state.render())
        return

    if state.current_player_id == "ai":
        move = ai.make_move(state, "hard")
        _explore_all_replies(game, ai, game.apply_move(state, move, "ai"), losses)
        return

    for move in game.get_valid_moves(state, "player1"):
        _explore_all_replies(game, ai, game.apply_move(state, move, "player1"), losses)


class TestDifficultySelection:
    """Tests for difficulty parsing and fallback."""

    def test_unknown_difficulty_falls_back_to_easy(self, ttt_state):
        ai = TicTacToeAI(player_id="player1", seed=1)
        decision = ai.decide(ttt_state, "impossible")

        assert decision.difficulty == Difficulty.EASY
        assert decision.strategy == "random_move"

    def test_none_difficulty_falls_back_to_easy(self, ttt_state):
        ai = TicTacToeAI(player_id="player1", seed=1)
        assert ai.decide(ttt_state, None).difficulty == Difficulty.EASY

    def test_default_is_medium(self, ttt_state):
        ai = TicTacToeAI(player_id="player1", seed=1)
        assert ai.decide(ttt_state).difficulty == Difficulty.MEDIUM

    @pytest.mark.parametrize("difficulty, strategy", [
        ("easy", "random_move"),
        ("medium", "medium_move"),
        ("hard", "optimal_move"),
        (Difficulty.HARD, "optimal_move"),
    ])
    def test_dispatch(self, make_ttt_state, difficulty, strategy):
        state = make_ttt_state([[X, None, None], EMPTY_ROW, EMPTY_ROW])
        decision = TicTacToeAI(seed=3).decide(state, difficulty)

        assert isinstance(decision, BotDecision)
        assert decision.strategy == strategy

    def test_create_ai(self):
        ai = create_ai("tic-tac-toe", player_id="ai", seed=5)
        assert isinstance(ai, TicTacToeAI)
        assert ai.player_id == "ai"
        assert ai.get_name() == "TicTacToeAI"


class TestEasy:
    """Tests for random play."""

    def test_always_legal(self, ttt_game, make_ttt_state):
        state = make_ttt_state([[X, O, X], [None, X, None], [O, None, None]])
        ai = TicTacToeAI(seed=11)
        valid = ttt_game.get_valid_moves(state, "ai")

        for _ in range(30):
            assert ai.make_move(state, "easy") in valid

    def test_covers_several_cells(self, ttt_state):
        ai = TicTacToeAI(player_id="player1", seed=2)
        seen = {ai.make_move(ttt_state, "easy") for _ in range(60)}
        assert len(seen) > 1


class TestMedium:
    """Tests for the heuristic tier."""

    def test_takes_win_over_block(self, make_ttt_state):
        """Winning beats blocking even when the opponent could also win."""
        state = make_ttt_state([[O, O, None], [X, X, None], EMPTY_ROW])
        move = TicTacToeAI(seed=0).make_move(state, "medium")
        assert move == TicTacToeMove(0, 2)

    def test_blocks_opponent(self, make_ttt_state):
        state = make_ttt_state([[X, X, None], [O, None, None], EMPTY_ROW])
        decision = TicTacToeAI(seed=0).decide(state, "medium")

        assert decision.move == TicTacToeMove(0, 2)
        assert decision.explanation == "Blocks the opponent"

    def test_takes_center(self, make_ttt_state):
        state = make_ttt_state([[X, None, None], EMPTY_ROW, EMPTY_ROW])
        assert TicTacToeAI(seed=0).make_move(state, "medium") == TicTacToeMove(1, 1)

    def test_takes_corner_when_center_taken(self, make_ttt_state):
        state = make_ttt_state([EMPTY_ROW, [None, X, None], EMPTY_ROW])
        ai = TicTacToeAI(seed=4)

        for _ in range(20):
            move = ai.make_move(state, "medium")
            assert (move.row, move.col) in CORNERS

    def test_falls_back_to_edge(self, make_ttt_state):
        """With center and corners gone, any remaining cell is played."""
        state = make_ttt_state([[O, X, O], [None, X, None], [X, O, X]])
        decision = TicTacToeAI(seed=0).decide(state, "medium")

        assert (decision.move.row, decision.move.col) in {(1, 0), (1, 2)}
        assert decision.explanation == "Selected randomly"

    def test_win_detection_ignores_turn(self, make_ttt_state):
        """Winning moves are found for either side regardless of turn."""
        state = make_ttt_state([[O, O, None], [X, X, None], EMPTY_ROW], current="player1")
        ai = TicTacToeAI(player_id="ai")

        assert ai.find_winning_move(state, "ai") == TicTacToeMove(0, 2)
        assert ai.find_winning_move(state, "player1") == TicTacToeMove(1, 2)
        assert state.current_player_id == "player1"


class TestHard:
    """Tests for minimax play."""

    def test_takes_immediate_win(self, make_ttt_state):
        state = make_ttt_state([[O, O, None], [X, X, None], [X, None, None]])
        assert TicTacToeAI().make_move(state, "hard") == TicTacToeMove(0, 2)

    def test_blocks_forced_loss(self, make_ttt_state):
        state = make_ttt_state([[X, X, None], [None, O, None], EMPTY_ROW])
        assert TicTacToeAI().make_move(state, "hard") == TicTacToeMove(0, 2)

    def test_deterministic(self, make_ttt_state):
        state = make_ttt_state([[X, None, None], EMPTY_ROW, EMPTY_ROW])
        first = TicTacToeAI(seed=1).make_move(state, "hard")
        second = TicTacToeAI(seed=99).make_move(state, "hard")
        assert first == second

    def test_never_loses_moving_second(self, ttt_game, ttt_state):
        losses = []
        _explore_all_replies(ttt_game, TicTacToeAI(player_id="ai"), ttt_state, losses)
        assert losses == []

    def test_never_loses_moving_first(self, ttt_game, players):
        from ..games.tic_tac_toe import TicTacToeOptions

        state = ttt_game.get_initial_state(players, TicTacToeOptions(first_player_id="ai"))
        losses = []
        _explore_all_replies(ttt_game, TicTacToeAI(player_id="ai"), state, losses)
        assert losses == []

    def test_self_play_draws(self, ttt_game, ttt_state):
        """Optimal against optimal from an empty board is a draw."""
        ais = {
            "player1": TicTacToeAI(player_id="player1"),
            "ai": TicTacToeAI(player_id="ai"),
        }
        state = ttt_state
        while state.is_playing:
            player_id = state.current_player_id
            move = ais[player_id].make_move(state, "hard")
            state = ttt_game.finalize(ttt_game.apply_move(state, move, player_id))

        assert state.winner == "draw"
        assert state.is_full

    def test_reports_search_size(self, ttt_state):
        ai = TicTacToeAI(player_id="player1")
        decision = ai.decide(ttt_state, "hard")

        assert decision.evaluated_positions > 0
        assert decision.explanation == "Minimax score 0"


class TestNoValidMoves:
    """Tests for the no-move error."""

    def test_full_board_raises(self, make_ttt_state):
        state = make_ttt_state([[X, O, X], [X, O, O], [O, X, X]])
        with pytest.raises(NoValidMovesError):
            TicTacToeAI().make_move(state, "hard")

    def test_not_ai_turn_raises(self, ttt_state):
        with pytest.raises(NoValidMovesError):
            TicTacToeAI(player_id="ai").make_move(ttt_state, "easy")


class TestAnalysis:
    """Tests for analyze_game_state."""

    def test_reports_both_winning_moves(self, make_ttt_state):
        state = make_ttt_state([[O, O, None], [X, X, None], EMPTY_ROW])
        report = TicTacToeAI().analyze_game_state(state)

        assert report.splitlines() == [
            "Game Status: playing",
            "Current Player: ai",
            "Board filled: 4/9 cells",
            "AI can win with move: (0, 2)",
            "Player can win with move: (1, 2)",
            "Center occupied: True",
            "Corners occupied: 1/4",
        ]

    def test_empty_board(self, ttt_state):
        report = TicTacToeAI().analyze_game_state(ttt_state)

        assert "Board filled: 0/9 cells" in report
        assert "can win" not in report
        assert "Center occupied: False" in report
        assert "Corners occupied: 0/4" in report

    def test_won_board_has_no_winning_moves(self, ttt_game, make_ttt_state):
        """Empty cells on a finished board do not count as wins."""
        state = make_ttt_state([[X, X, X], [None, None, None], [O, O, None]])
        state = ttt_game.finalize(state)
        ai = TicTacToeAI()

        assert ai.find_winning_move(state, "player1") is None
        assert ai.find_winning_move(state, "ai") is None

        report = ai.analyze_game_state(state)
        assert "Game Status: finished" in report
        assert "can win" not in report

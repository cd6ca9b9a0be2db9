"""
Tests for sessions and the game loop.

Tests:
- Session creation, lookup, listing and removal
- Option handling and difficulty defaults
- Human and AI turns through GameLoop
- Sanitization of the round in progress
"""

import pytest

from ..bots import Difficulty, RockPaperScissorsAI, TicTacToeAI
from ..engine_core.errors import (
    GameNotFoundError,
    GameNotPlayingError,
    InvalidMoveError,
    NotAITurnError,
    UnsupportedGameTypeError,
)
from ..engine_core.state import GameStatus
from ..games import GameType
from ..games.rock_paper_scissors import RPSChoice, RPSMove, RPSOptions
from ..games.tic_tac_toe import TicTacToeMove, TicTacToeState
from ..session import GameLoop, MoveRecord, sanitize_for_ai


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_tic_tac_toe(self, manager):
        session = manager.create_session("tic-tac-toe", player_name="Ada")

        assert session.game_type == GameType.TIC_TAC_TOE
        assert isinstance(session.state, TicTacToeState)
        assert isinstance(session.ai, TicTacToeAI)
        assert session.state.players[0].name == "Ada"
        assert session.state.players[1].is_ai
        assert session.is_human_turn()
        assert session.game_id == session.state.id

    def test_create_rock_paper_scissors_with_rounds(self, manager):
        session = manager.create_session("rock-paper-scissors", options={"max_rounds": 5})

        assert isinstance(session.ai, RockPaperScissorsAI)
        assert session.state.max_rounds == 5

    def test_options_objects_accepted(self, manager):
        session = manager.create_session("rock-paper-scissors", options=RPSOptions(max_rounds=1))
        assert session.state.max_rounds == 1

    def test_ai_can_move_first(self, manager):
        session = manager.create_session("tic-tac-toe", options={"first_player": "ai"})
        assert session.is_ai_turn()
        assert session.state.symbol_of("ai") == "X"

    @pytest.mark.parametrize("options", [
        {"max_rounds": 0},
        {"max_rounds": "many"},
    ])
    def test_invalid_rps_options(self, manager, options):
        with pytest.raises(ValueError):
            manager.create_session("rock-paper-scissors", options=options)

    def test_invalid_first_player(self, manager):
        with pytest.raises(ValueError):
            manager.create_session("tic-tac-toe", options={"first_player": "player2"})

    def test_unsupported_game_type(self, manager):
        with pytest.raises(UnsupportedGameTypeError):
            manager.create_session("chess")

    @pytest.mark.parametrize("difficulty, expected", [
        (None, Difficulty.MEDIUM),
        ("unknown", Difficulty.MEDIUM),
        ("easy", Difficulty.EASY),
        ("hard", Difficulty.HARD),
    ])
    def test_difficulty_defaults_to_medium(self, manager, difficulty, expected):
        session = manager.create_session("tic-tac-toe", difficulty=difficulty)
        assert session.difficulty == expected

    def test_custom_game_id(self, manager):
        session = manager.create_session("tic-tac-toe", game_id="my-game")
        assert session.game_id == "my-game"
        assert session.state.id == "my-game"

    def test_existing_tic_tac_toe_id_returns_existing(self, manager):
        first = manager.create_session("tic-tac-toe", game_id="g1")
        GameLoop(first).submit_move("player1", TicTacToeMove(0, 0))

        again = manager.create_session("tic-tac-toe", game_id="g1", player_name="Other")
        assert again is first
        assert again.state.board[0][0] == "X"

    def test_existing_rps_id_rejected(self, manager):
        manager.create_session("rock-paper-scissors", game_id="r1")
        with pytest.raises(ValueError):
            manager.create_session("rock-paper-scissors", game_id="r1")

    def test_each_session_gets_its_own_ai(self, manager):
        a = manager.create_session("rock-paper-scissors")
        b = manager.create_session("rock-paper-scissors")
        assert a.ai is not b.ai

    def test_get_session(self, manager):
        session = manager.create_session("rock-paper-scissors")

        assert manager.get_session(session.game_id) is session
        assert manager.get_session(session.game_id, "rock-paper-scissors") is session
        with pytest.raises(GameNotFoundError):
            manager.get_session(session.game_id, "tic-tac-toe")
        with pytest.raises(GameNotFoundError):
            manager.get_session("missing")

    def test_list_and_end_sessions(self, manager):
        ttt = manager.create_session("tic-tac-toe")
        rps = manager.create_session("rock-paper-scissors")

        assert manager.list_sessions() == [ttt, rps]
        assert manager.list_sessions("tic-tac-toe") == [ttt]
        assert len(manager) == 2

        assert manager.end_session(ttt.game_id)
        assert not manager.end_session(ttt.game_id)
        assert manager.list_sessions() == [rps]


class TestSanitize:
    """Tests for sanitize_for_ai."""

    def test_blanks_unresolved_round(self, manager):
        session = manager.create_session("rock-paper-scissors")
        GameLoop(session).submit_move("player1", RPSMove(RPSChoice.ROCK))

        view = sanitize_for_ai(session.state)
        assert view.rounds[0].player1_choice is None
        assert session.state.rounds[0].player1_choice == RPSChoice.ROCK

    def test_resolved_rounds_untouched(self, manager):
        session = manager.create_session("rock-paper-scissors")
        loop = GameLoop(session)
        loop.submit_move("player1", RPSMove(RPSChoice.ROCK))
        loop.play_ai_turn()

        assert sanitize_for_ai(session.state) is session.state

    def test_untouched_round_passes_through(self, manager):
        session = manager.create_session("rock-paper-scissors")
        assert sanitize_for_ai(session.state) is session.state

    def test_tic_tac_toe_passes_through(self, manager):
        session = manager.create_session("tic-tac-toe")
        assert sanitize_for_ai(session.state) is session.state


class TestGameLoop:
    """Tests for GameLoop."""

    def test_human_then_ai(self, manager):
        session = manager.create_session("tic-tac-toe", difficulty="hard")
        loop = GameLoop(session)

        result = loop.submit_move("player1", {"row": 0, "col": 0})
        assert not result.game_over
        assert session.is_ai_turn()

        result = loop.play_ai_turn()
        assert result.player_id == "ai"
        assert result.decision.difficulty == Difficulty.HARD
        assert result.move == TicTacToeMove(1, 1)
        assert session.is_human_turn()

        assert [r.player_id for r in session.history] == ["player1", "ai"]
        assert all(isinstance(r, MoveRecord) for r in session.history)

    def test_invalid_move_not_recorded(self, manager):
        session = manager.create_session("tic-tac-toe")
        loop = GameLoop(session)

        with pytest.raises(InvalidMoveError):
            loop.submit_move("player1", TicTacToeMove(3, 3))
        with pytest.raises(InvalidMoveError):
            loop.submit_move("ai", TicTacToeMove(0, 0))
        assert session.history == []

    def test_ai_turn_requires_ai_to_move(self, manager):
        session = manager.create_session("tic-tac-toe")
        with pytest.raises(NotAITurnError):
            GameLoop(session).play_ai_turn()

    def test_finished_game_rejects_moves(self, manager):
        session = manager.create_session("rock-paper-scissors", options={"max_rounds": 1})
        loop = GameLoop(session)
        loop.submit_move("player1", RPSMove(RPSChoice.ROCK))
        result = loop.play_ai_turn()

        assert result.game_over
        assert session.state.status == GameStatus.FINISHED
        assert session.state.winner in ("player1", "ai", "draw")

        with pytest.raises(GameNotPlayingError):
            loop.submit_move("player1", RPSMove(RPSChoice.PAPER))
        with pytest.raises(GameNotPlayingError):
            loop.play_ai_turn()

    def test_ai_never_sees_pending_choice(self, manager):
        """The AI decides on the sanitized state."""
        seen = []
        session = manager.create_session("rock-paper-scissors", difficulty="hard")
        original_decide = session.ai.decide

        def spy(state, difficulty):
            seen.append(state.rounds[state.current_round].player1_choice)
            return original_decide(state, difficulty)

        session.ai.decide = spy
        loop = GameLoop(session)
        loop.submit_move("player1", RPSMove(RPSChoice.SCISSORS))
        loop.play_ai_turn()

        assert seen == [None]

    def test_full_tic_tac_toe_game(self, manager):
        """Hard AI against a scripted human finishes the game."""
        session = manager.create_session("tic-tac-toe", difficulty="hard")
        loop = GameLoop(session)

        while session.is_active():
            if session.is_ai_turn():
                loop.play_ai_turn()
            else:
                row, col = session.state.empty_cells()[0]
                loop.submit_move("player1", TicTacToeMove(row, col))

        assert session.state.status == GameStatus.FINISHED
        assert session.state.winner in ("ai", "draw")

    def test_full_rps_match(self, manager):
        session = manager.create_session("rock-paper-scissors", options={"max_rounds": 4})
        loop = GameLoop(session)

        for _ in range(4):
            loop.submit_move("player1", RPSMove(RPSChoice.ROCK))
            loop.play_ai_turn()

        state = session.state
        assert state.status == GameStatus.FINISHED
        assert sum(state.scores.values()) <= 4
        assert len(session.history) == 8


class TestAnalyze:
    """Tests for GameLoop.analyze."""

    def test_tic_tac_toe_analysis(self, manager):
        session = manager.create_session("tic-tac-toe", game_id="t1")
        loop = GameLoop(session)
        loop.submit_move("player1", TicTacToeMove(1, 1))

        report = loop.analyze()
        assert report.text.startswith("Game Analysis for tic-tac-toe (ID: t1)")
        assert "Board filled: 1/9 cells" in report.text
        assert "Current Board:" in report.text
        assert "It's the AI's turn to move." in report.text
        assert report.summary["total_moves"] == 1
        assert len(report.summary["valid_moves"]) == 8

    def test_rps_analysis_hides_pending_choice(self, manager):
        session = manager.create_session("rock-paper-scissors")
        loop = GameLoop(session)
        loop.submit_move("player1", RPSMove(RPSChoice.PAPER))

        report = loop.analyze()
        assert "Round History" not in report.text
        assert "Opponent Patterns" not in report.text
        assert "Current Round: 1/3" in report.text
        assert report.summary["current_round"] == 0
        assert report.summary["scores"] == {"player1": 0, "ai": 0}

    def test_finished_analysis_names_winner(self, manager):
        session = manager.create_session("rock-paper-scissors", options={"max_rounds": 1})
        loop = GameLoop(session)
        loop.submit_move("player1", RPSMove(RPSChoice.ROCK))
        loop.play_ai_turn()

        report = loop.analyze()
        assert f"Winner: {session.state.winner}" in report.text
        assert report.summary["status"] == "finished"

    def test_won_tic_tac_toe_analysis(self, manager):
        session = manager.create_session("tic-tac-toe")
        loop = GameLoop(session)
        for move in [(0, 0), (2, 0), (0, 1), (2, 1), (0, 2)]:
            loop.submit_move(session.state.current_player_id, TicTacToeMove(*move))

        report = loop.analyze()
        assert "Game Status: finished" in report.text
        assert "can win" not in report.text
        assert "Winner: player1" in report.text

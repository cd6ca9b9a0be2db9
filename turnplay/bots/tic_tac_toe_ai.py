"""
Tic-Tac-Toe AI - Three difficulty tiers.

- easy: uniformly random valid move
- medium: win, else block, else center, else a random corner, else random
- hard: exhaustive minimax (never loses)

Unrecognized difficulty selectors fall back to easy.
"""

from __future__ import annotations
from typing import Any, Callable
import logging

from ..engine_core.errors import NoValidMovesError
from ..games.tic_tac_toe import (
    BOARD_SIZE,
    CENTER,
    CORNERS,
    TicTacToeGame,
    TicTacToeMove,
    TicTacToeState,
    find_line,
)
from .policy import BotDecision, Difficulty, GameAI

logger = logging.getLogger(__name__)

WIN_SCORE = 10

# Search boards are tuples of tuples so they can key the memo table
SearchBoard = tuple[tuple[Any, ...], ...]


def _place(board: SearchBoard, row: int, col: int, symbol: Any) -> SearchBoard:
    return tuple(
        tuple(symbol if (r, c) == (row, col) else board[r][c] for c in range(BOARD_SIZE))
        for r in range(BOARD_SIZE)
    )


def _empty_cells(board: SearchBoard) -> list[tuple[int, int]]:
    return [
        (r, c)
        for r in range(BOARD_SIZE)
        for c in range(BOARD_SIZE)
        if board[r][c] is None
    ]


class TicTacToeAI(GameAI):
    """
    An AI that plays Tic-Tac-Toe.

    Usage:
        ai = TicTacToeAI()
        move = ai.make_move(state, "hard")
        print(ai.analyze_game_state(state))
    """

    fallback_difficulty = Difficulty.EASY

    def __init__(self, player_id: str | None = None, seed: int | None = None):
        super().__init__(player_id=player_id, seed=seed)
        self.game = TicTacToeGame()

        # How many positions the last hard search evaluated (for debugging)
        self.positions_evaluated = 0

    def _get_strategy(self, difficulty: Difficulty) -> Callable[..., tuple[TicTacToeMove, str]]:
        strategies = {
            Difficulty.EASY: self._random_move,
            Difficulty.MEDIUM: self._medium_move,
            Difficulty.HARD: self._optimal_move,
        }
        return strategies[difficulty]

    def make_move(self, state: TicTacToeState, difficulty: Any = Difficulty.MEDIUM) -> TicTacToeMove:
        """
        Choose the AI's next move.

        Raises:
            NoValidMovesError: if the AI has no empty cell to play
        """
        return self.decide(state, difficulty).move

    def decide(self, state: TicTacToeState, difficulty: Any = Difficulty.MEDIUM) -> BotDecision:
        level = self.resolve_difficulty(difficulty)
        ai_id, opponent_id = self.resolve_players(state)

        valid_moves = self.game.get_valid_moves(state, ai_id)
        if not valid_moves:
            raise NoValidMovesError("No valid moves available")

        self.positions_evaluated = 0
        strategy = self._get_strategy(level)
        move, explanation = strategy(state, valid_moves, ai_id, opponent_id)

        logger.debug("Game %s: %s (%s) plays (%d, %d): %s",
                     state.id, ai_id, level.value, move.row, move.col, explanation)

        return BotDecision(
            move=move,
            difficulty=level,
            strategy=strategy.__name__.lstrip("_"),
            explanation=explanation,
            evaluated_positions=self.positions_evaluated or len(valid_moves),
        )

    # =========================================================================
    # Strategies
    # =========================================================================

    def _random_move(self, state, valid_moves, ai_id, opponent_id):
        return self.rng.choice(valid_moves), "Selected randomly"

    def _medium_move(self, state, valid_moves, ai_id, opponent_id):
        """
        Priority order:
        1. Win immediately if possible
        2. Block the opponent's immediate win
        3. Take the center
        4. Take a random free corner
        5. Take any remaining move
        """
        win_move = self.find_winning_move(state, ai_id)
        if win_move:
            return win_move, "Takes the win"

        block_move = self.find_winning_move(state, opponent_id)
        if block_move:
            return block_move, "Blocks the opponent"

        center = TicTacToeMove(*CENTER)
        if center in valid_moves:
            return center, "Takes the center"

        corners = [m for m in valid_moves if (m.row, m.col) in CORNERS]
        if corners:
            return self.rng.choice(corners), "Takes a corner"

        return self.rng.choice(valid_moves), "Selected randomly"

    def _optimal_move(self, state, valid_moves, ai_id, opponent_id):
        """
        Minimax over the full game tree.

        The first move (row-major) reaching the best score wins ties, so
        the choice is deterministic for a given position.
        """
        ai_symbol = state.player_symbols[ai_id]
        opponent_symbol = state.player_symbols[opponent_id]
        board: SearchBoard = tuple(tuple(row) for row in state.board)
        memo: dict[tuple[SearchBoard, bool], int] = {}

        best_move = valid_moves[0]
        best_score = float("-inf")

        for move in valid_moves:
            child = _place(board, move.row, move.col, ai_symbol)
            score = self._minimax(child, 0, False, ai_symbol, opponent_symbol, memo)
            if score > best_score:
                best_score = score
                best_move = move

        return best_move, f"Minimax score {best_score}"

    def _minimax(
        self,
        board: SearchBoard,
        depth: int,
        is_maximizing: bool,
        ai_symbol: Any,
        opponent_symbol: Any,
        memo: dict[tuple[SearchBoard, bool], int],
    ) -> int:
        """
        Score a position from the AI's point of view.

        - AI win: 10 - depth (prefer faster wins)
        - Opponent win: depth - 10 (prefer slower losses)
        - Draw: 0

        depth counts plies after the AI's candidate move. Within one
        decision a position always sits at the same depth, so the memo
        table is keyed on board and side to move only.
        """
        key = (board, is_maximizing)
        if key in memo:
            return memo[key]

        self.positions_evaluated += 1

        line = find_line(board)
        if line is not None:
            symbol, _ = line
            score = WIN_SCORE - depth if symbol == ai_symbol else depth - WIN_SCORE
            memo[key] = score
            return score

        empty = _empty_cells(board)
        if not empty:
            memo[key] = 0
            return 0

        if is_maximizing:
            score = max(
                self._minimax(_place(board, r, c, ai_symbol), depth + 1, False,
                              ai_symbol, opponent_symbol, memo)
                for r, c in empty
            )
        else:
            score = min(
                self._minimax(_place(board, r, c, opponent_symbol), depth + 1, True,
                              ai_symbol, opponent_symbol, memo)
                for r, c in empty
            )

        memo[key] = score
        return score

    # =========================================================================
    # Analysis
    # =========================================================================

    def find_winning_move(self, state: TicTacToeState, player_id: str) -> TicTacToeMove | None:
        """
        Find a move that wins immediately for player_id.

        Works regardless of whose turn it is: each candidate is
        trial-applied as if player_id were to move. A board that already
        holds a line has no winning move left.
        """
        if self.game.check_game_end(state) is not None:
            return None

        probe = self.game.with_turn(state, player_id)
        for move in self.game.get_valid_moves(probe, player_id):
            after = self.game.apply_move(probe, move, player_id)
            result = self.game.check_game_end(after)
            if result and result.winner == player_id:
                return move
        return None

    def analyze_game_state(self, state: TicTacToeState) -> str:
        """
        Analyzes:
        - Game status and current player
        - Board occupancy
        - Immediate wins available to the AI and to its opponent
        - Center and corner control
        """
        ai_id, opponent_id = self.resolve_players(state)
        analysis = [
            f"Game Status: {state.status.value}",
            f"Current Player: {state.current_player_id}",
            f"Board filled: {state.filled_cells}/{BOARD_SIZE * BOARD_SIZE} cells",
        ]

        ai_win = self.find_winning_move(state, ai_id)
        player_win = self.find_winning_move(state, opponent_id)

        if ai_win:
            analysis.append(f"AI can win with move: ({ai_win.row}, {ai_win.col})")
        if player_win:
            analysis.append(f"Player can win with move: ({player_win.row}, {player_win.col})")

        center_occupied = state.board[CENTER[0]][CENTER[1]] is not None
        corners_occupied = sum(1 for r, c in CORNERS if state.board[r][c] is not None)

        analysis.append(f"Center occupied: {center_occupied}")
        analysis.append(f"Corners occupied: {corners_occupied}/{len(CORNERS)}")

        return "\n".join(analysis)

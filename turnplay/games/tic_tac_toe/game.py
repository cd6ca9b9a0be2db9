"""
Tic-Tac-Toe engine - Rules for the classic 3x3 game.

Players alternate placing X and O. Three in a row, column or diagonal
wins; a full board with no line is a draw.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Sequence
import logging

from ...engine_core.errors import InvalidMoveError
from ...engine_core.game import Game
from ...engine_core.state import DRAW, GameResult, Player, new_game_id, utc_now
from .state import (
    BOARD_SIZE,
    Board,
    Symbol,
    TicTacToeMove,
    TicTacToeOptions,
    TicTacToeState,
    copy_board,
    empty_board,
)

logger = logging.getLogger(__name__)


def find_line(board: Sequence[Sequence[Any]]) -> tuple[Any, str] | None:
    """
    Find the first completed line on a board.

    Checks rows, then columns, then the main diagonal, then the
    anti-diagonal. Returns (symbol, reason) or None.
    """
    for row in range(BOARD_SIZE):
        a, b, c = board[row][0], board[row][1], board[row][2]
        if a and a == b == c:
            return a, f"Three in a row (row {row + 1})"

    for col in range(BOARD_SIZE):
        a, b, c = board[0][col], board[1][col], board[2][col]
        if a and a == b == c:
            return a, f"Three in a column (column {col + 1})"

    if board[0][0] and board[0][0] == board[1][1] == board[2][2]:
        return board[0][0], "Three in a diagonal"

    if board[0][2] and board[0][2] == board[1][1] == board[2][0]:
        return board[0][2], "Three in a diagonal"

    return None


def _is_coordinate(value: Any) -> bool:
    # bool is an int subclass; True/False are not coordinates
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        # JSON clients may send 1.0; NaN and infinities are not integral
        if not value.is_integer():
            return False
    elif not isinstance(value, int):
        return False
    return 0 <= value < BOARD_SIZE


def _coordinates(move: Any) -> tuple[Any, Any]:
    if isinstance(move, Mapping):
        return move.get("row"), move.get("col")
    return getattr(move, "row", None), getattr(move, "col", None)


class TicTacToeGame(Game[TicTacToeState, TicTacToeMove]):
    """
    Tic-Tac-Toe engine.

    Usage:
        game = TicTacToeGame()
        state = game.get_initial_state([human, ai])
        state = game.apply_move(state, TicTacToeMove(1, 1), human.id)
        result = game.check_game_end(state)
    """

    game_type = "tic-tac-toe"

    def get_initial_state(
        self,
        players: Sequence[Player],
        options: TicTacToeOptions | None = None,
    ) -> TicTacToeState:
        """
        Create a new game with an empty board.

        players[0] gets X and moves first unless options.first_player_id
        names players[1], in which case the symbols are swapped.
        """
        first, second = self._check_players(players)
        options = options or TicTacToeOptions()
        x_player = options.resolve_first([first.id, second.id])
        o_player = second.id if x_player == first.id else first.id

        now = utc_now()
        return TicTacToeState(
            id=new_game_id(),
            players=(first, second),
            current_player_id=x_player,
            created_at=now,
            updated_at=now,
            board=empty_board(),
            player_symbols={x_player: Symbol.X, o_player: Symbol.O},
        )

    def validate_move(self, state: TicTacToeState, move: Any, player_id: str) -> bool:
        """
        A move is valid if:
        - It is player_id's turn
        - row and col are integers within the 3x3 grid
        - The target cell is empty

        Anything else, including non-integer, NaN or out-of-range
        coordinates, is rejected rather than raising.
        """
        if state.current_player_id != player_id:
            return False

        row, col = _coordinates(move)
        if not (_is_coordinate(row) and _is_coordinate(col)):
            return False

        return state.board[int(row)][int(col)] is None

    def apply_move(self, state: TicTacToeState, move: Any, player_id: str) -> TicTacToeState:
        """
        Place player_id's symbol and pass the turn.

        The board is copied; the input state is left untouched.
        """
        if not self.validate_move(state, move, player_id):
            raise InvalidMoveError(f"Invalid move {move!r} for player {player_id}")

        row, col = _coordinates(move)
        row, col = int(row), int(col)
        new_board = copy_board(state.board)
        new_board[row][col] = state.player_symbols[player_id]

        logger.debug("Game %s: %s placed %s at (%d, %d)",
                     state.id, player_id, new_board[row][col], row, col)

        return state._copy_with(
            board=new_board,
            current_player_id=state.other_player_id(player_id),
            updated_at=utc_now(),
        )

    def check_game_end(self, state: TicTacToeState) -> GameResult | None:
        """
        Checks, in order: the three rows, the three columns, the main
        diagonal, the anti-diagonal, and finally a full board (draw).

        Raises:
            ValueError: if the winning line's symbol belongs to no player
        """
        line = find_line(state.board)
        if line is not None:
            symbol, reason = line
            winner = state.player_with_symbol(symbol)
            if winner is None:
                raise ValueError(f"Game {state.id}: no player holds symbol {symbol!r}")
            return GameResult(winner=winner, reason=reason)

        if state.is_full:
            return GameResult(winner=DRAW, reason="Board is full")

        return None

    def get_valid_moves(self, state: TicTacToeState, player_id: str) -> list[TicTacToeMove]:
        """All empty cells on player_id's turn, otherwise nothing."""
        if state.current_player_id != player_id:
            return []
        return [TicTacToeMove(row, col) for row, col in state.empty_cells()]

    def with_turn(self, state: TicTacToeState, player_id: str) -> TicTacToeState:
        """
        Return a copy where it is player_id's turn.

        Used for what-if searches ("could this player win next move?")
        that ignore whose turn it really is.
        """
        if state.current_player_id == player_id:
            return state
        return state._copy_with(current_player_id=player_id)

    @staticmethod
    def board_from_rows(rows: Sequence[Sequence[str | None]]) -> Board:
        """Build a board from rows of "X", "O" or None."""
        return [[Symbol(cell) if cell else None for cell in row] for row in rows]

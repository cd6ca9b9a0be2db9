"""
Tic-Tac-Toe State - Game-specific state model.

Extends the common state with the 3x3 board and the symbol each
player places.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ...engine_core.state import BaseGameState


BOARD_SIZE = 3

CENTER = (1, 1)
CORNERS = [(0, 0), (0, 2), (2, 0), (2, 2)]


class Symbol(str, Enum):
    X = "X"
    O = "O"


Cell = Optional[Symbol]
Board = list[list[Cell]]


def empty_board() -> Board:
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


def copy_board(board: Board) -> Board:
    return [list(row) for row in board]


@dataclass(frozen=True)
class TicTacToeMove:
    """Place the current player's symbol at (row, col)."""
    row: int
    col: int

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "col": self.col}


@dataclass(frozen=True)
class TicTacToeOptions:
    """
    Options for a new Tic-Tac-Toe game.

    first_player_id names the player who gets X and moves first.
    None means the first player in the list.
    """
    first_player_id: str | None = None

    def resolve_first(self, player_ids: list[str]) -> str:
        if self.first_player_id is None:
            return player_ids[0]
        if self.first_player_id not in player_ids:
            raise ValueError(
                f"first_player_id {self.first_player_id!r} is not one of {player_ids}"
            )
        return self.first_player_id


@dataclass
class TicTacToeState(BaseGameState):
    """
    Tic-Tac-Toe game state.

    Adds:
    - 3x3 board of X, O or None
    - player id -> symbol mapping (X moves first)
    """
    board: Board = field(default_factory=empty_board)
    player_symbols: dict[str, Symbol] = field(default_factory=dict)

    @property
    def filled_cells(self) -> int:
        return sum(1 for row in self.board for cell in row if cell is not None)

    @property
    def is_full(self) -> bool:
        return self.filled_cells == BOARD_SIZE * BOARD_SIZE

    def empty_cells(self) -> list[tuple[int, int]]:
        """All empty (row, col) cells in row-major order."""
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.board[row][col] is None
        ]

    def symbol_of(self, player_id: str) -> Symbol | None:
        return self.player_symbols.get(player_id)

    def player_with_symbol(self, symbol: str) -> str | None:
        for player_id, player_symbol in self.player_symbols.items():
            if player_symbol == symbol:
                return player_id
        return None

    def render(self) -> str:
        """Board as text, one row per line."""
        lines = []
        for row in range(BOARD_SIZE):
            cells = [
                f" {Symbol(self.board[row][col]).value} " if self.board[row][col] else "   "
                for col in range(BOARD_SIZE)
            ]
            lines.append("|".join(cells))
            if row < BOARD_SIZE - 1:
                lines.append("-----------")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["board"] = [
            [Symbol(cell).value if cell else None for cell in row] for row in self.board
        ]
        data["player_symbols"] = {
            player_id: Symbol(symbol).value for player_id, symbol in self.player_symbols.items()
        }
        return data

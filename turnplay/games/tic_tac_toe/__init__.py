"""
Tic-Tac-Toe - Two players, a 3x3 grid, first to three in a line wins.
"""

from .state import (
    BOARD_SIZE,
    CENTER,
    CORNERS,
    Symbol,
    TicTacToeMove,
    TicTacToeOptions,
    TicTacToeState,
)
from .game import TicTacToeGame, find_line

__all__ = [
    "BOARD_SIZE",
    "CENTER",
    "CORNERS",
    "Symbol",
    "TicTacToeMove",
    "TicTacToeOptions",
    "TicTacToeState",
    "TicTacToeGame",
    "find_line",
]

"""
Turnplay - Turn-based games against AI opponents.

Two games, each with a rules engine and a computer opponent:
- Tic-Tac-Toe: random, heuristic and minimax AI
- Rock-Paper-Scissors: random, frequency and pattern AI

Around the engines:
- In-memory game sessions with move history
- A REST API (FastAPI) and a terminal CLI
"""

__version__ = "0.1.0"

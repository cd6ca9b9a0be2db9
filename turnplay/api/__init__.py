"""
API Module - REST interface for game clients.

Exposes the engines via a REST API. A client:
1. Creates a game of a given type
2. Submits the human player's moves
3. Asks the AI to move when it is its turn
4. Reads state, history and analysis

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    MoveRequest,
    # Responses
    AnalysisResponse,
    DeleteGameResponse,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    HealthResponse,
    # Shared
    ErrorCode,
    GameStateInfo,
    MoveInfo,
    PlayerInfo,
    RoundInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "MoveRequest",
    # Responses
    "AnalysisResponse",
    "DeleteGameResponse",
    "ErrorResponse",
    "GameListResponse",
    "GameResponse",
    "HealthResponse",
    # Shared
    "ErrorCode",
    "GameStateInfo",
    "MoveInfo",
    "PlayerInfo",
    "RoundInfo",
    # Service
    "APIService",
    "create_app",
]

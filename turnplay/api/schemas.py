"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- INVALID_MOVE: The engine rejected the move
- GAME_NOT_FOUND: Game does not exist (or belongs to another game type)
- UNSUPPORTED_GAME_TYPE: Unknown game type in the URL
- GAME_NOT_PLAYING: The game has already finished
- NOT_AI_TURN: AI move requested while it is not the AI's turn
- VALIDATION_ERROR: Invalid options (for example max_rounds < 1)
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_MOVE = "INVALID_MOVE"
    NO_VALID_MOVES = "NO_VALID_MOVES"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    UNSUPPORTED_GAME_TYPE = "UNSUPPORTED_GAME_TYPE"
    GAME_NOT_PLAYING = "GAME_NOT_PLAYING"
    NOT_AI_TURN = "NOT_AI_TURN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """Player information for display."""
    id: str
    name: str
    is_ai: bool = False
    is_current_turn: bool = False
    symbol: Optional[str] = Field(None, description="X or O (tic-tac-toe)")
    score: Optional[int] = Field(None, description="Rounds won (rock-paper-scissors)")


class RoundInfo(BaseModel):
    """One Rock-Paper-Scissors round."""
    player1_choice: Optional[str] = None
    player2_choice: Optional[str] = None
    winner: Optional[str] = Field(None, description="player1, player2 or draw")


class GameStateInfo(BaseModel):
    """
    Game state as seen by clients.

    Tic-Tac-Toe games fill in board; Rock-Paper-Scissors games fill in
    the round fields. The choice made so far in an unresolved round is
    never included.
    """
    id: str
    game_type: str
    status: str
    current_player_id: str
    winner: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    # tic-tac-toe
    board: Optional[list[list[Optional[str]]]] = None

    # rock-paper-scissors
    rounds: Optional[list[RoundInfo]] = None
    current_round: Optional[int] = None
    max_rounds: Optional[int] = None
    scores: Optional[dict[str, int]] = None


class MoveInfo(BaseModel):
    """A move from the game history."""
    player_id: str
    move: dict[str, Any]
    timestamp: datetime


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create a new game."""
    player_name: str = Field("Player", description="Display name for the human player")
    game_id: Optional[str] = Field(None, description="Custom game id (generated if absent)")
    difficulty: Optional[str] = Field(None, description="easy, medium or hard (default medium)")
    first_player: Optional[str] = Field(
        None, description="tic-tac-toe only: player1 or ai"
    )
    max_rounds: Optional[int] = Field(
        None, description="rock-paper-scissors only: number of rounds (default 3)"
    )


class MoveRequest(BaseModel):
    """
    A move for the given player.

    Tic-Tac-Toe uses row and col, Rock-Paper-Scissors uses choice.
    Values are checked by the game engine, not by the schema.
    """
    player_id: str = Field("player1", description="Player making the move")
    row: Any = Field(None, description="tic-tac-toe row (0-2)")
    col: Any = Field(None, description="tic-tac-toe column (0-2)")
    choice: Any = Field(None, description="rock, paper or scissors")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameResponse(BaseModel):
    """A game with its history."""
    game: GameStateInfo
    difficulty: str
    history: list[MoveInfo] = Field(default_factory=list)
    message: Optional[str] = None

    # Set on AI moves
    ai_strategy: Optional[str] = None
    ai_explanation: Optional[str] = None

    api_version: str = "v1"


class AnalysisResponse(BaseModel):
    """Position analysis for a game."""
    game_id: str
    game_type: str
    analysis: str
    summary: dict[str, Any] = Field(default_factory=dict)


class GameListResponse(BaseModel):
    """Response listing games of one type."""
    games: list[GameStateInfo]
    count: int


class DeleteGameResponse(BaseModel):
    """Response after deleting a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str

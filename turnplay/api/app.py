"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /health                                         Health check
    POST   /api/v1/games/{game_type}                       Create game
    GET    /api/v1/games/{game_type}                       List games
    GET    /api/v1/games/{game_type}/{game_id}             Get game
    DELETE /api/v1/games/{game_type}/{game_id}             Delete game
    POST   /api/v1/games/{game_type}/{game_id}/moves       Submit a move
    POST   /api/v1/games/{game_type}/{game_id}/ai-move     Let the AI move
    GET    /api/v1/games/{game_type}/{game_id}/analysis    Position analysis

game_type is "tic-tac-toe" or "rock-paper-scissors".

All responses are JSON with explicit Pydantic schemas. Errors use
ErrorResponse with a machine-readable error_code.
"""

from typing import Union
import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..engine_core.errors import GameError
from .service import APIService
from .schemas import (
    # Request models
    CreateGameRequest,
    MoveRequest,
    # Response models
    AnalysisResponse,
    DeleteGameResponse,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
TURNPLAY_ENV = os.getenv("TURNPLAY_ENV", "development")
TURNPLAY_LOG_LEVEL = os.getenv("TURNPLAY_LOG_LEVEL", "INFO").upper()
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

API_VERSION = "1.0.0"

# error_code -> HTTP status; anything else is a 400
ERROR_STATUS = {
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.UNSUPPORTED_GAME_TYPE: 404,
}

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    logging.getLogger("turnplay").setLevel(TURNPLAY_LOG_LEVEL)

    app = FastAPI(
        title="Turnplay API",
        description="""
Tic-Tac-Toe and Rock-Paper-Scissors against AI opponents.

## Game Flow

1. `POST /api/v1/games/{game_type}` creates a game (human is `player1`, AI is `ai`)
2. `POST /moves` submits the human's move
3. `POST /ai-move` lets the AI answer when it is its turn
4. Repeat until `status` is `finished`

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_MOVE` | The engine rejected the move |
| `GAME_NOT_FOUND` | Game does not exist |
| `UNSUPPORTED_GAME_TYPE` | Unknown game type |
| `GAME_NOT_PLAYING` | The game is already finished |
| `NOT_AI_TURN` | It is not the AI's turn |
| `VALIDATION_ERROR` | Invalid game options |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Union[dict, None] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
        try:
            error_code = ErrorCode(exc.error_code)
        except ValueError:
            error_code = ErrorCode.INTERNAL_ERROR
        status_code = ERROR_STATUS.get(error_code, 400)
        logger.info("%s %s -> %s: %s", request.method, request.url.path, error_code.value, exc)
        return make_error_response(error_code, str(exc), status_code=status_code)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_type}",
        response_model=GameResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid options"},
            404: {"model": ErrorResponse, "description": "Unsupported game type"},
        },
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(
        game_type: str,
        body: Union[CreateGameRequest, None] = None,
    ) -> Union[GameResponse, JSONResponse]:
        """
        Create a new game against the AI.

        Reusing the `game_id` of an existing Tic-Tac-Toe game returns that game.
        """
        try:
            return api_service.create_game(game_type, body or CreateGameRequest())
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

    @app.get(
        "/api/v1/games/{game_type}",
        response_model=GameListResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="List games of one type",
    )
    async def list_games(game_type: str) -> GameListResponse:
        return api_service.list_games(game_type)

    @app.get(
        "/api/v1/games/{game_type}/{game_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get a game",
    )
    async def get_game(game_type: str, game_id: str) -> GameResponse:
        """Get the current state and move history of a game."""
        return api_service.get_game(game_type, game_id)

    @app.delete(
        "/api/v1/games/{game_type}/{game_id}",
        response_model=DeleteGameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Delete a game",
    )
    async def delete_game(game_type: str, game_id: str) -> DeleteGameResponse:
        return api_service.delete_game(game_type, game_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_type}/{game_id}/moves",
        response_model=GameResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid move or game over"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Game Loop"],
        summary="Submit a move",
    )
    async def submit_move(game_type: str, game_id: str, body: MoveRequest) -> GameResponse:
        """
        Submit a move.

        **Request Body:**
        ```json
        {"player_id": "player1", "row": 1, "col": 1}
        {"player_id": "player1", "choice": "rock"}
        ```
        """
        return api_service.submit_move(game_type, game_id, body)

    @app.post(
        "/api/v1/games/{game_type}/{game_id}/ai-move",
        response_model=GameResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Not the AI's turn or game over"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Game Loop"],
        summary="Let the AI make its move",
    )
    async def ai_move(game_type: str, game_id: str) -> GameResponse:
        return api_service.ai_move(game_type, game_id)

    @app.get(
        "/api/v1/games/{game_type}/{game_id}/analysis",
        response_model=AnalysisResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Analyze the current position",
    )
    async def analyze_game(game_type: str, game_id: str) -> AnalysisResponse:
        return api_service.analyze(game_type, game_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="turnplay",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Turnplay API",
            "version": API_VERSION,
            "environment": TURNPLAY_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn turnplay.api.app:app
app = create_app()

"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session and engine calls
2. Manages sessions and their game loops
3. Formats responses for clients

This layer is framework-agnostic; errors surface as GameError
subclasses (and ValueError for bad options) for the web layer to map.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateGameRequest,
    MoveRequest,
    # Responses
    AnalysisResponse,
    DeleteGameResponse,
    GameListResponse,
    GameResponse,
    # Shared
    GameStateInfo,
    MoveInfo,
    PlayerInfo,
    RoundInfo,
)
from ..engine_core.errors import GameNotFoundError
from ..games import GAME_NAMES, GameType
from ..games.rock_paper_scissors import RPSMove, RPSState
from ..games.tic_tac_toe import Symbol, TicTacToeMove, TicTacToeState
from ..session import GameLoop, Session, SessionManager, sanitize_for_ai
from ..session.game_loop import TurnResult


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create a game
        response = service.create_game("tic-tac-toe", CreateGameRequest())

        # Human move, then the AI answers
        service.submit_move("tic-tac-toe", game_id, MoveRequest(row=1, col=1))
        service.ai_move("tic-tac-toe", game_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_game(self, game_type: str, request: CreateGameRequest) -> GameResponse:
        """
        Create a new game.

        Raises:
            UnsupportedGameTypeError: unknown game type
            ValueError: invalid options or a taken game id
        """
        game_type = GameType.parse(game_type)
        options = {
            "first_player": request.first_player,
            "max_rounds": request.max_rounds,
        }

        existing = request.game_id is not None and self._has_session(request.game_id)

        session = self.session_manager.create_session(
            game_type,
            player_name=request.player_name,
            game_id=request.game_id,
            difficulty=request.difficulty,
            options=options,
        )
        self._game_loops.setdefault(session.game_id, GameLoop(session))

        name = GAME_NAMES[game_type]
        if existing:
            message = f"Found existing {name} game with ID: {session.game_id}"
        else:
            message = f"Created new {name} game with ID: {session.game_id}"

        return self._session_to_response(session, message=message)

    def get_game(self, game_type: str, game_id: str) -> GameResponse:
        session = self.session_manager.get_session(game_id, game_type)
        return self._session_to_response(session)

    def list_games(self, game_type: str) -> GameListResponse:
        sessions = self.session_manager.list_sessions(game_type)
        games = [self._build_game_state(s) for s in sessions]
        return GameListResponse(games=games, count=len(games))

    def submit_move(self, game_type: str, game_id: str, request: MoveRequest) -> GameResponse:
        """
        Apply a move sent by a client.

        Raises:
            GameNotFoundError, GameNotPlayingError, InvalidMoveError
        """
        session = self.session_manager.get_session(game_id, game_type)

        if session.game_type == GameType.TIC_TAC_TOE:
            move = TicTacToeMove(row=request.row, col=request.col)
        else:
            move = RPSMove(choice=request.choice)

        result = self._get_loop(session).submit_move(request.player_id, move)
        return self._session_to_response(session, message=self._turn_message(result))

    def ai_move(self, game_type: str, game_id: str) -> GameResponse:
        """
        Let the AI play its turn.

        Raises:
            GameNotFoundError, GameNotPlayingError, NotAITurnError
        """
        session = self.session_manager.get_session(game_id, game_type)
        result = self._get_loop(session).play_ai_turn()

        response = self._session_to_response(session, message=self._turn_message(result))
        if result.decision is not None:
            response.ai_strategy = result.decision.strategy
            response.ai_explanation = result.decision.explanation
        return response

    def analyze(self, game_type: str, game_id: str) -> AnalysisResponse:
        session = self.session_manager.get_session(game_id, game_type)
        report = self._get_loop(session).analyze()
        return AnalysisResponse(
            game_id=session.game_id,
            game_type=session.game_type.value,
            analysis=report.text,
            summary=report.summary,
        )

    def delete_game(self, game_type: str, game_id: str) -> DeleteGameResponse:
        """
        Delete a game.

        Raises:
            GameNotFoundError: if the game does not exist
        """
        self.session_manager.get_session(game_id, game_type)
        self.session_manager.end_session(game_id)
        self._game_loops.pop(game_id, None)
        return DeleteGameResponse(success=True, game_id=game_id)

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _has_session(self, game_id: str) -> bool:
        try:
            self.session_manager.get_session(game_id)
        except GameNotFoundError:
            return False
        return True

    def _get_loop(self, session: Session) -> GameLoop:
        loop = self._game_loops.get(session.game_id)
        if loop is None:
            loop = GameLoop(session)
            self._game_loops[session.game_id] = loop
        return loop

    def _turn_message(self, result: TurnResult) -> str:
        if result.result is None:
            return f"Move applied for {result.player_id}"
        if result.result.is_draw:
            return f"Game over: draw ({result.result.reason})"
        return f"Game over: {result.result.winner} wins ({result.result.reason})"

    def _session_to_response(self, session: Session, message: str | None = None) -> GameResponse:
        """Convert Session to GameResponse."""
        return GameResponse(
            game=self._build_game_state(session),
            difficulty=session.difficulty.value,
            history=self._visible_history(session),
            message=message,
        )

    def _visible_history(self, session: Session) -> list[MoveInfo]:
        """
        Move history without the choices of an unresolved
        Rock-Paper-Scissors round.
        """
        records = session.history
        state = session.state
        if isinstance(state, RPSState) and state.active_round is not None:
            active = state.active_round
            pending = sum(1 for c in (active.player1_choice, active.player2_choice) if c)
            records = records[:len(records) - pending]

        return [MoveInfo(**record.to_dict()) for record in records]

    def _build_game_state(self, session: Session) -> GameStateInfo:
        """Build the client view of a session's state."""
        state = sanitize_for_ai(session.state)

        players = []
        for player in state.players:
            info = PlayerInfo(
                id=player.id,
                name=player.name,
                is_ai=player.is_ai,
                is_current_turn=state.is_playing and player.id == state.current_player_id,
            )
            if isinstance(state, TicTacToeState):
                symbol = state.symbol_of(player.id)
                info.symbol = Symbol(symbol).value if symbol else None
            elif isinstance(state, RPSState):
                info.score = state.score_of(player.id)
            players.append(info)

        game_state = GameStateInfo(
            id=state.id,
            game_type=session.game_type.value,
            status=state.status.value,
            current_player_id=state.current_player_id,
            winner=state.winner,
            players=players,
            created_at=state.created_at,
            updated_at=state.updated_at,
        )

        data = state.to_dict()
        if isinstance(state, TicTacToeState):
            game_state.board = data["board"]
        elif isinstance(state, RPSState):
            game_state.rounds = [RoundInfo(**r) for r in data["rounds"]]
            game_state.current_round = state.current_round
            game_state.max_rounds = state.max_rounds
            game_state.scores = dict(state.scores)

        return game_state

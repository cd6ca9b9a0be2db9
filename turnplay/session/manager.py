"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. A client creates a game → new session (in-memory only)
2. During the game:
   - The human submits moves
   - The session's AI answers when it is its turn
   - The engine validates every move and owns the state
3. The game ends → the session stays readable until deleted

PERSISTENCE RULES:
- No database; sessions live in a plain dict
- Each session owns its own AI instance (AIs keep per-game memory)

FAIR PLAY:
- The AI only ever sees a sanitized state: in Rock-Paper-Scissors the
  human's choice for the round in progress is blanked out
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
import logging

from ..bots import GameAI, Difficulty, create_ai
from ..engine_core.errors import GameNotFoundError
from ..engine_core.game import Game
from ..engine_core.state import BaseGameState, Player, utc_now
from ..games import GameType, create_game
from ..games.rock_paper_scissors import DEFAULT_MAX_ROUNDS, RPSOptions, RPSState, Round
from ..games.tic_tac_toe import TicTacToeOptions

logger = logging.getLogger(__name__)

HUMAN_PLAYER_ID = "player1"
AI_PLAYER_ID = "ai"
AI_PLAYER_NAME = "AI"
DEFAULT_PLAYER_NAME = "Player"

# Difficulty for new games when the client sends none (or an unknown one)
DEFAULT_DIFFICULTY = Difficulty.MEDIUM


@dataclass
class MoveRecord:
    """One applied move, in the order it was played."""
    player_id: str
    move: Any
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        move = self.move.to_dict() if hasattr(self.move, "to_dict") else self.move
        return {
            "player_id": self.player_id,
            "move": move,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Session:
    """
    A game session.

    Contains:
    - The engine and the current canonical state
    - The session's AI and the difficulty it plays at
    - Move history
    """
    game_id: str
    game_type: GameType
    game: Game
    state: BaseGameState
    ai: GameAI
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    history: list[MoveRecord] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)

    human_player_id: str = HUMAN_PLAYER_ID
    ai_player_id: str = AI_PLAYER_ID

    def is_active(self) -> bool:
        """Check if the game is still being played."""
        return self.state.is_playing

    def is_ai_turn(self) -> bool:
        return self.is_active() and self.state.current_player_id == self.ai_player_id

    def is_human_turn(self) -> bool:
        return self.is_active() and self.state.current_player_id == self.human_player_id

    def record(self, player_id: str, move: Any):
        self.history.append(MoveRecord(player_id=player_id, move=move))


def sanitize_for_ai(state: BaseGameState) -> BaseGameState:
    """
    Return the view of state the AI is allowed to see.

    For Rock-Paper-Scissors the round in progress is replaced by an
    empty round, so a choice the human already made is hidden. Other
    games have no hidden information and pass through unchanged.
    """
    if not isinstance(state, RPSState):
        return state

    active = state.active_round
    if active is None or active.is_resolved:
        return state
    if active.player1_choice is None and active.player2_choice is None:
        return state

    rounds = list(state.rounds)
    rounds[state.current_round] = Round()
    return state._copy_with(rounds=rounds)


def build_options(game_type: GameType, options: Any) -> Any:
    """
    Turn client options into the engine's options object.

    Accepts the options dataclass itself, a mapping or None:
    - tic-tac-toe: {"first_player": "player1" | "ai"}
    - rock-paper-scissors: {"max_rounds": int}

    Raises:
        ValueError: for invalid option values
    """
    if game_type == GameType.TIC_TAC_TOE:
        if isinstance(options, TicTacToeOptions):
            return options
        first = options.get("first_player") if isinstance(options, Mapping) else None
        return TicTacToeOptions(first_player_id=first)

    if isinstance(options, RPSOptions):
        return options
    max_rounds = options.get("max_rounds") if isinstance(options, Mapping) else None
    return RPSOptions(max_rounds=DEFAULT_MAX_ROUNDS if max_rounds is None else max_rounds)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a fresh engine state and AI
    - Track sessions by game id
    - Remove sessions on request

    No persistence - sessions are in-memory only.
    """

    def __init__(self, seed: int | None = None):
        """
        Args:
            seed: Random seed handed to every AI created (for reproducible games)
        """
        self._sessions: dict[str, Session] = {}
        self.seed = seed

    def create_session(
        self,
        game_type: str | GameType,
        player_name: str = DEFAULT_PLAYER_NAME,
        game_id: str | None = None,
        difficulty: Any = None,
        options: Any = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            game_type: "tic-tac-toe" or "rock-paper-scissors"
            player_name: Display name for the human player
            game_id: Optional id for the game (generated if not provided)
            difficulty: AI difficulty; unknown values mean medium
            options: Game options (see build_options)

        Returns:
            The new Session. For Tic-Tac-Toe an existing game_id returns
            the existing session unchanged.

        Raises:
            UnsupportedGameTypeError: for an unknown game type
            ValueError: for invalid options, or a Rock-Paper-Scissors
                game_id that is already taken
        """
        game_type = GameType.parse(game_type)

        if game_id is not None and game_id in self._sessions:
            existing = self._sessions[game_id]
            if game_type == GameType.TIC_TAC_TOE and existing.game_type == game_type:
                logger.info("Reusing existing %s game %s", game_type.value, game_id)
                return existing
            raise ValueError(f"Game id {game_id} is already in use")

        game = create_game(game_type)
        players = [
            Player(id=HUMAN_PLAYER_ID, name=player_name or DEFAULT_PLAYER_NAME),
            Player(id=AI_PLAYER_ID, name=AI_PLAYER_NAME, is_ai=True),
        ]
        state = game.get_initial_state(players, build_options(game_type, options))
        if game_id is not None:
            state = state._copy_with(id=game_id)

        session = Session(
            game_id=state.id,
            game_type=game_type,
            game=game,
            state=state,
            ai=create_ai(game_type, player_id=AI_PLAYER_ID, seed=self.seed),
            difficulty=Difficulty.parse(difficulty, DEFAULT_DIFFICULTY),
            created_at=state.created_at,
        )

        self._sessions[session.game_id] = session
        logger.info("Created %s game %s (difficulty %s)",
                    game_type.value, session.game_id, session.difficulty.value)
        return session

    def get_session(self, game_id: str, game_type: str | GameType | None = None) -> Session:
        """
        Get a session by id.

        Raises:
            GameNotFoundError: if no such game exists (or it is of another type)
        """
        session = self._sessions.get(game_id)
        if session is None:
            raise GameNotFoundError(f"Game {game_id} not found")
        if game_type is not None and session.game_type != GameType.parse(game_type):
            raise GameNotFoundError(f"Game {game_id} not found")
        return session

    def end_session(self, game_id: str) -> bool:
        """
        Remove a session.

        Returns False if there was nothing to remove.
        """
        session = self._sessions.pop(game_id, None)
        if session is None:
            return False
        logger.info("Ended %s game %s", session.game_type.value, game_id)
        return True

    def list_sessions(self, game_type: str | GameType | None = None) -> list[Session]:
        """List sessions, oldest first, optionally of one game type."""
        wanted = GameType.parse(game_type) if game_type is not None else None
        return [
            session for session in self._sessions.values()
            if wanted is None or session.game_type == wanted
        ]

    def __len__(self) -> int:
        return len(self._sessions)

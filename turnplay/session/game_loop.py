"""
Game Loop - Drives one session's turns.

The loop:
1. Human submits a move
2. Engine validates and updates canonical state
3. If the game is not over and it is the AI's turn, the client asks
   for the AI move
4. AI sees a sanitized state, picks a move, engine applies it
5. Repeat until the engine reports a result

Every applied move is recorded in the session history, and the state
is finalized (status and winner set) as soon as the game ends.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
import logging

from ..bots import BotDecision
from ..engine_core.errors import GameNotPlayingError, InvalidMoveError, NotAITurnError
from ..engine_core.state import BaseGameState, GameResult
from ..games import GameType
from ..games.rock_paper_scissors import RPSMove
from .manager import sanitize_for_ai

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """
    Result of applying one move.

    Contains the new state and, for AI turns, the decision behind it.
    """
    player_id: str
    move: Any
    state: BaseGameState
    result: GameResult | None = None
    decision: BotDecision | None = None

    @property
    def game_over(self) -> bool:
        return self.result is not None


@dataclass
class AnalysisReport:
    """Analysis text plus machine-readable summary."""
    text: str
    summary: dict[str, Any] = field(default_factory=dict)


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)

        result = loop.submit_move("player1", {"row": 1, "col": 1})
        if not result.game_over and session.is_ai_turn():
            result = loop.play_ai_turn()

        print(loop.analyze().text)
    """

    def __init__(self, session: Session):
        self.session = session

    def submit_move(self, player_id: str, move: Any) -> TurnResult:
        """
        Apply a move for player_id.

        Raises:
            GameNotPlayingError: if the game is already finished
            InvalidMoveError: if the engine rejects the move
        """
        if not self.session.is_active():
            raise GameNotPlayingError(f"Game {self.session.game_id} is not in progress")
        return self._apply(player_id, move)

    def play_ai_turn(self) -> TurnResult:
        """
        Let the session's AI make its move.

        The AI receives a sanitized copy of the state and the session's
        difficulty.

        Raises:
            GameNotPlayingError: if the game is already finished
            NotAITurnError: if it is not the AI's turn
        """
        session = self.session
        if not session.is_active():
            raise GameNotPlayingError(f"Game {session.game_id} is not in progress")
        if not session.is_ai_turn():
            raise NotAITurnError(f"It is not the AI's turn in game {session.game_id}")

        decision = session.ai.decide(sanitize_for_ai(session.state), session.difficulty)

        move = decision.move
        if session.game_type == GameType.ROCK_PAPER_SCISSORS:
            move = RPSMove(move)

        logger.info("Game %s: AI played %s (%s)",
                    session.game_id, _describe(move), decision.explanation)

        return self._apply(session.ai_player_id, move, decision)

    def _apply(self, player_id: str, move: Any, decision: BotDecision | None = None) -> TurnResult:
        session = self.session
        try:
            new_state = session.game.apply_move(session.state, move, player_id)
        except InvalidMoveError:
            logger.info("Game %s: rejected move %r from %s", session.game_id, move, player_id)
            raise

        new_state = session.game.finalize(new_state)
        session.state = new_state
        session.record(player_id, move)

        result = session.game.check_game_end(new_state)
        if result is not None:
            logger.info("Game %s finished: winner %s (%s)",
                        session.game_id, result.winner, result.reason)

        return TurnResult(
            player_id=player_id,
            move=move,
            state=new_state,
            result=result,
            decision=decision,
        )

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze(self) -> AnalysisReport:
        """
        Build the analysis for the current position.

        Only the sanitized state is read, so an unresolved
        Rock-Paper-Scissors choice never shows up in the report.
        """
        session = self.session
        state = sanitize_for_ai(session.state)

        lines = [f"Game Analysis for {session.game_type.value} (ID: {session.game_id})", ""]

        summary: dict[str, Any] = {
            "game_id": session.game_id,
            "game_type": session.game_type.value,
            "status": state.status.value,
            "current_player_id": state.current_player_id,
            "winner": state.winner,
            "total_moves": len(session.history),
            "difficulty": session.difficulty.value,
        }

        if session.game_type == GameType.TIC_TAC_TOE:
            valid_moves = session.game.get_valid_moves(state, state.current_player_id)
            summary["valid_moves"] = [m.to_dict() for m in valid_moves]
            lines.append(session.ai.analyze_game_state(state))
            lines.append("")
            lines.append("Current Board:")
            lines.append(state.render())
        else:
            summary["current_round"] = state.current_round
            summary["max_rounds"] = state.max_rounds
            summary["scores"] = dict(state.scores)
            lines.append(session.ai.analyze_game_state(state))

        if state.is_playing:
            lines.append("")
            if session.is_ai_turn():
                lines.append("It's the AI's turn to move.")
            else:
                lines.append("Waiting for the human player to move.")
        else:
            lines.append("")
            lines.append(f"Winner: {state.winner}")

        return AnalysisReport(text="\n".join(lines), summary=summary)


def _describe(move: Any) -> str:
    if hasattr(move, "to_dict"):
        return ", ".join(f"{k}={v}" for k, v in move.to_dict().items())
    return repr(move)

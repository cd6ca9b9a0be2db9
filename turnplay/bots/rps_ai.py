"""
Rock-Paper-Scissors AI - Three strategies keyed by difficulty.

- easy (random): equal odds for every choice
- medium (adaptive): counter the opponent's most frequent past choice
- hard (pattern): spot A-B-A alternation or A-A repetition in the
  opponent's recent choices and counter the predicted next choice

Unrecognized difficulty selectors fall back to medium. The AI never
fails: without a usable signal every strategy degrades to random.

The opponent history is rebuilt from rounds[0:current_round] on every
call. The round in progress is never read, even when the state still
carries the opponent's submitted choice for it.
"""

from __future__ import annotations
from typing import Any
import logging

from ..games.rock_paper_scissors import (
    CHOICES,
    COUNTERS,
    PLAYER1,
    ROUND_DRAW,
    RPSChoice,
    RPSState,
    parse_choice,
)
from .policy import BotDecision, Difficulty, GameAI

logger = logging.getLogger(__name__)

RANDOM = "random"
ADAPTIVE = "adaptive"
PATTERN = "pattern"

STRATEGIES: dict[Difficulty, str] = {
    Difficulty.EASY: RANDOM,
    Difficulty.MEDIUM: ADAPTIVE,
    Difficulty.HARD: PATTERN,
}


class RockPaperScissorsAI(GameAI):
    """
    An AI that plays Rock-Paper-Scissors.

    Holds the opponent's choice history for one match. Create a fresh
    instance per game; a shared instance would mix up opponents.

    Usage:
        ai = RockPaperScissorsAI()
        choice = ai.make_choice(state, "hard")
        print(ai.analyze_game_state(state))
    """

    fallback_difficulty = Difficulty.MEDIUM

    def __init__(self, player_id: str | None = None, seed: int | None = None):
        super().__init__(player_id=player_id, seed=seed)
        self.opponent_history: list[RPSChoice] = []

    def make_choice(self, state: RPSState, difficulty: Any = Difficulty.MEDIUM) -> RPSChoice:
        """Choose rock, paper or scissors. Never raises."""
        return self.decide(state, difficulty).move

    def decide(self, state: RPSState, difficulty: Any = Difficulty.MEDIUM) -> BotDecision:
        self.update_opponent_history(state)

        level = self.resolve_difficulty(difficulty)
        strategy = STRATEGIES[level]

        if strategy == RANDOM:
            choice, explanation = self._random_choice(), "Selected randomly"
        elif strategy == ADAPTIVE:
            choice, explanation = self._adaptive_choice()
        else:
            choice, explanation = self._pattern_choice()

        logger.debug("Game %s: AI (%s/%s) chose %s: %s",
                     state.id, level.value, strategy, choice.value, explanation)

        return BotDecision(
            move=choice,
            difficulty=level,
            strategy=strategy,
            explanation=explanation,
            evaluated_positions=len(self.opponent_history),
            details={"opponent_history": [c.value for c in self.opponent_history]},
        )

    def update_opponent_history(self, state: RPSState):
        """
        Rebuild the opponent history from completed rounds.

        Only indices below current_round are read.
        """
        _, opponent_id = self.resolve_players(state)
        slot = state.player_index(opponent_id)

        self.opponent_history.clear()
        for index in range(min(state.current_round, len(state.rounds))):
            choice = parse_choice(state.rounds[index].choice_for(slot))
            if choice is not None:
                self.opponent_history.append(choice)

    # =========================================================================
    # Strategies
    # =========================================================================

    def _random_choice(self) -> RPSChoice:
        return self.rng.choice(CHOICES)

    def _choice_counts(self) -> dict[RPSChoice, int]:
        counts = {choice: 0 for choice in CHOICES}
        for choice in self.opponent_history:
            counts[choice] += 1
        return counts

    def _adaptive_choice(self) -> tuple[RPSChoice, str]:
        """
        Counter the opponent's most frequent choice.

        Ties go to the earliest of rock, paper, scissors. With no
        history the choice is random.
        """
        if not self.opponent_history:
            return self._random_choice(), "No history, selected randomly"

        counts = self._choice_counts()
        most_frequent = CHOICES[0]
        max_count = 0
        for choice in CHOICES:
            if counts[choice] > max_count:
                max_count = counts[choice]
                most_frequent = choice

        counter = COUNTERS[most_frequent]
        return counter, f"Counters most frequent {most_frequent.value} ({max_count}x)"

    def _pattern_choice(self) -> tuple[RPSChoice, str]:
        """
        Look at the last (up to) three opponent choices:
        - A-B-A suggests B comes next; counter B
        - A-A suggests a switch to one of the other two; counter a
          random one of them
        Otherwise, or with fewer than two choices, play adaptive.
        """
        if len(self.opponent_history) < 2:
            return self._adaptive_choice()

        recent = self.opponent_history[-3:]
        last = recent[-1]
        second_last = recent[-2]

        if len(recent) >= 3:
            third_last = recent[-3]
            if third_last == last and third_last != second_last:
                return COUNTERS[second_last], f"Alternation detected, expects {second_last.value}"

        if last == second_last:
            others = [c for c in CHOICES if c != last]
            predicted = self.rng.choice(others)
            return COUNTERS[predicted], f"Repeat of {last.value} detected, expects {predicted.value}"

        return self._adaptive_choice()

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_game_state(self, state: RPSState) -> str:
        """
        Analyzes:
        - Game status and round progress
        - Score line
        - Completed round history with winners
        - Opponent choice frequencies
        """
        self.update_opponent_history(state)

        first, second = state.players
        shown_round = min(state.current_round + 1, state.max_rounds)
        analysis = [
            f"Game Status: {state.status.value}",
            f"Current Round: {shown_round}/{state.max_rounds}",
            f"Score: {first.name} {state.score_of(first.id)} - "
            f"{state.score_of(second.id)} {second.name}",
        ]

        completed = state.completed_rounds
        if completed:
            analysis.append("")
            analysis.append("Round History:")
            for index, rnd in enumerate(completed):
                p1 = parse_choice(rnd.player1_choice)
                p2 = parse_choice(rnd.player2_choice)
                if rnd.winner == ROUND_DRAW:
                    winner = "Draw"
                elif rnd.winner == PLAYER1:
                    winner = first.name
                elif rnd.winner is None:
                    winner = "?"
                else:
                    winner = second.name
                analysis.append(
                    f"Round {index + 1}: {p1.value if p1 else '?'} vs "
                    f"{p2.value if p2 else '?'} - Winner: {winner}"
                )

        if self.opponent_history:
            total = len(self.opponent_history)
            counts = self._choice_counts()
            analysis.append("")
            analysis.append("Opponent Patterns:")
            for choice in CHOICES:
                count = counts[choice]
                analysis.append(
                    f"{choice.value.capitalize()}: {count} times ({count / total * 100:.1f}%)"
                )

        return "\n".join(analysis)

"""
Turnplay CLI - Command-line interface for the engine.

Usage:
    turnplay play tic-tac-toe [--difficulty hard] [--ai-first]
    turnplay play rock-paper-scissors [--difficulty hard] [--rounds 5]
    turnplay serve [--host 127.0.0.1] [--port 8000]
"""

import argparse
import logging
import sys

from .games import GAME_NAMES, GameType

SHORT_CHOICES = {"r": "rock", "p": "paper", "s": "scissors"}
QUIT_WORDS = {"q", "quit", "exit"}
ROUND_OUTCOMES = {"player1": "you take the round", "player2": "the AI takes the round", "draw": "draw"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turnplay - Tic-Tac-Toe and Rock-Paper-Scissors against an AI",
        prog="turnplay",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument(
        "game_type",
        choices=[t.value for t in GameType],
        help="Game to play",
    )
    play_parser.add_argument(
        "--difficulty", "-d",
        default="medium",
        choices=["easy", "medium", "hard"],
        help="AI difficulty",
    )
    play_parser.add_argument("--rounds", type=int, default=3, help="Rounds (rock-paper-scissors)")
    play_parser.add_argument("--ai-first", action="store_true", help="AI moves first (tic-tac-toe)")
    play_parser.add_argument("--name", default="Player", help="Your display name")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed for the AI")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "serve":
        return cmd_serve(args)

    parser.print_help()
    return 1


def cmd_play(args):
    """Play a game against the AI in the terminal."""
    from .session import SessionManager, GameLoop

    game_type = GameType(args.game_type)
    if game_type == GameType.TIC_TAC_TOE:
        options = {"first_player": "ai" if args.ai_first else None}
    else:
        options = {"max_rounds": args.rounds}

    manager = SessionManager(seed=args.seed)
    try:
        session = manager.create_session(
            game_type,
            player_name=args.name,
            difficulty=args.difficulty,
            options=options,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    loop = GameLoop(session)
    print(f"{GAME_NAMES[game_type]} vs AI ({session.difficulty.value})")
    print("Type 'q' to quit.\n")

    if game_type == GameType.TIC_TAC_TOE:
        finished = _play_tic_tac_toe(session, loop)
    else:
        finished = _play_rock_paper_scissors(session, loop)

    if not finished:
        print("Game abandoned.")
        return 1

    state = session.state
    if state.winner == session.human_player_id:
        print(f"\nYou win, {args.name}!")
    elif state.winner == session.ai_player_id:
        print("\nThe AI wins.")
    else:
        print("\nIt's a draw.")
    print()
    print(loop.analyze().text)
    return 0


def _ask(prompt):
    """Read one line; None means the player wants to stop."""
    try:
        raw = input(prompt)
    except EOFError:
        return None
    raw = raw.strip().lower()
    if raw in QUIT_WORDS:
        return None
    return raw


def _play_tic_tac_toe(session, loop):
    from .engine_core.errors import InvalidMoveError
    from .games.tic_tac_toe import TicTacToeMove

    while session.is_active():
        if session.is_ai_turn():
            result = loop.play_ai_turn()
            print(f"AI plays ({result.move.row}, {result.move.col})")
            continue

        print(session.state.render())
        raw = _ask("Your move (row col, 0-2): ")
        if raw is None:
            return False

        parts = raw.replace(",", " ").split()
        try:
            row, col = (int(p) for p in parts)
        except ValueError:
            print("Enter two numbers, for example: 1 1")
            continue

        try:
            loop.submit_move(session.human_player_id, TicTacToeMove(row, col))
        except InvalidMoveError:
            print("That cell is not available.")

    print(session.state.render())
    return True


def _play_rock_paper_scissors(session, loop):
    from .engine_core.errors import InvalidMoveError
    from .games.rock_paper_scissors import RPSMove

    while session.is_active():
        if session.is_ai_turn():
            loop.play_ai_turn()
            state = session.state
            last = state.rounds[state.current_round - 1]
            print(f"You: {last.player1_choice.value}  AI: {last.player2_choice.value}"
                  f"  -> {ROUND_OUTCOMES[last.winner]}")
            print(f"Score: {state.score_of(session.human_player_id)}"
                  f"-{state.score_of(session.ai_player_id)}\n")
            continue

        state = session.state
        raw = _ask(f"Round {state.current_round + 1}/{state.max_rounds}"
                   " - rock, paper or scissors? ")
        if raw is None:
            return False

        try:
            loop.submit_move(session.human_player_id, RPSMove(SHORT_CHOICES.get(raw, raw)))
        except InvalidMoveError:
            print("Choose rock, paper or scissors (or r, p, s).")

    return True


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "turnplay.api.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

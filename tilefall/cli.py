"""
Tilefall CLI - Command-line interface for the engine.

Usage:
    tilefall simulate [--seed N] [--bots N] ...   Play a headless game
    tilefall highscore [--highscore-file PATH]    Show the best win
"""

import argparse
import logging
import random
import sys

from .config import GameConfig
from .engine_core.state import Outcome
from .session import FileHighScoreStore, GameOver, GameSession


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tilefall - Last-Player-Standing Platform Engine",
        prog="tilefall",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--highscore-file", help="Path to the high score file")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a headless game")
    simulate_parser.add_argument("--seed", type=int, help="Random seed")
    simulate_parser.add_argument("--width", type=int, help="Platform width")
    simulate_parser.add_argument("--height", type=int, help="Platform height")
    simulate_parser.add_argument("--bots", type=int, dest="num_bots", help="Number of bots")
    simulate_parser.add_argument(
        "--unstable", type=int, dest="unstable_tiles_per_turn",
        help="Tiles marked unstable per turn",
    )
    simulate_parser.add_argument("--max-turns", type=int, default=200, help="Safety limit")

    # Highscore command
    subparsers.add_parser("highscore", help="Show the best win")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "simulate":
        return cmd_simulate(args)
    elif args.command == "highscore":
        return cmd_highscore(args)
    else:
        parser.print_help()
        return 1


def cmd_simulate(args) -> int:
    """Play a game where the human stand-in picks random safe moves."""
    try:
        config = GameConfig.from_dict(vars(args))
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    session = GameSession(config, high_scores=FileHighScoreStore(args.highscore_file))
    chooser = random.Random(config.seed)

    print(f"Platform {config.width}x{config.height}, {len(session.live_bot_positions())} bot(s)")
    session.advance()

    while not session.is_game_over and session.turn_counter <= args.max_turns:
        moves = session.legal_moves_for_human()
        safe = [m for m in moves if not session.is_tile_unstable(m)]
        choice = chooser.choice(safe) if safe else None
        turn = session.turn_counter
        session.run_turn(choice)
        print(
            f"Turn {turn:3d}: "
            f"human at {session.human_position()}, "
            f"{len(session.live_bot_positions())} bot(s) left"
        )

    for event in session.drain_events():
        if isinstance(event, GameOver):
            print(f"\n{event.title}")
            print(event.flavor_text)

    if not session.is_game_over:
        print(f"Stopped after {args.max_turns} turns")
        return 1
    return 0 if session.outcome == Outcome.WIN else 2


def cmd_highscore(args) -> int:
    store = FileHighScoreStore(args.highscore_file)
    best = store.get()
    if best:
        print(f"Best win: {best} turns")
    else:
        print("No wins recorded yet")
    return 0


if __name__ == "__main__":
    sys.exit(main())

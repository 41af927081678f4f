"""CLI entry point for the adaptive Rock-Paper-Scissors game."""

import argparse
import logging
import sys

from .config import EngineConfig, load_config
from .engine import parse_move
from .export import save_game, load_game, export_history_csv
from .game import Game
from .opponents import ALL_OPPONENT_CLASSES, get_opponent_by_name, get_all_opponents
from .simulate import run_session, run_gauntlet
from .stats import print_round_result, print_scoreboard, print_engine_state, print_session_table

PLAY_HELP = """
  Moves:    r / p / s  (or rock / paper / scissors)
  Commands: stats, reset, save [PATH], export PATH, help, quit
"""


def list_opponents():
    """Print all available scripted opponents."""
    print("\nAvailable Opponents:")
    print("-" * 40)
    for i, cls in enumerate(ALL_OPPONENT_CLASSES, 1):
        print(f"  {i:>2d}. {cls.name}")
    print()


def cmd_play(args, config: EngineConfig):
    """Interactive game against the engine."""
    if args.load:
        game = load_game(args.load)
        print(f"  ✓ Loaded {game.stats.total_games} games from {args.load}")
    else:
        game = Game(config=config, seed=args.seed)

    print("\n🎮 Rock-Paper-Scissors vs an adaptive AI")
    print(PLAY_HELP)

    while True:
        try:
            line = input("your move> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line:
            continue

        command, _, rest = line.partition(" ")
        command = command.lower()
        if command in ("q", "quit", "exit"):
            break
        elif command == "help":
            print(PLAY_HELP)
        elif command == "stats":
            print_scoreboard(game.stats)
            print_engine_state(game.engine)
        elif command == "reset":
            game.reset()
            print("  ✓ All learned data cleared")
        elif command == "save":
            path = rest.strip() or args.save
            if path:
                save_game(game, path)
            else:
                print("  ✗ No save path given")
        elif command == "export":
            if rest.strip():
                export_history_csv(game, rest.strip())
            else:
                print("  ✗ No export path given")
        else:
            try:
                move = parse_move(line)
            except ValueError as e:
                print(f"  ✗ {e}")
                continue
            print_round_result(game.play_round(move))

    print_scoreboard(game.stats)
    if args.save:
        save_game(game, args.save)


def cmd_simulate(args, config: EngineConfig):
    """Run the engine against one or all scripted opponents."""
    if args.opponent.lower() == "all":
        pool = get_all_opponents()
        print(f"\n🤖 Engine vs {len(pool)} opponents  |  {args.rounds} rounds"
              + (f"  |  seed={args.seed}" if args.seed is not None else ""))
        results = run_gauntlet(pool, rounds=args.rounds, seed=args.seed, config=config)
    else:
        opponent = get_opponent_by_name(args.opponent)
        print(f"\n⚔️  Engine vs {opponent.name}  |  {args.rounds} rounds"
              + (f"  |  seed={args.seed}" if args.seed is not None else ""))
        results = [run_session(opponent, rounds=args.rounds, seed=args.seed, config=config)]
    print_session_table(results)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="rps_learner",
        description="🎮 Rock-Paper-Scissors against an adaptive prediction engine",
    )
    parser.add_argument("--list", action="store_true", help="List all scripted opponents")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--config", help="JSON file with engine settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine internals")

    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play interactively")
    play.add_argument("--load", help="Resume from a saved game file")
    play.add_argument("--save", help="Save the game to this file on exit")

    sim = subparsers.add_parser("simulate", help="Engine vs scripted opponents")
    sim.add_argument("--opponent", default="all", help="Opponent name, or 'all' (default)")
    sim.add_argument("--rounds", type=int, default=200, help="Rounds per session (default: 200)")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

    if args.list:
        list_opponents()
        return 0

    try:
        config = load_config(args.config) if args.config else EngineConfig()
        if args.command == "play":
            cmd_play(args, config)
        elif args.command == "simulate":
            cmd_simulate(args, config)
        else:
            parser.print_help()
    except (ValueError, OSError) as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

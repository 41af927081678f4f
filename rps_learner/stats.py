"""Terminal pretty-printing for games, engine state and simulations."""

from .engine import MOVES, Move
from .ensemble import PredictionEngine
from .game import GameStats, RoundResult
from .simulate import SessionResult

MOVE_EMOJI = {
    Move.ROCK: "🪨",
    Move.PAPER: "📄",
    Move.SCISSORS: "✂️",
}


def format_moves(moves, sep: str = " ") -> str:
    return sep.join(MOVE_EMOJI[m] for m in moves)


def print_round_result(result: RoundResult):
    print(f"  Round {result.round_num}: you {MOVE_EMOJI[result.player_move]}  "
          f"vs  AI {MOVE_EMOJI[result.ai_move]}   {result.message}"
          f"   (AI confidence {result.confidence}%)")


def print_scoreboard(stats: GameStats):
    print("=" * 60)
    print(f"  {'':20s} {'Count':>10s} {'%':>10s}")
    print(f"  {'You':20s} {stats.player_wins:>10d} {stats.player_win_pct:>9.1f}%")
    print(f"  {'AI':20s} {stats.ai_wins:>10d} {stats.ai_win_pct:>9.1f}%")
    print(f"  {'Draws':20s} {stats.draws:>10d} {stats.draw_pct:>9.1f}%")
    print(f"  {'Games':20s} {stats.total_games:>10d}")
    print("=" * 60)


def print_engine_state(engine: PredictionEngine):
    """Print tendencies, the Markov matrix, top patterns and recent moves."""
    tendencies = engine.get_tendencies()
    print("\n  Player Tendencies:")
    for move in MOVES:
        pct = tendencies[move]
        bar = "█" * int(pct / 5)
        print(f"    {MOVE_EMOJI[move]} {move.value:<9s} {pct:>6.1f}%  {bar}")

    print_transition_matrix(engine.get_transition_matrix())

    patterns = engine.get_patterns_summary()
    print("\n  Top Patterns:")
    if not patterns:
        print("    No patterns detected yet...")
    for p in patterns:
        print(f"    {format_moves(p.pattern, ' → ')} ({p.total}x)")

    recent = engine.get_recent_history()
    print(f"\n  Recent: {format_moves(recent) if recent else '-'}")
    print(f"  Confidence: {engine.get_confidence()}%  |  "
          f"Counter-attempts: {engine.counter_attempts}/{engine.total_moves}")
    print()


def print_transition_matrix(matrix: dict):
    print("\n  Markov Transitions (row = last move, column = next move):")
    header = f"    {'':4s}" + "".join(f"{MOVE_EMOJI[m]:>7s}" for m in MOVES)
    print(header)
    for prev in MOVES:
        row = f"    {MOVE_EMOJI[prev]:4s}"
        for nxt in MOVES:
            row += f"{matrix[prev][nxt]:>6.0f}%"
        print(row)


def print_session_table(results: list[SessionResult]):
    """Print one line per simulated session."""
    print()
    print("=" * 84)
    print(f"  {'Opponent':<18s} {'Rounds':>7s} {'AI W':>6s} {'AI L':>6s} {'Draw':>6s} "
          f"{'AI Win%':>8s} {'Conf':>6s} {'Counter':>8s}  Result")
    print("-" * 84)
    for r in results:
        s = r.stats
        verdict = "WIN" if r.engine_won else "LOSS" if s.player_wins > s.ai_wins else "DRAW"
        print(f"  {r.opponent_name:<18s} {r.rounds:>7d} {s.ai_wins:>6d} {s.player_wins:>6d} "
              f"{s.draws:>6d} {s.ai_win_pct:>7.1f}% {r.final_confidence:>5d}% "
              f"{r.counter_attempts:>8d}  {verdict}")
    print("=" * 84)
    print("  AI W/L = rounds won/lost by the engine  |  Conf = final prediction confidence")
    print()

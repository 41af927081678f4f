"""Play the engine against scripted opponents.

Each session gets a fresh Game; opponent and engine draw their RNG seeds from
one master seed so a whole run is reproducible.
"""

import random
from dataclasses import dataclass
from typing import Optional, Callable

from .config import EngineConfig
from .engine import Move
from .game import Game, GameStats
from .opponents import Opponent, get_all_opponents


@dataclass
class SessionResult:
    """Result of one session between the engine and a scripted opponent."""
    opponent_name: str
    rounds: int
    stats: GameStats
    final_confidence: int = 0
    counter_attempts: int = 0

    @property
    def engine_won(self) -> bool:
        return self.stats.ai_wins > self.stats.player_wins

    def to_dict(self) -> dict:
        return {
            "opponent": self.opponent_name,
            "rounds": self.rounds,
            "final_confidence": self.final_confidence,
            "counter_attempts": self.counter_attempts,
            **self.stats.to_dict(),
        }


def run_session(
    opponent: Opponent,
    rounds: int = 200,
    seed: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> SessionResult:
    """Run ``rounds`` rounds of a fresh engine against ``opponent``."""
    master_rng = random.Random(seed)
    engine_seed = master_rng.randint(0, 2**31)
    opponent.rng = random.Random(master_rng.randint(0, 2**31))
    opponent.reset()

    game = Game(config=config, seed=engine_seed)

    opp_moves: list[Move] = []
    engine_moves: list[Move] = []
    for round_num in range(rounds):
        move = opponent.choose(round_num, opp_moves, engine_moves)
        result = game.play_round(move)
        opp_moves.append(result.player_move)
        engine_moves.append(result.ai_move)

    return SessionResult(
        opponent_name=opponent.name,
        rounds=rounds,
        stats=game.stats,
        final_confidence=game.engine.get_confidence(),
        counter_attempts=game.engine.counter_attempts,
    )


def run_gauntlet(
    pool: Optional[list[Opponent]] = None,
    rounds: int = 200,
    seed: Optional[int] = None,
    config: Optional[EngineConfig] = None,
    on_session_done: Optional[Callable[[int, int, SessionResult], None]] = None,
) -> list[SessionResult]:
    """One session per opponent in ``pool`` (all opponents by default).

    Args:
        on_session_done: Optional callback(completed, total, result) called
                         after each session finishes.
    """
    if pool is None:
        pool = get_all_opponents()

    results = []
    for i, opponent in enumerate(pool):
        session_seed = (seed * 1000 + i) if seed is not None else None
        result = run_session(opponent, rounds=rounds, seed=session_seed, config=config)
        results.append(result)
        if on_session_done:
            on_session_done(i + 1, len(pool), result)
    return results

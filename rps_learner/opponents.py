"""Scripted players used to exercise the prediction engine without a human."""

from abc import ABC, abstractmethod
import random

from .engine import Move, MOVES, counter_move


class Opponent(ABC):
    """Base class for scripted players.

    ``choose`` sees its own past moves and the engine's past moves, both in
    chronological order.
    """

    def __init__(self):
        self.rng: random.Random = random.Random()
        self.reset()

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def choose(self, round_num: int, my_history: list[Move], opp_history: list[Move]) -> Move:
        ...

    def reset(self):
        """Reset any internal state between sessions."""
        pass

    def __repr__(self):
        return f"<{self.name}>"


# ---------------------------------------------------------------------------
# Constant players
# ---------------------------------------------------------------------------

class AlwaysRock(Opponent):
    """Always plays Rock. The engine should lock on within a few rounds."""
    name = "Always Rock"

    def choose(self, round_num, my_history, opp_history):
        return Move.ROCK


class AlwaysPaper(Opponent):
    """Always plays Paper."""
    name = "Always Paper"

    def choose(self, round_num, my_history, opp_history):
        return Move.PAPER


class AlwaysScissors(Opponent):
    """Always plays Scissors."""
    name = "Always Scissors"

    def choose(self, round_num, my_history, opp_history):
        return Move.SCISSORS


# ---------------------------------------------------------------------------
# Random and biased players
# ---------------------------------------------------------------------------

class PureRandom(Opponent):
    """Uniformly random. Nothing to learn, so the engine should hover near a third."""
    name = "Pure Random"

    def choose(self, round_num, my_history, opp_history):
        return self.rng.choice(MOVES)


class Biased(Opponent):
    """Random with a 5:2:1 lean towards Rock, then Paper."""
    name = "Biased"

    def choose(self, round_num, my_history, opp_history):
        return self.rng.choices(MOVES, weights=[5, 2, 1])[0]


# ---------------------------------------------------------------------------
# Sequence players
# ---------------------------------------------------------------------------

class Cycle(Opponent):
    """Rock, Paper, Scissors, Rock, ... Caught by both Markov and pattern models."""
    name = "Cycle"

    def choose(self, round_num, my_history, opp_history):
        return MOVES[round_num % 3]


class Pattern(Opponent):
    """Loops R-P-S-S-P. Paper and Scissors have two different successors,
    so only the longer pattern windows can read it."""
    name = "Pattern"

    SEQUENCE = [Move.ROCK, Move.PAPER, Move.SCISSORS, Move.SCISSORS, Move.PAPER]

    def choose(self, round_num, my_history, opp_history):
        return self.SEQUENCE[round_num % len(self.SEQUENCE)]


# ---------------------------------------------------------------------------
# Reactive players
# ---------------------------------------------------------------------------

class RepeatLast(Opponent):
    """Opens with Rock, then repeats its own previous move unless it lost."""
    name = "Repeat Last"

    def choose(self, round_num, my_history, opp_history):
        if not my_history:
            return Move.ROCK
        last = my_history[-1]
        if opp_history and opp_history[-1] == counter_move(last):
            return counter_move(last)
        return last


class BeatLast(Opponent):
    """Plays whatever beats the engine's previous move.

    Punishes an engine that repeats itself. It only scores a counter-attempt
    in rounds where its move happens to equal the engine's current move, so
    the meta-strategy predictor rarely fires against it.
    """
    name = "Beat Last"

    def choose(self, round_num, my_history, opp_history):
        if not opp_history:
            return self.rng.choice(MOVES)
        return counter_move(opp_history[-1])


ALL_OPPONENT_CLASSES = [
    AlwaysRock,
    AlwaysPaper,
    AlwaysScissors,
    PureRandom,
    Biased,
    Cycle,
    Pattern,
    RepeatLast,
    BeatLast,
]


def get_all_opponents() -> list[Opponent]:
    """Return fresh instances of all opponents."""
    return [cls() for cls in ALL_OPPONENT_CLASSES]


def get_opponent_by_name(name: str) -> Opponent:
    """Get a single opponent instance by name (case-insensitive)."""
    name_lower = name.lower()
    for cls in ALL_OPPONENT_CLASSES:
        if cls.name.lower() == name_lower:
            return cls()
    available = ", ".join(cls.name for cls in ALL_OPPONENT_CLASSES)
    raise ValueError(f"Unknown opponent: '{name}'. Available: {available}")

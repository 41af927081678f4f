"""The four sub-predictors that feed the ensemble."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import Optional

from .config import EngineConfig
from .engine import Move, MOVES
from .history import HistoryStore


@dataclass(frozen=True)
class Prediction:
    """A predicted player move; `move is None` means the predictor abstains."""
    move: Optional[Move] = None
    confidence: float = 0.0

    @property
    def abstained(self) -> bool:
        return self.move is None

    def to_dict(self) -> dict:
        return {
            "move": self.move.value if self.move else None,
            "confidence": round(self.confidence, 2),
        }


ABSTAIN = Prediction()


def _argmax(row: dict[Move, int]) -> tuple[Move, int]:
    """Most frequent move in a count row.

    Scans in enumeration order and only replaces the running best on a
    strictly greater count, so ties go to the lowest-enumerated move.
    """
    best_move = Move.ROCK
    best_count = 0
    for move in MOVES:
        count = row.get(move, 0)
        if count > best_count:
            best_move = move
            best_count = count
    return best_move, best_count


def _from_row(row: dict[Move, int]) -> Prediction:
    total = sum(row.values())
    if total == 0:
        return ABSTAIN
    move, count = _argmax(row)
    return Prediction(move, count / total * 100)


class Predictor(ABC):
    """Base class for sub-predictors."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.rng: random.Random = random.Random()

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def predict(self, store: HistoryStore) -> Prediction:
        ...

    def __repr__(self):
        return f"<{self.name}>"


# ---------------------------------------------------------------------------
# 1: Frequency
# ---------------------------------------------------------------------------

class FrequencyPredictor(Predictor):
    """Predicts the player's most common move overall.

    Confidence is that move's share of every observed move.

    **Type**: Frequency
    """
    name = "frequency"

    def predict(self, store):
        if store.total_moves == 0:
            return ABSTAIN
        move, count = _argmax(store.frequencies)
        return Prediction(move, count / store.total_moves * 100)


# ---------------------------------------------------------------------------
# 2: First-order Markov chain
# ---------------------------------------------------------------------------

class MarkovPredictor(Predictor):
    """Predicts what the player usually plays after their last move.

    Reads the transition row of the most recent move. Abstains on an empty
    history or when that move has never been followed by another.

    **Type**: Markov-1
    """
    name = "markov"

    def predict(self, store):
        last = store.last
        if last is None:
            return ABSTAIN
        return _from_row(store.transitions[last])


# ---------------------------------------------------------------------------
# 3: N-gram pattern match
# ---------------------------------------------------------------------------

class PatternPredictor(Predictor):
    """Looks up the last few moves in the pattern table.

    Tries the longest window first (4, then 3, then 2) and answers from the
    first window that has been seen before. A longer match is more specific,
    so it wins even when a shorter one has more observations.

    **Type**: Pattern
    """
    name = "pattern"

    def predict(self, store):
        moves = store.moves
        if len(moves) < self.config.pattern_min_length:
            return ABSTAIN
        for length in range(self.config.pattern_max_length, self.config.pattern_min_length - 1, -1):
            if len(moves) < length:
                continue
            row = store.patterns.get(tuple(moves[-length:]))
            if row:
                return _from_row(row)
        return ABSTAIN


# ---------------------------------------------------------------------------
# 4: Meta-strategy
# ---------------------------------------------------------------------------

class MetaStrategyPredictor(Predictor):
    """Reacts to a player who keeps beating the engine's predictions.

    Once enough moves are in and the share of counter-attempts exceeds the
    threshold, the player is second-guessing the engine. The answer is noise:
    a uniformly random move at a fixed confidence, which makes the ensemble
    harder to read. Otherwise abstains.

    **Type**: Meta
    """
    name = "meta"

    def counter_rate(self, store: HistoryStore) -> float:
        if store.total_moves == 0:
            return 0.0
        return store.counter_attempts / store.total_moves

    def predict(self, store):
        if store.total_moves < self.config.meta_min_moves:
            return ABSTAIN
        if self.counter_rate(store) > self.config.meta_counter_threshold:
            return Prediction(self.rng.choice(MOVES), self.config.meta_confidence)
        return ABSTAIN


ALL_PREDICTOR_CLASSES = [
    FrequencyPredictor,
    MarkovPredictor,
    PatternPredictor,
    MetaStrategyPredictor,
]


def build_predictors(config: Optional[EngineConfig] = None, rng: Optional[random.Random] = None) -> list[Predictor]:
    """Instantiate every sub-predictor, sharing one config and RNG."""
    predictors = [cls(config) for cls in ALL_PREDICTOR_CLASSES]
    if rng is not None:
        for p in predictors:
            p.rng = rng
    return predictors

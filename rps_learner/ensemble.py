"""Weighted ensemble that predicts the player's next move and counters it."""

import logging
import random
from typing import Optional

from .config import EngineConfig, BASELINE_CONFIDENCE
from .engine import Move, MOVES, counter_move
from .history import HistoryStore, PatternSummary
from .predictors import Prediction, build_predictors

logger = logging.getLogger(__name__)

STATE_VERSION = 1


def _rng_state_to_json(state: tuple) -> list:
    version, internal, gauss_next = state
    return [version, list(internal), gauss_next]


def _rng_state_from_json(data: list) -> tuple:
    version, internal, gauss_next = data
    return (version, tuple(internal), gauss_next)


class PredictionEngine:
    """Learns a player's habits and plays the move that beats them.

    One engine per game session. Each round the caller asks for the engine's
    move with :meth:`get_move` and only then reports the player's actual
    move with :meth:`observe`; ``observe`` checks the player's move against
    the prediction made by ``get_move`` to spot counter-attempts.

    Below ``config.cold_start_moves`` observed moves the engine guesses at
    random with a flat confidence. After that every sub-predictor votes for a
    move with ``weight × confidence`` and the highest total wins.
    """

    def __init__(self, config: Optional[EngineConfig] = None, seed: Optional[int] = None):
        self.config = config or EngineConfig()
        self.rng = random.Random(seed)
        self.history = HistoryStore(
            limit=self.config.history_limit,
            pattern_lengths=range(self.config.pattern_min_length, self.config.pattern_max_length + 1),
        )
        self.predictors = build_predictors(self.config, self.rng)
        self.last_prediction: Optional[Move] = None
        self.last_confidence: float = 0.0
        self.last_votes: dict[str, Prediction] = {}

    # ------------------------------------------------------------------
    # Round flow
    # ------------------------------------------------------------------

    def observe(self, move: Move):
        """Record the player's realized move for this round."""
        self.history.observe(move, last_prediction=self.last_prediction)
        logger.debug("observed %s (total=%d, counter_attempts=%d)",
                     move.value, self.history.total_moves, self.history.counter_attempts)

    learn = observe

    def predict(self) -> Move:
        """Predict the player's next move and remember it with its confidence."""
        if self.history.total_moves < self.config.cold_start_moves:
            # Too little data to trust any pattern yet
            self.last_confidence = self.config.cold_start_confidence
            self.last_votes = {}
            move = self.rng.choice(MOVES)
            logger.debug("cold start guess %s", move.value)
            return move

        votes = {p.name: p.predict(self.history) for p in self.predictors}
        scores = {m: 0.0 for m in MOVES}
        for name, vote in votes.items():
            if not vote.abstained:
                scores[vote.move] += self.config.weight(name) * vote.confidence

        best_move = Move.ROCK
        best_score = 0.0
        for move in MOVES:
            if scores[move] > best_score:
                best_move = move
                best_score = scores[move]

        total = sum(scores.values())
        if total > 0:
            self.last_confidence = min(100.0, best_score / total * 100)
        else:
            self.last_confidence = BASELINE_CONFIDENCE

        self.last_prediction = best_move
        self.last_votes = votes
        logger.debug("predicted %s at %.1f%% from %s", best_move.value, self.last_confidence,
                     {n: v.to_dict() for n, v in votes.items()})
        return best_move

    def get_move(self) -> Move:
        """The engine's play for this round: whatever beats the prediction."""
        return counter_move(self.predict())

    def reset(self):
        """Forget everything learned so far."""
        self.history.reset()
        self.last_prediction = None
        self.last_confidence = 0.0
        self.last_votes = {}
        logger.info("prediction engine reset")

    # ------------------------------------------------------------------
    # Summary getters
    # ------------------------------------------------------------------

    @property
    def total_moves(self) -> int:
        return self.history.total_moves

    @property
    def counter_attempts(self) -> int:
        return self.history.counter_attempts

    def get_tendencies(self) -> dict[Move, float]:
        return self.history.tendencies()

    def get_transition_matrix(self) -> dict[Move, dict[Move, float]]:
        return self.history.transition_matrix()

    def get_patterns_summary(self, limit: int = 5) -> list[PatternSummary]:
        return self.history.patterns_summary(limit)

    def get_confidence(self) -> int:
        # Half-up rounding; confidence is never negative
        return int(self.last_confidence + 0.5)

    def get_recent_history(self, n: int = 10) -> list[Move]:
        return self.history.recent(n)

    def summary(self) -> dict:
        """Everything a display needs, keyed by move values."""
        return {
            "total_moves": self.total_moves,
            "counter_attempts": self.counter_attempts,
            "confidence": self.get_confidence(),
            "last_prediction": self.last_prediction.value if self.last_prediction else None,
            "tendencies": {m.value: round(p, 2) for m, p in self.get_tendencies().items()},
            "transition_matrix": {
                prev.value: {nxt.value: round(p, 2) for nxt, p in row.items()}
                for prev, row in self.get_transition_matrix().items()
            },
            "patterns": [p.to_dict() for p in self.get_patterns_summary()],
            "recent_history": [m.value for m in self.get_recent_history()],
            "votes": {n: v.to_dict() for n, v in self.last_votes.items()},
        }

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """JSON-compatible snapshot, RNG state included."""
        return {
            "version": STATE_VERSION,
            "config": self.config.to_dict(),
            "history": self.history.to_dict(),
            "last_prediction": self.last_prediction.value if self.last_prediction else None,
            "last_confidence": self.last_confidence,
            "rng_state": _rng_state_to_json(self.rng.getstate()),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PredictionEngine":
        if not isinstance(data, dict):
            raise ValueError(f"Malformed engine state: expected an object, got {type(data).__name__}")
        version = data.get("version")
        if version != STATE_VERSION:
            raise ValueError(f"Unsupported engine state version: {version!r}")
        try:
            engine = cls(config=EngineConfig.from_dict(data.get("config", {})))
            engine.history.load_dict(data["history"])
            last = data.get("last_prediction")
            engine.last_prediction = Move(last) if last else None
            engine.last_confidence = float(data.get("last_confidence", 0.0))
            if data.get("rng_state") is not None:
                engine.rng.setstate(_rng_state_from_json(data["rng_state"]))
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed engine state: {e}") from e
        logger.info("restored engine with %d observed moves", engine.total_moves)
        return engine

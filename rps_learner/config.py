"""Tunable constants for the prediction engine and game flow."""

import json
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path

HISTORY_LIMIT = 100
COLD_START_MOVES = 5
BASELINE_CONFIDENCE = 33

# Combiner weights per sub-predictor
DEFAULT_WEIGHTS = {
    "frequency": 0.2,
    "markov": 0.4,
    "pattern": 0.3,
    "meta": 0.1,
}

# Meta-strategy heuristics. Tuned by hand, no derivation behind them.
META_MIN_MOVES = 10
META_COUNTER_THRESHOLD = 0.6
META_CONFIDENCE = 50

WIN_RATE_HISTORY_LIMIT = 50


@dataclass
class EngineConfig:
    history_limit: int = HISTORY_LIMIT
    cold_start_moves: int = COLD_START_MOVES
    cold_start_confidence: float = BASELINE_CONFIDENCE
    pattern_min_length: int = 2
    pattern_max_length: int = 4
    weights: dict = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    meta_min_moves: int = META_MIN_MOVES
    meta_counter_threshold: float = META_COUNTER_THRESHOLD
    meta_confidence: float = META_CONFIDENCE
    win_rate_history_limit: int = WIN_RATE_HISTORY_LIMIT

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.history_limit <= 0:
            raise ValueError(f"history_limit must be positive, got {self.history_limit}")
        if self.win_rate_history_limit <= 0:
            raise ValueError(
                f"win_rate_history_limit must be positive, got {self.win_rate_history_limit}"
            )
        if self.cold_start_moves < 0 or self.meta_min_moves < 0:
            raise ValueError("move thresholds must not be negative")
        if not 2 <= self.pattern_min_length <= self.pattern_max_length:
            raise ValueError(
                f"invalid pattern length range {self.pattern_min_length}..{self.pattern_max_length}"
            )
        if not 0.0 <= self.meta_counter_threshold <= 1.0:
            raise ValueError(
                f"meta_counter_threshold must be within 0..1, got {self.meta_counter_threshold}"
            )
        for name in ("cold_start_confidence", "meta_confidence"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within 0..100, got {value}")
        unknown = set(self.weights) - set(DEFAULT_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown predictor weights: {', '.join(sorted(unknown))}")
        for name, weight in self.weights.items():
            if weight < 0:
                raise ValueError(f"weight for {name} must not be negative, got {weight}")

    def weight(self, predictor_name: str) -> float:
        return self.weights.get(predictor_name, 0.0)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        data = dict(data)
        if "weights" in data:
            # Partial weight overrides keep the remaining defaults
            data["weights"] = {**DEFAULT_WEIGHTS, **data["weights"]}
        return cls(**data)


def load_config(path: str) -> EngineConfig:
    """Read an EngineConfig from a JSON file."""
    with open(Path(path)) as f:
        return EngineConfig.from_dict(json.load(f))

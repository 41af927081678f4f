"""Bounded player-move history and the counting tables derived from it."""

from dataclasses import dataclass, field
from typing import Optional

from .config import HISTORY_LIMIT
from .engine import Move, MOVES, would_counter


class _FrozenHistory:
    """O(1) immutable view of a move history list.

    Wraps a reference to the store's internal list without copying, so
    predictors can index and slice it but never append to it.
    """
    __slots__ = ('_data',)

    def __init__(self, data: list):
        self._data = data

    def __getitem__(self, key):
        return self._data[key]

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __contains__(self, item):
        return item in self._data

    def __bool__(self):
        return bool(self._data)

    def __repr__(self):
        return f"FrozenHistory({self._data!r})"


def _empty_row() -> dict[Move, int]:
    return {m: 0 for m in MOVES}


@dataclass
class PatternSummary:
    """One pattern-table entry, as shown in the patterns panel."""
    pattern: tuple
    observations: dict = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.observations.values())

    def to_dict(self) -> dict:
        return {
            "pattern": [m.value for m in self.pattern],
            "observations": {m.value: c for m, c in self.observations.items()},
            "total": self.total,
        }


class HistoryStore:
    """Player moves plus frequency, transition and pattern counts.

    Every table is updated from the history as it stood *before* the new
    move, then the move is appended and the history trimmed to `limit`.
    `total_moves` keeps counting after the history starts evicting.
    """

    def __init__(
        self,
        limit: int = HISTORY_LIMIT,
        pattern_lengths: tuple = (2, 3, 4),
    ):
        self.limit = limit
        self.pattern_lengths = tuple(pattern_lengths)
        self.reset()

    def reset(self):
        self._moves: list[Move] = []
        self._view = _FrozenHistory(self._moves)
        self.frequencies: dict[Move, int] = _empty_row()
        self.transitions: dict[Move, dict[Move, int]] = {m: _empty_row() for m in MOVES}
        # tuple of moves → {next move: count}; dicts keep insertion order
        self.patterns: dict[tuple, dict[Move, int]] = {}
        self.counter_attempts = 0
        self.total_moves = 0

    @property
    def moves(self) -> _FrozenHistory:
        return self._view

    @property
    def last(self) -> Optional[Move]:
        return self._moves[-1] if self._moves else None

    def __len__(self):
        return len(self._moves)

    def observe(self, move: Move, last_prediction: Optional[Move] = None):
        """Record a player move and update every table."""
        if not isinstance(move, Move):
            raise TypeError(f"observe() expects a Move, got {move!r}")

        self.frequencies[move] += 1
        self.total_moves += 1

        if self._moves:
            self.transitions[self._moves[-1]][move] += 1

        for length in self.pattern_lengths:
            if len(self._moves) >= length:
                key = tuple(self._moves[-length:])
                row = self.patterns.setdefault(key, {})
                row[move] = row.get(move, 0) + 1

        if last_prediction is not None and would_counter(move, last_prediction):
            self.counter_attempts += 1

        self._moves.append(move)
        if len(self._moves) > self.limit:
            del self._moves[:-self.limit]

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def tendencies(self) -> dict[Move, float]:
        """Share of each move in percent; a flat 33.33 before any data."""
        if self.total_moves == 0:
            return {m: 33.33 for m in MOVES}
        return {m: self.frequencies[m] / self.total_moves * 100 for m in MOVES}

    def transition_matrix(self) -> dict[Move, dict[Move, float]]:
        matrix = {}
        for prev in MOVES:
            row = self.transitions[prev]
            total = sum(row.values())
            matrix[prev] = {
                nxt: (row[nxt] / total * 100) if total > 0 else 0.0
                for nxt in MOVES
            }
        return matrix

    def patterns_summary(self, limit: int = 5) -> list[PatternSummary]:
        entries = [
            PatternSummary(pattern=key, observations=dict(row))
            for key, row in self.patterns.items()
        ]
        # sorted() is stable: equal totals keep first-inserted order
        entries.sort(key=lambda e: -e.total)
        return entries[:limit]

    def recent(self, n: int = 10) -> list[Move]:
        if n <= 0:
            return []
        return list(self._moves[-n:])

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "moves": [m.value for m in self._moves],
            "frequencies": {m.value: c for m, c in self.frequencies.items()},
            "transitions": {
                prev.value: {nxt.value: c for nxt, c in row.items()}
                for prev, row in self.transitions.items()
            },
            "patterns": [
                [[m.value for m in key], {m.value: c for m, c in row.items()}]
                for key, row in self.patterns.items()
            ],
            "counter_attempts": self.counter_attempts,
            "total_moves": self.total_moves,
        }

    def load_dict(self, data: dict):
        """Replace the current tables with a document from to_dict()."""
        self.reset()
        self._moves.extend(Move(v) for v in data["moves"])
        for value, count in data["frequencies"].items():
            self.frequencies[Move(value)] = int(count)
        for prev, row in data["transitions"].items():
            for nxt, count in row.items():
                self.transitions[Move(prev)][Move(nxt)] = int(count)
        for key, row in data["patterns"]:
            self.patterns[tuple(Move(v) for v in key)] = {
                Move(v): int(c) for v, c in row.items()
            }
        self.counter_attempts = int(data["counter_attempts"])
        self.total_moves = int(data["total_moves"])

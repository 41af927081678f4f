import pytest

from rps_learner.engine import Move
from rps_learner.ensemble import PredictionEngine
from rps_learner.history import HistoryStore

R, P, S = Move.ROCK, Move.PAPER, Move.SCISSORS


def feed(target, moves):
    """Observe each move in order on a store or engine."""
    for move in moves:
        target.observe(move)
    return target


@pytest.fixture
def store():
    return HistoryStore()


@pytest.fixture
def engine():
    return PredictionEngine(seed=1234)

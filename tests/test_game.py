import json

import pytest

from rps_learner.engine import Outcome
from rps_learner.game import Game, GameStats

from conftest import R, P, S


def test_play_round_resolves_and_teaches():
    game = Game(seed=3)
    result = game.play_round("r")
    assert result.round_num == 1
    assert result.player_move == R
    assert result.confidence == 33
    assert game.engine.total_moves == 1
    assert game.stats.total_games == 1
    assert game.stats.player_wins + game.stats.ai_wins + game.stats.draws == 1


def test_invalid_move_leaves_game_untouched():
    game = Game(seed=3)
    with pytest.raises(ValueError):
        game.play_round("lizard")
    assert game.stats.total_games == 0
    assert game.engine.total_moves == 0


def test_engine_learns_a_repeating_player():
    game = Game(seed=8)
    results = [game.play_round(S) for _ in range(30)]
    assert all(r.ai_move == R for r in results[5:])
    assert all(r.outcome is Outcome.LOSE for r in results[5:])
    assert game.stats.ai_wins >= 25


def test_stats_record_and_percentages():
    stats = GameStats()
    for outcome in [Outcome.WIN, Outcome.LOSE, Outcome.LOSE, Outcome.DRAW]:
        stats.record(outcome)
    assert (stats.player_wins, stats.ai_wins, stats.draws, stats.total_games) == (1, 2, 1, 4)
    assert stats.ai_win_pct == 50.0
    assert stats.win_rate_history == [0.0, 50.0, pytest.approx(200 / 3), 50.0]


def test_win_rate_history_is_capped():
    stats = GameStats()
    for _ in range(60):
        stats.record(Outcome.LOSE)
    assert len(stats.win_rate_history) == 50


def test_reset_clears_engine_and_stats():
    game = Game(seed=4)
    for move in [R, P, S, R, P, S, R]:
        game.play_round(move)
    game.reset()
    assert game.stats.total_games == 0
    assert game.engine.total_moves == 0
    assert game.snapshot()["engine"]["tendencies"] == {"rock": 33.33, "paper": 33.33, "scissors": 33.33}


def test_round_trip_through_json():
    game = Game(seed=12)
    for move in [R, R, P, S, R, R, P, S, R]:
        game.play_round(move)

    restored = Game.from_dict(json.loads(json.dumps(game.to_dict())))
    assert restored.stats.to_dict() == game.stats.to_dict()
    for move in [R, P, P, S, R]:
        assert restored.play_round(move).to_dict() == game.play_round(move).to_dict()


def test_round_result_to_dict():
    game = Game(seed=1)
    data = game.play_round(P).to_dict()
    assert data["player_move"] == "paper"
    assert data["outcome"] in {"win", "lose", "draw"}
    assert data["message"]

import csv
import json

import pytest

from rps_learner.export import save_game, load_game, export_history_csv, game_to_document
from rps_learner.game import Game

from conftest import R, P, S


@pytest.fixture
def played_game():
    game = Game(seed=2)
    for move in [R, P, P, S, R, P, P, S, R, P]:
        game.play_round(move)
    return game


def test_save_and_load(tmp_path, played_game, capsys):
    path = tmp_path / "saves" / "game.json"
    save_game(played_game, str(path))
    assert "Game saved" in capsys.readouterr().out

    loaded = load_game(str(path))
    assert loaded.to_dict() == played_game.to_dict()
    assert loaded.play_round(S).to_dict() == played_game.play_round(S).to_dict()


def test_document_is_versioned(played_game):
    doc = game_to_document(played_game)
    assert doc["version"] == 1
    assert doc["engine"]["history"]["total_moves"] == 10


def test_load_rejects_unknown_version(tmp_path, played_game):
    doc = game_to_document(played_game)
    doc["version"] = 2
    path = tmp_path / "game.json"
    path.write_text(json.dumps(doc))
    with pytest.raises(ValueError, match="version"):
        load_game(str(path))


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "game.json"
    path.write_text("{not json")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_game(str(path))


def test_load_rejects_non_object_engine(tmp_path):
    path = tmp_path / "game.json"
    path.write_text(json.dumps({"version": 1, "engine": [1, 2]}))
    with pytest.raises(ValueError, match="Malformed engine state"):
        load_game(str(path))


@pytest.mark.parametrize("stats", [{"player_wins": None}, {"draws": "many"}, {"win_rate_history": 3}, [1]])
def test_load_rejects_malformed_stats(tmp_path, played_game, stats):
    doc = game_to_document(played_game)
    doc["stats"] = stats
    path = tmp_path / "game.json"
    path.write_text(json.dumps(doc))
    with pytest.raises(ValueError, match="Malformed save file stats"):
        load_game(str(path))


def test_cli_reports_broken_save_file(tmp_path, capsys):
    from rps_learner.main import main

    path = tmp_path / "game.json"
    path.write_text(json.dumps({"version": 1, "engine": "nope"}))
    assert main(["play", "--load", str(path)]) == 1
    assert "Malformed engine state" in capsys.readouterr().err


def test_export_history_csv(tmp_path, played_game):
    path = tmp_path / "history.csv"
    export_history_csv(played_game, str(path))
    with open(path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 10
    assert rows[0]["move"] == "rock"
    assert float(rows[0]["rock_pct"]) == 100.0
    assert float(rows[-1]["paper_pct"]) == 50.0

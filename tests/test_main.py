import json

from rps_learner.main import main


def _feed_input(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def test_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "Always Rock" in out
    assert "Beat Last" in out


def test_simulate_one_opponent(capsys):
    assert main(["--seed", "3", "simulate", "--opponent", "always rock", "--rounds", "40"]) == 0
    out = capsys.readouterr().out
    assert "Always Rock" in out
    assert "WIN" in out


def test_simulate_unknown_opponent(capsys):
    assert main(["simulate", "--opponent", "Nobody"]) == 1
    assert "Unknown opponent" in capsys.readouterr().err


def test_simulate_with_config_file(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"cold_start_moves": 2}))
    assert main(["--config", str(path), "simulate", "--opponent", "Cycle", "--rounds", "20"]) == 0


def test_bad_config_file(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"history_limit": 0}))
    assert main(["--config", str(path), "simulate"]) == 1


def test_play_session(monkeypatch, capsys, tmp_path):
    save_path = tmp_path / "game.json"
    _feed_input(monkeypatch, ["r", "paper", "lizard", "", "stats", "s", "quit"])
    assert main(["--seed", "1", "play", "--save", str(save_path)]) == 0
    out = capsys.readouterr().out
    assert "Round 1" in out
    assert "Unknown move" in out
    assert "Player Tendencies" in out
    assert "Round 3" in out

    saved = json.loads(save_path.read_text())
    assert saved["stats"]["total_games"] == 3

    _feed_input(monkeypatch, ["reset", "p"])
    assert main(["play", "--load", str(save_path)]) == 0
    out = capsys.readouterr().out
    assert "Loaded 3 games" in out
    assert "Round 1" in out

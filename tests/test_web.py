import pytest

from rps_learner.config import EngineConfig
from rps_learner.web import create_app


@pytest.fixture
def client():
    app = create_app(seed=42)
    app.config["TESTING"] = True
    return app.test_client()


def test_index_page(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"Rock-Paper-Scissors" in res.data


def test_play_round(client):
    res = client.post("/api/play", json={"move": "rock"})
    assert res.status_code == 200
    data = res.get_json()
    assert data["round"]["player_move"] == "rock"
    assert data["round"]["confidence"] == 33
    assert data["stats"]["total_games"] == 1
    assert data["engine"]["recent_history"] == ["rock"]


def test_bad_move_is_rejected(client):
    res = client.post("/api/play", json={"move": "lizard"})
    assert res.status_code == 400
    assert "Unknown move" in res.get_json()["error"]

    res = client.post("/api/play", data="nope", content_type="text/plain")
    assert res.status_code == 400
    assert client.get("/api/state").get_json()["stats"]["total_games"] == 0


def test_reset(client):
    for move in ["rock", "paper", "scissors"]:
        client.post("/api/play", json={"move": move})
    data = client.post("/api/reset").get_json()
    assert data["stats"]["total_games"] == 0
    assert data["engine"]["tendencies"] == {"rock": 33.33, "paper": 33.33, "scissors": 33.33}


def test_export_then_import(client):
    for move in ["rock", "rock", "paper", "scissors", "rock", "rock"]:
        client.post("/api/play", json={"move": move})
    doc = client.get("/api/export").get_json()

    other = create_app(seed=1).test_client()
    data = other.post("/api/import", json=doc).get_json()
    assert data["stats"]["total_games"] == 6
    assert data["engine"]["recent_history"] == ["rock", "rock", "paper", "scissors", "rock", "rock"]

    # both sessions carry the same RNG state, so they keep playing alike
    a = client.post("/api/play", json={"move": "paper"}).get_json()["round"]
    b = other.post("/api/play", json={"move": "paper"}).get_json()["round"]
    assert a == b


def test_import_rejects_garbage(client):
    res = client.post("/api/import", json={"version": 7})
    assert res.status_code == 400


@pytest.mark.parametrize("engine_state", [[1, 2], "state", 5, {"version": 1, "history": []}])
def test_import_rejects_malformed_engine(client, engine_state):
    res = client.post("/api/import", json={"version": 1, "engine": engine_state})
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_import_rejects_malformed_stats(client):
    client.post("/api/play", json={"move": "rock"})
    doc = client.get("/api/export").get_json()
    doc["stats"]["player_wins"] = None
    res = client.post("/api/import", json=doc)
    assert res.status_code == 400
    assert "stats" in res.get_json()["error"]
    # the running session is untouched
    assert client.get("/api/state").get_json()["stats"]["total_games"] == 1


def test_app_uses_given_config():
    app = create_app(config=EngineConfig(cold_start_moves=1), seed=3)
    client = app.test_client()
    client.post("/api/play", json={"move": "rock"})
    data = client.post("/api/play", json={"move": "rock"}).get_json()
    assert data["engine"]["last_prediction"] == "rock"

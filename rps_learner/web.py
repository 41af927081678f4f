"""Flask web server for playing against the adaptive engine."""

import logging
import threading
from typing import Optional

from flask import Flask, render_template, request, jsonify

from .config import EngineConfig
from .engine import parse_move
from .export import game_to_document, game_from_document
from .game import Game

logger = logging.getLogger(__name__)


def create_app(config: Optional[EngineConfig] = None, seed: Optional[int] = None) -> Flask:
    """Build an app holding one game session.

    The dev server is threaded, so every access to the game goes through
    one lock.
    """
    app = Flask(__name__)
    app.config["ENGINE_CONFIG"] = config or EngineConfig()
    state = {"game": Game(config=app.config["ENGINE_CONFIG"], seed=seed)}
    lock = threading.Lock()

    @app.route("/")
    def index():
        return render_template("index.html")

    @app.route("/api/play", methods=["POST"])
    def api_play():
        data = request.get_json(silent=True) or {}
        try:
            move = parse_move(data.get("move"))
        except ValueError as e:
            logger.warning("rejected move %r", data.get("move"))
            return jsonify({"error": str(e)}), 400

        with lock:
            game = state["game"]
            result = game.play_round(move)
            snapshot = game.snapshot()

        return jsonify({"round": result.to_dict(), **snapshot})

    @app.route("/api/state")
    def api_state():
        with lock:
            return jsonify(state["game"].snapshot())

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        with lock:
            state["game"].reset()
            return jsonify(state["game"].snapshot())

    @app.route("/api/export")
    def api_export():
        with lock:
            return jsonify(game_to_document(state["game"]))

    @app.route("/api/import", methods=["POST"])
    def api_import():
        data = request.get_json(silent=True)
        try:
            game = game_from_document(data)
        except ValueError as e:
            logger.warning("rejected state import: %s", e)
            return jsonify({"error": str(e)}), 400

        with lock:
            state["game"] = game
            return jsonify(game.snapshot())

    return app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    print("\n🎮 RPS Learner Web UI")
    print("  → http://localhost:5000\n")
    create_app().run(debug=True, port=5000)


if __name__ == "__main__":
    main()

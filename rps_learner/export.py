"""Save and restore game state as JSON, export move history as CSV."""

import json
import csv
import logging
from pathlib import Path
from typing import Optional

from .engine import MOVES
from .game import Game

logger = logging.getLogger(__name__)

SAVE_VERSION = 1


def game_to_document(game: Game) -> dict:
    return {"version": SAVE_VERSION, **game.to_dict()}


def game_from_document(data: dict) -> Game:
    if not isinstance(data, dict) or data.get("version") != SAVE_VERSION:
        found = data.get("version") if isinstance(data, dict) else None
        raise ValueError(f"Unsupported save file version: {found!r}")
    if "engine" not in data:
        raise ValueError("Save file has no engine state")
    return Game.from_dict(data)


def save_game(game: Game, path: str):
    """Write the full game state to a JSON file."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w") as f:
        json.dump(game_to_document(game), f, indent=2)
    logger.info("saved game state to %s", out)
    print(f"  ✓ Game saved to {out}")


def load_game(path: str) -> Game:
    """Read a game saved by save_game."""
    src = Path(path)
    with open(src) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{src} is not valid JSON: {e}") from e
    game = game_from_document(data)
    logger.info("loaded game state from %s", src)
    return game


def export_history_csv(game: Game, path: str, n: Optional[int] = None):
    """Export the player's move history with running tendencies to CSV."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    moves = game.engine.get_recent_history(n if n is not None else game.engine.config.history_limit)
    fieldnames = ["index", "move"] + [f"{m.value}_pct" for m in MOVES]

    counts = {m: 0 for m in MOVES}
    with open(out, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for i, move in enumerate(moves, 1):
            counts[move] += 1
            row = {"index": i, "move": move.value}
            for m in MOVES:
                row[f"{m.value}_pct"] = round(counts[m] / i * 100, 2)
            writer.writerow(row)
    print(f"  ✓ Move history exported to {out}")

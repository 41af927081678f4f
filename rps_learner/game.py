"""Game flow: one human against the prediction engine."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import EngineConfig, WIN_RATE_HISTORY_LIMIT
from .engine import Move, Outcome, parse_move, player_outcome
from .ensemble import PredictionEngine

logger = logging.getLogger(__name__)


@dataclass
class GameStats:
    """Running scoreboard for a session."""
    player_wins: int = 0
    ai_wins: int = 0
    draws: int = 0
    total_games: int = 0
    win_rate_history: list = field(default_factory=list)
    history_limit: int = WIN_RATE_HISTORY_LIMIT

    @property
    def player_win_pct(self) -> float:
        return (self.player_wins / self.total_games * 100) if self.total_games else 0.0

    @property
    def ai_win_pct(self) -> float:
        return (self.ai_wins / self.total_games * 100) if self.total_games else 0.0

    @property
    def draw_pct(self) -> float:
        return (self.draws / self.total_games * 100) if self.total_games else 0.0

    def record(self, outcome: Outcome):
        self.total_games += 1
        if outcome is Outcome.WIN:
            self.player_wins += 1
        elif outcome is Outcome.LOSE:
            self.ai_wins += 1
        else:
            self.draws += 1

        self.win_rate_history.append(self.ai_win_pct)
        if len(self.win_rate_history) > self.history_limit:
            del self.win_rate_history[:-self.history_limit]

    def to_dict(self) -> dict:
        return {
            "player_wins": self.player_wins,
            "ai_wins": self.ai_wins,
            "draws": self.draws,
            "total_games": self.total_games,
            "player_win_pct": round(self.player_win_pct, 2),
            "ai_win_pct": round(self.ai_win_pct, 2),
            "draw_pct": round(self.draw_pct, 2),
            "win_rate_history": list(self.win_rate_history),
        }

    @classmethod
    def from_dict(cls, data: dict, history_limit: int = WIN_RATE_HISTORY_LIMIT) -> "GameStats":
        return cls(
            player_wins=int(data.get("player_wins", 0)),
            ai_wins=int(data.get("ai_wins", 0)),
            draws=int(data.get("draws", 0)),
            total_games=int(data.get("total_games", 0)),
            win_rate_history=[float(x) for x in data.get("win_rate_history", [])][-history_limit:],
            history_limit=history_limit,
        )


@dataclass
class RoundResult:
    round_num: int
    player_move: Move
    ai_move: Move
    outcome: Outcome
    confidence: int

    @property
    def message(self) -> str:
        return {
            Outcome.WIN: "🎉 You Win!",
            Outcome.LOSE: "🤖 AI Wins!",
            Outcome.DRAW: "🤝 Draw!",
        }[self.outcome]

    def to_dict(self) -> dict:
        return {
            "round": self.round_num,
            "player_move": self.player_move.value,
            "ai_move": self.ai_move.value,
            "outcome": self.outcome.value,
            "message": self.message,
            "confidence": self.confidence,
        }


class Game:
    """Owns one engine and the scoreboard for one player."""

    def __init__(
        self,
        engine: Optional[PredictionEngine] = None,
        stats: Optional[GameStats] = None,
        config: Optional[EngineConfig] = None,
        seed: Optional[int] = None,
    ):
        self.engine = engine or PredictionEngine(config=config, seed=seed)
        self.stats = stats or GameStats(history_limit=self.engine.config.win_rate_history_limit)

    def play_round(self, player_move) -> RoundResult:
        """Play one round; the engine commits to its move before it sees the player's."""
        player_move = parse_move(player_move)
        ai_move = self.engine.get_move()
        outcome = player_outcome(player_move, ai_move)
        self.stats.record(outcome)
        self.engine.observe(player_move)

        result = RoundResult(
            round_num=self.stats.total_games,
            player_move=player_move,
            ai_move=ai_move,
            outcome=outcome,
            confidence=self.engine.get_confidence(),
        )
        logger.debug("round %d: player=%s ai=%s -> %s", result.round_num,
                     player_move.value, ai_move.value, outcome.value)
        return result

    def reset(self):
        self.engine.reset()
        self.stats = GameStats(history_limit=self.engine.config.win_rate_history_limit)
        logger.info("game reset")

    def snapshot(self) -> dict:
        """Full display state: scoreboard plus what the engine has learned."""
        return {
            "stats": self.stats.to_dict(),
            "engine": self.engine.summary(),
        }

    def to_dict(self) -> dict:
        return {
            "engine": self.engine.to_dict(),
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Game":
        if not isinstance(data, dict) or "engine" not in data:
            raise ValueError("Malformed save file: no engine state")
        engine = PredictionEngine.from_dict(data["engine"])
        try:
            stats = GameStats.from_dict(
                data.get("stats", {}),
                history_limit=engine.config.win_rate_history_limit,
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Malformed save file stats: {e}") from e
        return cls(engine=engine, stats=stats)

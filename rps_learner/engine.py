"""Move model and round resolution for Rock-Paper-Scissors."""

from enum import Enum


class Move(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


# Enumeration order doubles as the tie-break order for every argmax scan
MOVES = [Move.ROCK, Move.PAPER, Move.SCISSORS]

# What each move beats
BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}

# What beats each move
BEATEN_BY = {v: k for k, v in BEATS.items()}

_SHORTHANDS = {"r": Move.ROCK, "p": Move.PAPER, "s": Move.SCISSORS}


class Outcome(Enum):
    """Round outcome from the human player's point of view."""
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"


# Pre-computed winner table: (move_a, move_b) → outcome
_WINNER_TABLE = {
    (Move.ROCK, Move.ROCK): 0,
    (Move.ROCK, Move.PAPER): -1,
    (Move.ROCK, Move.SCISSORS): 1,
    (Move.PAPER, Move.ROCK): 1,
    (Move.PAPER, Move.PAPER): 0,
    (Move.PAPER, Move.SCISSORS): -1,
    (Move.SCISSORS, Move.ROCK): -1,
    (Move.SCISSORS, Move.PAPER): 1,
    (Move.SCISSORS, Move.SCISSORS): 0,
}


def determine_winner(move_a: Move, move_b: Move) -> int:
    """Return 1 if A wins, -1 if B wins, 0 for draw."""
    return _WINNER_TABLE[move_a, move_b]


def player_outcome(player: Move, ai: Move) -> Outcome:
    result = determine_winner(player, ai)
    if result == 1:
        return Outcome.WIN
    if result == -1:
        return Outcome.LOSE
    return Outcome.DRAW


def counter_move(move: Move) -> Move:
    """Return the move that beats `move`."""
    return BEATEN_BY[move]


def would_counter(player_move: Move, prediction: Move) -> bool:
    """True if `player_move` beats the move the engine predicted."""
    return counter_move(prediction) == player_move


def parse_move(value) -> Move:
    """Turn user input into a Move.

    Accepts a Move, a name or value in any case ("ROCK", "rock") or the
    one-letter shorthands r/p/s.
    """
    if isinstance(value, Move):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _SHORTHANDS:
            return _SHORTHANDS[text]
        for move in MOVES:
            if text == move.value:
                return move
    available = ", ".join(m.value for m in MOVES)
    raise ValueError(f"Unknown move: {value!r}. Available: {available}")

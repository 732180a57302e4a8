"""Text notation codec for scramble moves."""

from __future__ import annotations

from typing import Iterable

from .moves import HALF, LAYER_AXIS, QUARTER, REVERSE, Move

SUFFIX_BY_TURNS = {QUARTER: "", HALF: "2", REVERSE: "'"}
TURNS_BY_SUFFIX = {suffix: turns for turns, suffix in SUFFIX_BY_TURNS.items()}

# Every token a generated scramble may contain, with and without wide moves.
VALID_TOKENS = frozenset(layer + suffix for layer in LAYER_AXIS for suffix in TURNS_BY_SUFFIX)


class NotationError(ValueError):
    """Raised when scramble text cannot be parsed."""


def move_to_token(move: Move) -> str:
    return move.layer + SUFFIX_BY_TURNS[move.turns]


def format_scramble(moves: Iterable[Move]) -> str:
    return " ".join(move_to_token(m) for m in moves)


def _normalize_quotes(text: str) -> str:
    return text.replace("’", "'").replace("‘", "'")


def parse_token(token: str) -> Move:
    """Parse one token such as ``R``, ``u2`` or ``F'``."""
    tok = _normalize_quotes(token.strip())
    if not tok:
        raise NotationError("Empty move token")

    layer, suffix = tok[0], tok[1:]
    if layer not in LAYER_AXIS:
        raise NotationError(f"Unknown layer in move: {token!r}")
    if suffix not in TURNS_BY_SUFFIX:
        raise NotationError(f"Invalid modifier in move: {token!r}")
    return Move(layer, TURNS_BY_SUFFIX[suffix])


def parse_scramble(text: str) -> list[Move]:
    return [parse_token(tok) for tok in _normalize_quotes(text).split()]


def moves_to_json(moves: Iterable[Move]) -> list[dict]:
    return [{"layer": m.layer, "turns": m.turns, "token": move_to_token(m)} for m in moves]

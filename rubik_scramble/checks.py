"""Validity checks for scramble sequences."""

from __future__ import annotations

from typing import Iterable, Sequence

from .moves import Move
from .notation import VALID_TOKENS, NotationError, format_scramble, parse_scramble


class ScrambleCheckError(ValueError):
    """Raised when a scramble breaks a generation invariant."""


def _as_moves(scramble: str | Sequence[Move]) -> list[Move]:
    if isinstance(scramble, str):
        return parse_scramble(scramble)
    return list(scramble)


def find_invalid_move(text: str, allowed: Iterable[str] | None = None) -> str | None:
    """Return the first space-delimited token not in ``allowed``, or None."""
    valid = VALID_TOKENS if allowed is None else frozenset(allowed)
    for token in text.split():
        if token not in valid:
            return token
    return None


def find_repeated_layer(scramble: str | Sequence[Move]) -> int | None:
    """Index of the first move followed by a move on the same layer."""
    moves = _as_moves(scramble)
    for i, (prev, nxt) in enumerate(zip(moves[:-1], moves[1:])):
        if prev.layer == nxt.layer:
            return i
    return None


def find_repeated_axis(scramble: str | Sequence[Move]) -> int | None:
    """Index of the first move followed by a move on the same axis."""
    moves = _as_moves(scramble)
    for i, (prev, nxt) in enumerate(zip(moves[:-1], moves[1:])):
        if prev.axis == nxt.axis:
            return i
    return None


def assert_valid_scramble(scramble: str | Sequence[Move]) -> None:
    if isinstance(scramble, str):
        bad = find_invalid_move(scramble)
        if bad is not None:
            raise ScrambleCheckError(f"Invalid move: {bad!r}")

    moves = _as_moves(scramble)
    if not moves:
        raise ScrambleCheckError("Scramble is empty")

    idx = find_repeated_layer(moves)
    if idx is not None:
        raise ScrambleCheckError(f"Same layer twice in a row at move {idx}: {format_scramble(moves[idx:idx + 2])}")

    idx = find_repeated_axis(moves)
    if idx is not None:
        raise ScrambleCheckError(f"Same axis twice in a row at move {idx}: {format_scramble(moves[idx:idx + 2])}")


def check_report(text: str) -> dict:
    tokens = text.split()
    report = {
        "length": len(tokens),
        "invalid_move": find_invalid_move(text),
        "repeated_layer": None,
        "repeated_axis": None,
        "valid": False,
    }
    if report["invalid_move"] is not None:
        return report

    try:
        moves = parse_scramble(text)
    except NotationError as exc:
        report["invalid_move"] = str(exc)
        return report

    report["repeated_layer"] = find_repeated_layer(moves)
    report["repeated_axis"] = find_repeated_axis(moves)
    report["valid"] = (
        bool(moves) and report["repeated_layer"] is None and report["repeated_axis"] is None
    )
    return report

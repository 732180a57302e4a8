"""Constrained random scramble generator."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .moves import (
    ROTATIONS,
    Adjacency,
    Cancelled,
    Independent,
    Merged,
    Move,
    adjacency,
    alphabet,
    combine,
)


class InvalidLength(ValueError):
    """Raised when a scramble of zero (or otherwise unusable) length is requested."""


@dataclass
class SamplerStats:
    draws: int = 0
    rejected: int = 0
    merged: int = 0
    cancelled: int = 0


@dataclass
class ScrambleResult:
    moves: list[Move]
    stats: SamplerStats = field(default_factory=SamplerStats)


def _validate_length(length: Any) -> int:
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
        raise InvalidLength(f"Scramble length must be an integer, got {length!r}")
    if length <= 0:
        raise InvalidLength(f"Scramble length must be >= 1, got {length}")
    return int(length)


def _draw_move(rng, layers: tuple[str, ...]) -> Move:
    layer = layers[int(rng.integers(len(layers)))]
    turns = ROTATIONS[int(rng.integers(len(ROTATIONS)))]
    return Move(layer, turns)


def sample_moves(length: int, layers: tuple[str, ...], rng) -> ScrambleResult:
    """Build exactly ``length`` finalized moves from ``rng`` draws.

    ``rng`` only needs ``integers(high)``; each draw consumes one layer index
    followed by one rotation index. A same-layer draw is composed into the
    tail (and pops it when the net rotation is identity), a same-axis draw is
    rejected, anything else is appended.
    """
    length = _validate_length(length)
    stats = SamplerStats()
    moves: list[Move] = []

    while len(moves) < length:
        candidate = _draw_move(rng, layers)
        stats.draws += 1

        if not moves:
            moves.append(candidate)
            continue

        tail = moves[-1]
        verdict = adjacency(tail, candidate)

        if verdict is Adjacency.INDEPENDENT:
            moves.append(candidate)
        elif verdict is Adjacency.SAME_AXIS:
            stats.rejected += 1
        elif verdict is Adjacency.COMPOSE:
            result = combine(tail, candidate)
            if isinstance(result, Merged):
                moves[-1] = tail.with_turns(result.turns)
                stats.merged += 1
            elif isinstance(result, Cancelled):
                moves.pop()
                stats.cancelled += 1
            elif isinstance(result, Independent):
                raise RuntimeError(f"Composition of {tail} and {candidate} reported independent layers")
        else:
            raise RuntimeError(f"Unhandled adjacency verdict: {verdict}")

    return ScrambleResult(moves=moves, stats=stats)


def generate(
    length: int,
    wide_moves: bool = False,
    seed: int | None = None,
    rng: Any | None = None,
) -> list[Move]:
    """Generate a scramble of ``length`` moves.

    Raises:
        InvalidLength: if ``length`` is 0 (or not a positive integer).
    """
    if rng is None:
        rng = np.random.default_rng(seed)
    return sample_moves(length, alphabet(wide_moves), rng).moves


class ScrambleGenerator:
    """Thread-safe scramble generator owning its own random source."""

    def __init__(self, wide_moves: bool = False, seed: int | None = None):
        self.wide_moves = bool(wide_moves)
        self._lock = threading.RLock()
        self._rng = np.random.default_rng(seed)
        self.generated_count = 0

    @property
    def layers(self) -> tuple[str, ...]:
        return alphabet(self.wide_moves)

    def generate_detailed(self, length: int, seed: int | None = None) -> ScrambleResult:
        with self._lock:
            rng = np.random.default_rng(seed) if seed is not None else self._rng
            result = sample_moves(length, self.layers, rng)
            self.generated_count += 1
            return result

    def generate(self, length: int, seed: int | None = None) -> list[Move]:
        return self.generate_detailed(length, seed=seed).moves

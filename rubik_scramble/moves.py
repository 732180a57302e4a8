"""Move alphabet and same-layer composition rule for 3x3 scrambles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

AXES = ("x", "y", "z")

# Layer symbol -> rotation axis. Wide layers are a face plus its adjacent slice.
LAYER_AXIS = {
    "L": "x",
    "M": "x",
    "R": "x",
    "U": "y",
    "E": "y",
    "D": "y",
    "F": "z",
    "S": "z",
    "B": "z",
    "l": "x",
    "r": "x",
    "u": "y",
    "d": "y",
    "f": "z",
    "b": "z",
}

BASE_LAYERS = ("L", "M", "R", "U", "E", "D", "F", "S", "B")
WIDE_LAYERS = BASE_LAYERS + ("l", "r", "u", "d", "f", "b")

# Quarter turns: 1 = 90 deg, 2 = 180 deg, 3 = 270 deg (reverse quarter turn).
QUARTER = 1
HALF = 2
REVERSE = 3
ROTATIONS = (QUARTER, HALF, REVERSE)
TURNS_PER_REVOLUTION = 4


class MoveError(ValueError):
    """Raised when a move is built from an unknown layer or identity rotation."""


def layer_axis(layer: str) -> str:
    try:
        return LAYER_AXIS[layer]
    except KeyError:
        raise MoveError(f"Unknown layer: {layer!r}") from None


def alphabet(wide_moves: bool = False) -> tuple[str, ...]:
    """Return the layers a scramble may draw from."""
    return WIDE_LAYERS if wide_moves else BASE_LAYERS


@dataclass(frozen=True)
class Move:
    layer: str
    turns: int

    def __post_init__(self):
        layer_axis(self.layer)
        if self.turns not in ROTATIONS:
            raise MoveError(f"Move turns must be one of {ROTATIONS}, got {self.turns!r}")

    @property
    def axis(self) -> str:
        return LAYER_AXIS[self.layer]

    @property
    def degrees(self) -> int:
        return 90 * self.turns

    def with_turns(self, turns: int) -> "Move":
        return Move(self.layer, turns)


@dataclass(frozen=True)
class Merged:
    """Same layer, net rotation is not identity."""

    turns: int


@dataclass(frozen=True)
class Cancelled:
    """Same layer, net rotation is identity: the previous move disappears."""


@dataclass(frozen=True)
class Independent:
    """Different layers: composition does not apply."""


CombineResult = Union[Merged, Cancelled, Independent]


class Adjacency(Enum):
    COMPOSE = "compose"
    SAME_AXIS = "same_axis"
    INDEPENDENT = "independent"


def same_axis(a: Move, b: Move) -> bool:
    return a.axis == b.axis


def combine(previous: Move, candidate: Move) -> CombineResult:
    """Compose two consecutive moves on the same layer.

    Rotations add modulo a full revolution. A net of zero quarter turns is
    reported as ``Cancelled``; moves on different layers are ``Independent``
    (use :func:`adjacency` to decide whether they may sit next to each other).
    """
    if previous.layer != candidate.layer:
        return Independent()
    net = (previous.turns + candidate.turns) % TURNS_PER_REVOLUTION
    if net == 0:
        return Cancelled()
    return Merged(net)


def adjacency(previous: Move, candidate: Move) -> Adjacency:
    if previous.layer == candidate.layer:
        return Adjacency.COMPOSE
    if same_axis(previous, candidate):
        return Adjacency.SAME_AXIS
    return Adjacency.INDEPENDENT

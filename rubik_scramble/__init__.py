"""Constrained random scramble generator for the 3x3 cube."""

from .generator import InvalidLength, ScrambleGenerator, generate
from .moves import Move, combine
from .notation import format_scramble, parse_scramble

__all__ = [
    "InvalidLength",
    "Move",
    "ScrambleGenerator",
    "combine",
    "format_scramble",
    "generate",
    "parse_scramble",
]

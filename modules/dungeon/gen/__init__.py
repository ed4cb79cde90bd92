"""Dungeon generation parameter models and randomness helpers."""

from .params import DungeonGenParams, RandomWalkParams
from .partition import Bounds, partition
from .random import derive_rng, get_rng, rand_choice, rand_float, rand_int, rand_value

__all__ = [
    "Bounds",
    "DungeonGenParams",
    "RandomWalkParams",
    "derive_rng",
    "get_rng",
    "partition",
    "rand_choice",
    "rand_float",
    "rand_int",
    "rand_value",
]

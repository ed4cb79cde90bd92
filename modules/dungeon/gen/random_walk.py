"""Iterated random walks used to carve organic room floors."""
from __future__ import annotations

import random
from typing import Sequence

from modules.dungeon.gen.params import RandomWalkParams
from modules.dungeon.gen.partition import Bounds
from modules.dungeon.gen.random import rand_choice, rand_int

Point = tuple[int, int]

CARDINAL_DIRECTIONS: Sequence[Point] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def simple_random_walk(start: Point, walk_length: int, rng: random.Random) -> list[Point]:
    """Walk ``walk_length`` cardinal steps from ``start``; returns the visited path."""

    path = [start]
    x, y = start
    for _ in range(walk_length):
        dx, dy = rand_choice(rng, CARDINAL_DIRECTIONS)
        x, y = x + dx, y + dy
        path.append((x, y))
    return path


def run_random_walk(start: Point, params: RandomWalkParams, rng: random.Random) -> list[Point]:
    """Union of ``params.iterations`` walks, in first-visit order."""

    visited: dict[Point, None] = {}
    current = start
    for _ in range(params.iterations):
        for cell in simple_random_walk(current, params.walk_length, rng):
            visited.setdefault(cell, None)
        if params.start_randomly_each_iteration:
            ordered = list(visited)
            current = ordered[rand_int(rng, 0, len(ordered) - 1)]
    return list(visited)


def carve_random_walk_room(
    bounds: Bounds,
    center: Point,
    offset: int,
    params: RandomWalkParams,
    rng: random.Random,
) -> list[Point]:
    """Random-walk floor for one room, clipped to ``bounds`` minus ``offset``.

    The far edge is inclusive (``x_max - offset``).
    """

    floor: list[Point] = []
    for x, y in run_random_walk(center, params, rng):
        if (
            bounds.x + offset <= x <= bounds.x_max - offset
            and bounds.y + offset <= y <= bounds.y_max - offset
        ):
            floor.append((x, y))
    return floor


__all__ = [
    "CARDINAL_DIRECTIONS",
    "simple_random_walk",
    "run_random_walk",
    "carve_random_walk_room",
]

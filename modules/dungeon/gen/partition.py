"""Recursive binary space partitioning of the dungeon bounds into rooms."""
from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Iterator

from modules.dungeon.gen.random import rand_int, rand_value


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned integer rectangle; ``x_max``/``y_max`` are exclusive."""

    x: int
    y: int
    width: int
    height: int

    @property
    def origin(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def x_max(self) -> int:
        return self.x + self.width

    @property
    def y_max(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def contains(self, point: tuple[int, int]) -> bool:
        px, py = point
        return self.x <= px < self.x_max and self.y <= py < self.y_max

    def overlaps(self, other: "Bounds") -> bool:
        return (
            self.x < other.x_max
            and other.x < self.x_max
            and self.y < other.y_max
            and other.y < self.y_max
        )

    def shrink(self, margin: int) -> "Bounds":
        """Return the rectangle inset by ``margin`` on every side.

        Sizes are clamped at zero so a small room yields an empty interior
        instead of a negative one.
        """

        return Bounds(
            self.x + margin,
            self.y + margin,
            max(0, self.width - 2 * margin),
            max(0, self.height - 2 * margin),
        )

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield every cell in row-major order (``y`` outer, ``x`` inner)."""

        for cy in range(self.y, self.y_max):
            for cx in range(self.x, self.x_max):
                yield cx, cy


def _split_horizontally(
    region: Bounds, min_height: int, rng: random.Random
) -> tuple[Bounds, Bounds]:
    cut = rand_int(rng, min_height, region.height - min_height)
    return (
        Bounds(region.x, region.y, region.width, cut),
        Bounds(region.x, region.y + cut, region.width, region.height - cut),
    )


def _split_vertically(
    region: Bounds, min_width: int, rng: random.Random
) -> tuple[Bounds, Bounds]:
    cut = rand_int(rng, min_width, region.width - min_width)
    return (
        Bounds(region.x, region.y, cut, region.height),
        Bounds(region.x + cut, region.y, region.width - cut, region.height),
    )


def partition(
    bounds: Bounds,
    min_width: int,
    min_height: int,
    rng: random.Random,
) -> list[Bounds]:
    """Split ``bounds`` into non-overlapping rooms no smaller than the minimum.

    Regions are processed first-in first-out. A coin flip decides whether a
    horizontal or vertical cut is tried first; the other axis is the
    fallback. A region that fits neither cut becomes a room. Bounds smaller
    than the minimum are returned whole as a single room.
    """

    if min_width <= 0 or min_height <= 0:
        raise ValueError("minimum room dimensions must be positive")
    if bounds.width <= 0 or bounds.height <= 0:
        raise ValueError("bounds must have a positive area")
    if bounds.width < min_width or bounds.height < min_height:
        return [bounds]

    rooms: list[Bounds] = []
    queue: deque[Bounds] = deque([bounds])
    while queue:
        region = queue.popleft()
        can_cut_y = region.height >= min_height * 2
        can_cut_x = region.width >= min_width * 2
        prefer_y = rand_value(rng) < 0.5
        if prefer_y and can_cut_y:
            queue.extend(_split_horizontally(region, min_height, rng))
        elif can_cut_x:
            queue.extend(_split_vertically(region, min_width, rng))
        elif can_cut_y:
            queue.extend(_split_horizontally(region, min_height, rng))
        else:
            rooms.append(region)
    return rooms


__all__ = ["Bounds", "partition"]

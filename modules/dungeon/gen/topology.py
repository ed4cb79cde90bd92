"""Corridor carving and room connectivity for partitioned dungeons."""
from __future__ import annotations

import math
import random
from typing import Iterable, Sequence

from modules.dungeon.gen.partition import Bounds
from modules.dungeon.gen.random import rand_int

Point = tuple[int, int]
ConnectivityGraph = dict[int, set[int]]


def room_center(bounds: Bounds) -> Point:
    """Integer centre of ``bounds`` (round-half-to-even on each axis)."""

    cx, cy = bounds.center
    return round(cx), round(cy)


def carve_simple_room(bounds: Bounds, offset: int) -> list[Point]:
    """Rectangular floor covering ``bounds`` inset by ``offset``."""

    return list(bounds.shrink(offset).cells())


def create_corridor(start: Point, destination: Point) -> list[Point]:
    """L-shaped corridor: vertical run first, then horizontal; endpoints included."""

    x, y = start
    tx, ty = destination
    corridor = [(x, y)]
    while y != ty:
        y += 1 if ty > y else -1
        corridor.append((x, y))
    while x != tx:
        x += 1 if tx > x else -1
        corridor.append((x, y))
    return corridor


def find_closest(current: Point, candidates: Sequence[Point]) -> int:
    """Return the position in ``candidates`` of the point nearest ``current``.

    Distance is Euclidean; ties keep the first candidate encountered.
    """

    if not candidates:
        raise ValueError("no candidates to choose from")
    best_index = 0
    best_distance = math.inf
    for index, point in enumerate(candidates):
        distance = math.dist(current, point)
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index


def empty_graph(room_count: int) -> ConnectivityGraph:
    return {index: set() for index in range(room_count)}


def add_edge(graph: ConnectivityGraph, a: int, b: int) -> None:
    graph.setdefault(a, set()).add(b)
    graph.setdefault(b, set()).add(a)


def edge_count(graph: ConnectivityGraph) -> int:
    return sum(len(neighbours) for neighbours in graph.values()) // 2


def connect(
    centers: Sequence[Point],
    rng: random.Random,
) -> tuple[set[Point], ConnectivityGraph]:
    """Chain every room centre to its nearest unvisited neighbour.

    Starting from a randomly chosen centre, repeatedly joins the current
    centre to the closest centre not yet visited, carves an L-shaped
    corridor between them and moves on. Produces ``len(centers) - 1`` edges.
    """

    graph = empty_graph(len(centers))
    corridors: set[Point] = set()
    if not centers:
        return corridors, graph

    unvisited = list(range(len(centers)))
    current = unvisited.pop(rand_int(rng, 0, len(unvisited) - 1))
    while unvisited:
        position = find_closest(centers[current], [centers[i] for i in unvisited])
        nearest = unvisited.pop(position)
        add_edge(graph, current, nearest)
        corridors.update(create_corridor(centers[current], centers[nearest]))
        current = nearest
    return corridors, graph


def rasterize(rooms: Iterable[Iterable[Point]], corridors: Iterable[Point]) -> frozenset[Point]:
    """Union room floors and corridor cells into a single floor-cell set."""

    floor: set[Point] = set()
    for cells in rooms:
        floor.update(cells)
    floor.update(corridors)
    return frozenset(floor)


__all__ = [
    "ConnectivityGraph",
    "Point",
    "add_edge",
    "carve_simple_room",
    "connect",
    "create_corridor",
    "edge_count",
    "empty_graph",
    "find_closest",
    "rasterize",
    "room_center",
]

"""Dungeon generation pipeline: partition, carve, connect, label, classify."""
from __future__ import annotations

import random
from dataclasses import replace
from typing import Optional

from modules.dungeon.gen.classify import classify_rooms
from modules.dungeon.gen.depth import label_depths, select_boss
from modules.dungeon.gen.params import DungeonGenParams
from modules.dungeon.gen.partition import Bounds, partition
from modules.dungeon.gen.random import get_rng, random_seed
from modules.dungeon.gen.random_walk import carve_random_walk_room
from modules.dungeon.gen.topology import (
    ConnectivityGraph,
    Point,
    carve_simple_room,
    connect,
    rasterize,
    room_center,
)
from modules.dungeon.spec import DungeonLayout, Room
from utils.logger import get_generation_logger, log_calls


def _carve_rooms(
    rooms: list[Bounds],
    centers: list[Point],
    params: DungeonGenParams,
    rng: random.Random,
) -> list[list[Point]]:
    if params.random_walk_rooms:
        return [
            carve_random_walk_room(bounds, center, params.offset, params.random_walk, rng)
            for bounds, center in zip(rooms, centers)
        ]
    return [carve_simple_room(bounds, params.offset) for bounds in rooms]


def start_run(params: DungeonGenParams) -> tuple[DungeonGenParams, random.Random]:
    """Fix the run seed (picking one if ``params.seed`` is ``None``) and open its stream.

    Every stage of the run draws from the returned generator, dungeon first
    and loot after it.
    """

    if params.seed is None:
        params = replace(params, seed=random_seed())
    return params, get_rng(params.seed)


def generate_with_graph(
    params: DungeonGenParams,
    rng: Optional[random.Random] = None,
) -> tuple[DungeonLayout, ConnectivityGraph]:
    """Generate a layout and also return the connectivity graph behind it.

    When ``rng`` is omitted a generator seeded with ``params.seed`` is
    created (a fresh seed is picked when that is ``None`` too). Passing
    ``rng`` lets a caller thread one stream through generation and the
    later loot stage; ``params.seed`` is still recorded on the layout.
    """

    seed = params.seed if params.seed is not None else random_seed()
    if rng is None:
        rng = get_rng(seed)

    x, y = params.origin
    room_bounds = partition(
        Bounds(x, y, params.width, params.height),
        params.min_room_width,
        params.min_room_height,
        rng,
    )
    centers = [room_center(bounds) for bounds in room_bounds]
    room_floors = _carve_rooms(room_bounds, centers, params, rng)

    corridors, graph = connect(centers, rng)
    floor_cells = rasterize(room_floors, corridors)

    levels = label_depths(graph, start_index=0, room_count=len(room_bounds))
    boss_index = select_boss(levels)
    roles = classify_rooms(len(room_bounds), boss_index, rng, params.treasure_chance)

    rooms = tuple(
        Room(bounds=bounds, role=role, level=level)
        for bounds, role, level in zip(room_bounds, roles, levels)
    )
    get_generation_logger().info(
        "Generated dungeon seed=%s rooms=%d floor_cells=%d max_level=%d",
        seed,
        len(rooms),
        len(floor_cells),
        max(levels),
    )
    return DungeonLayout(seed=seed, rooms=rooms, floor_cells=floor_cells), graph


@log_calls
def generate_dungeon(
    params: DungeonGenParams,
    rng: Optional[random.Random] = None,
) -> DungeonLayout:
    """Generate a :class:`DungeonLayout` from ``params``."""

    layout, _graph = generate_with_graph(params, rng)
    return layout


__all__ = ["generate_dungeon", "generate_with_graph", "start_run"]

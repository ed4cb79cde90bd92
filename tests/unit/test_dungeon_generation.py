from __future__ import annotations

import pytest

from modules.dungeon.gen.layout import generate_dungeon, generate_with_graph
from modules.dungeon.gen.params import DungeonGenParams, RandomWalkParams
from modules.dungeon.gen.random import get_rng
from modules.dungeon.gen.random_walk import carve_random_walk_room, run_random_walk
from modules.dungeon.gen.partition import Bounds
from modules.dungeon.gen.topology import edge_count
from modules.dungeon.gen.validate import DungeonValidator
from modules.dungeon.spec import RoomRole


@pytest.mark.parametrize("seed", [0, 1, 17, 123456, -42])
def test_generated_layout_passes_audit(seed: int) -> None:
    layout, graph = generate_with_graph(DungeonGenParams(seed=seed))

    result = DungeonValidator(layout, graph).validate()

    assert result.valid, result.problems
    assert edge_count(graph) == layout.room_count - 1
    assert layout.rooms[0].role is RoomRole.START
    assert layout.rooms[0].level == 1


def test_boss_room_is_deepest() -> None:
    layout = generate_dungeon(DungeonGenParams(seed=31, width=40, height=40))
    levels = layout.levels
    boss = [index for index, room in enumerate(layout.rooms) if room.role is RoomRole.BOSS]
    assert boss == [levels.index(max(levels))]


def test_same_seed_same_layout() -> None:
    params = DungeonGenParams(seed=2024, width=32, height=24)
    assert generate_dungeon(params) == generate_dungeon(params)


def test_seed_is_recorded_and_picked_when_missing() -> None:
    assert generate_dungeon(DungeonGenParams(seed=5)).seed == 5
    assert isinstance(generate_dungeon(DungeonGenParams()).seed, int)


def test_floor_cells_cover_room_interiors() -> None:
    layout = generate_dungeon(DungeonGenParams(seed=9))
    for room in layout.rooms:
        for cell in room.bounds.shrink(1).cells():
            assert layout.is_floor(cell)


def test_dungeon_smaller_than_minimum_is_one_room() -> None:
    layout = generate_dungeon(DungeonGenParams(seed=1, width=3, height=3))
    assert layout.room_count == 1
    assert layout.rooms[0].role is RoomRole.START
    assert layout.rooms[0].level == 1


def test_random_walk_rooms_stay_inside_bounds() -> None:
    params = DungeonGenParams(seed=77, random_walk_rooms=True)
    layout = generate_dungeon(params)
    for cell in layout.floor_cells:
        assert 0 <= cell[0] <= params.width and 0 <= cell[1] <= params.height


def test_random_walk_is_insertion_ordered_and_reproducible() -> None:
    params = RandomWalkParams(iterations=4, walk_length=6)
    first = run_random_walk((5, 5), params, get_rng(3))
    second = run_random_walk((5, 5), params, get_rng(3))
    assert first == second
    assert first[0] == (5, 5)
    assert len(first) == len(set(first))


def test_random_walk_room_is_clipped_to_inset_bounds() -> None:
    bounds = Bounds(0, 0, 6, 6)
    cells = carve_random_walk_room(bounds, (3, 3), 1, RandomWalkParams(iterations=20, walk_length=20), get_rng(4))
    assert cells
    assert all(1 <= x <= 5 and 1 <= y <= 5 for x, y in cells)

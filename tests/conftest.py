"""Test bootstrap: ensure the repository root is on sys.path.

This allows absolute imports like `modules.dungeon.spec` and `config.config_loader`
which assume the working directory is the repository root.
"""
import os
import sys

PACKAGE_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PACKAGE_ROOT not in sys.path:
    sys.path.insert(0, PACKAGE_ROOT)

import pytest  # noqa: E402

from modules.dungeon.gen.params import DungeonGenParams  # noqa: E402
from modules.dungeon.gen.partition import Bounds  # noqa: E402
from modules.dungeon.spec import DungeonLayout, Room, RoomRole  # noqa: E402


@pytest.fixture
def dungeon_params() -> DungeonGenParams:
    return DungeonGenParams(seed=1234)


@pytest.fixture
def chain_layout() -> DungeonLayout:
    """Four 6x6 rooms in a row: Start, Treasure, Common, Boss at levels 1..4."""

    roles = [RoomRole.START, RoomRole.TREASURE, RoomRole.COMMON, RoomRole.BOSS]
    rooms = tuple(
        Room(bounds=Bounds(index * 6, 0, 6, 6), role=role, level=index + 1)
        for index, role in enumerate(roles)
    )
    floor = frozenset(
        cell for room in rooms for cell in room.bounds.shrink(1).cells()
    )
    return DungeonLayout(seed=99, rooms=rooms, floor_cells=floor)

"""Dungeon data model and serialization helpers."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence, TYPE_CHECKING

from modules.dungeon.gen.partition import Bounds
from modules.dungeon.schema import DungeonSave, RoomSave

if TYPE_CHECKING:  # pragma: no cover - typing only
    from modules.dungeon.gen.params import DungeonGenParams


logger = logging.getLogger(__name__)

Point = tuple[int, int]


class RoomRole(str, Enum):
    """Role a room plays in the dungeon."""

    COMMON = "Common"
    TREASURE = "Treasure"
    BOSS = "Boss"
    START = "Start"

    @classmethod
    def parse(cls, value: "RoomRole | str") -> "RoomRole":
        if isinstance(value, RoomRole):
            return value
        try:
            return cls(value)
        except ValueError:
            try:
                return cls[str(value).upper()]
            except KeyError as exc:
                raise ValueError(f"unknown room type '{value}'") from exc


@dataclass(frozen=True, slots=True)
class Room:
    """A partitioned room with its role and BFS depth."""

    bounds: Bounds
    role: RoomRole
    level: int

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ValueError("room level must be at least 1")


@dataclass(frozen=True, slots=True)
class DungeonLayout:
    """Immutable snapshot of one generation run."""

    seed: int
    rooms: tuple[Room, ...]
    floor_cells: frozenset[Point]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rooms", tuple(self.rooms))
        object.__setattr__(self, "floor_cells", frozenset(self.floor_cells))

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    @property
    def levels(self) -> list[int]:
        return [room.level for room in self.rooms]

    def is_floor(self, position: Point) -> bool:
        return position in self.floor_cells

    def with_roles(self, roles: Mapping[int, RoomRole]) -> "DungeonLayout":
        """Return a copy with the given room indices re-labelled."""

        rooms = tuple(
            replace(room, role=roles[index]) if index in roles else room
            for index, room in enumerate(self.rooms)
        )
        return replace(self, rooms=rooms)


def room_to_save(room: Room) -> RoomSave:
    return RoomSave(
        min=[room.bounds.x, room.bounds.y],
        size=[room.bounds.width, room.bounds.height],
        type=room.role.value,
        roomLevel=room.level,
    )


def room_from_save(data: RoomSave) -> Room:
    x, y = data.min
    width, height = data.size
    return Room(
        bounds=Bounds(x, y, width, height),
        role=RoomRole.parse(data.type),
        level=data.roomLevel,
    )


def to_save(layout: DungeonLayout) -> DungeonSave:
    """Convert ``layout`` to the persisted dungeon schema."""

    return DungeonSave(seed=layout.seed, rooms=[room_to_save(room) for room in layout.rooms])


def to_dict(layout: DungeonLayout) -> dict[str, Any]:
    return to_save(layout).model_dump(mode="json")


def rooms_from_save(save: DungeonSave) -> list[Room]:
    return [room_from_save(room) for room in save.rooms]


def save_json(layout: DungeonLayout, path: str | Path) -> None:
    """Serialise ``layout`` to JSON on disk."""

    Path(path).write_text(json.dumps(to_dict(layout), indent=2), encoding="utf-8")


def load_json(path: str | Path) -> DungeonSave:
    """Load and validate a persisted dungeon."""

    return DungeonSave.model_validate_json(Path(path).read_text(encoding="utf-8"))


def _geometry(rooms: Iterable[Room]) -> list[tuple[Bounds, int]]:
    return [(room.bounds, room.level) for room in rooms]


def restore_layout(save: DungeonSave, params: "DungeonGenParams") -> DungeonLayout:
    """Rebuild a full layout (floor cells included) from a persisted dungeon.

    The dungeon is regenerated from the saved seed, then the saved room roles
    are applied on top so hand-edited Treasure/Boss assignments survive.
    """

    from modules.dungeon.gen.layout import generate_dungeon

    layout = generate_dungeon(replace(params, seed=save.seed))
    saved_rooms: Sequence[Room] = rooms_from_save(save)
    if _geometry(saved_rooms) != _geometry(layout.rooms):
        logger.warning(
            "Regenerated dungeon for seed %s does not match the saved rooms "
            "(%d saved, %d generated); keeping generated geometry",
            save.seed,
            len(saved_rooms),
            layout.room_count,
        )
        return layout
    return layout.with_roles({index: room.role for index, room in enumerate(saved_rooms)})


__all__ = [
    "DungeonLayout",
    "Room",
    "RoomRole",
    "load_json",
    "restore_layout",
    "room_from_save",
    "room_to_save",
    "rooms_from_save",
    "save_json",
    "to_dict",
    "to_save",
]

"""Room-role overrides supplied by external authoring tools."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from modules.dungeon.errors import ConfigurationError
from modules.dungeon.schema import RoomTypeOverrideSave
from modules.dungeon.spec import DungeonLayout, Room, RoomRole


logger = logging.getLogger(__name__)

_LOOT_ROLES = frozenset({RoomRole.TREASURE, RoomRole.BOSS})


@dataclass(frozen=True, slots=True)
class RoomRoleOverride:
    """A user assignment of ``role`` to the room at ``room_index``.

    ``room_level`` mirrors the level shown to the author; it is informative
    only and never changes the room's level.
    """

    room_index: int
    room_level: int
    role: RoomRole

    def to_dict(self) -> dict[str, object]:
        return {"roomIndex": self.room_index, "roomLevel": self.room_level, "type": self.role.value}


def load_room_assignments(layout: DungeonLayout) -> list[RoomRoleOverride]:
    """One override per room carrying its current role, sorted by level."""

    assignments = [
        RoomRoleOverride(room_index=index, room_level=room.level, role=room.role)
        for index, room in enumerate(layout.rooms)
    ]
    return sorted(assignments, key=lambda item: item.room_level)


def _check_index(layout: DungeonLayout, override: RoomRoleOverride) -> None:
    if not 0 <= override.room_index < layout.room_count:
        raise ConfigurationError(
            f"override references room {override.room_index} but the dungeon has "
            f"{layout.room_count} rooms"
        )


def apply_overrides(
    layout: DungeonLayout,
    overrides: Sequence[RoomRoleOverride],
) -> DungeonLayout:
    """Return a new layout with the override roles applied.

    Overrides may cover every room or only some; later entries win when an
    index repeats. Bounds and levels are never touched.
    """

    roles: dict[int, RoomRole] = {}
    for override in overrides:
        _check_index(layout, override)
        roles[override.room_index] = override.role
    return layout.with_roles(roles)


def select_loot_rooms(
    layout: DungeonLayout | None,
    overrides: Sequence[RoomRoleOverride] | None = None,
) -> list[tuple[int, Room]]:
    """``(index, room)`` pairs that receive loot, stably sorted by level.

    A complete override list (one entry per room) is resolved by index with
    later entries winning, and each room it marks Treasure or Boss is
    eligible once. Otherwise every non-Start room of ``layout`` is eligible.
    Raises :class:`ConfigurationError` when there is no layout or nothing is
    eligible.
    """

    if layout is None:
        raise ConfigurationError("no dungeon has been generated yet")

    overrides = list(overrides or ())
    if overrides and len(overrides) == layout.room_count:
        roles: dict[int, RoomRole] = {}
        for override in overrides:
            _check_index(layout, override)
            roles[override.room_index] = override.role
        eligible = [
            (index, layout.rooms[index]) for index, role in roles.items() if role in _LOOT_ROLES
        ]
    else:
        if overrides:
            logger.warning(
                "Ignoring %d room overrides for a dungeon with %d rooms; "
                "every non-Start room is eligible for loot",
                len(overrides),
                layout.room_count,
            )
        eligible = [
            (index, room) for index, room in enumerate(layout.rooms) if room.role is not RoomRole.START
        ]

    if not eligible:
        raise ConfigurationError("no Treasure or Boss rooms are available for loot")
    return sorted(eligible, key=lambda pair: pair[1].level)


def load_overrides_json(path: str | Path) -> list[RoomRoleOverride]:
    """Read ``[{roomIndex, roomLevel, type}, ...]`` from ``path``."""

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("rooms", [])
    entries = [RoomTypeOverrideSave.model_validate(item) for item in raw]
    return [
        RoomRoleOverride(
            room_index=entry.roomIndex,
            room_level=entry.roomLevel,
            role=RoomRole.parse(entry.type),
        )
        for entry in entries
    ]


def save_overrides_json(overrides: Sequence[RoomRoleOverride], path: str | Path) -> None:
    Path(path).write_text(
        json.dumps([override.to_dict() for override in overrides], indent=2),
        encoding="utf-8",
    )


__all__ = [
    "RoomRoleOverride",
    "apply_overrides",
    "load_overrides_json",
    "load_room_assignments",
    "save_overrides_json",
    "select_loot_rooms",
]

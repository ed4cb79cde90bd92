"""Room role assignment."""
from __future__ import annotations

import random

from modules.dungeon.gen.random import rand_value
from modules.dungeon.spec import RoomRole

DEFAULT_TREASURE_CHANCE = 0.2


def classify_rooms(
    room_count: int,
    boss_index: int,
    rng: random.Random,
    treasure_chance: float = DEFAULT_TREASURE_CHANCE,
) -> list[RoomRole]:
    """Index 0 is Start, ``boss_index`` is Boss, the rest roll for Treasure.

    Only the rolled rooms draw from ``rng``; each roll is independent.
    """

    roles: list[RoomRole] = []
    for index in range(room_count):
        if index == 0:
            roles.append(RoomRole.START)
        elif index == boss_index:
            roles.append(RoomRole.BOSS)
        elif rand_value(rng) < treasure_chance:
            roles.append(RoomRole.TREASURE)
        else:
            roles.append(RoomRole.COMMON)
    return roles


__all__ = ["DEFAULT_TREASURE_CHANCE", "classify_rooms"]

"""Event definitions for loot spawning."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence

from core.events.topics import EventTopic
from modules.dungeon.events import PublishesEvents
from modules.dungeon.overrides import RoomRoleOverride
from modules.loot.params import LootParams
from modules.loot.spawner import SpawnResult


@dataclass(frozen=True, slots=True)
class SpawnLoot:
    """Request loot for the current dungeon."""

    params: LootParams
    overrides: Optional[Sequence[RoomRoleOverride]] = None

    topic: ClassVar[EventTopic] = EventTopic.SPAWN_LOOT

    def publish(self, bus: PublishesEvents) -> None:
        bus.publish(self.topic, params=self.params, overrides=self.overrides)


@dataclass(frozen=True, slots=True)
class LootSpawned:
    result: SpawnResult

    topic: ClassVar[EventTopic] = EventTopic.LOOT_SPAWNED

    def publish(self, bus: PublishesEvents) -> None:
        bus.publish(self.topic, result=self.result)


__all__ = ["LootSpawned", "SpawnLoot"]

"""Event definitions for dungeon generation."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import ClassVar, Optional, Protocol, runtime_checkable

from core.events.topics import EventTopic
from modules.dungeon.gen.params import DungeonGenParams
from modules.dungeon.spec import DungeonLayout


@runtime_checkable
class PublishesEvents(Protocol):
    """The subset of the event bus the event helpers need."""

    def publish(self, event_type: str, **payload: object) -> None:
        ...


@dataclass(frozen=True, slots=True)
class GenerateDungeon:
    """Request a dungeon built from ``params``."""

    params: DungeonGenParams

    topic: ClassVar[EventTopic] = EventTopic.GENERATE_DUNGEON

    def publish(self, bus: PublishesEvents) -> None:
        bus.publish(self.topic, params=self.params)


@dataclass(frozen=True, slots=True)
class DungeonGenerated:
    """Notification carrying the freshly generated layout and the stream that built it."""

    layout: DungeonLayout
    rng: Optional[random.Random] = None

    topic: ClassVar[EventTopic] = EventTopic.DUNGEON_GENERATED

    def publish(self, bus: PublishesEvents) -> None:
        bus.publish(self.topic, layout=self.layout, rng=self.rng)


__all__ = ["DungeonGenerated", "GenerateDungeon", "PublishesEvents"]

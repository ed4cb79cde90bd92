"""Canonical registry of event bus topics used by the generation systems.

Each entry is declared as a :class:`~enum.Enum` member and documents the
producer, the intended consumers and the payload guarantees for the associated
event. Importing modules should rely on the enum members (e.g.
``topics.EventTopic.DUNGEON_GENERATED``) rather than raw strings.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["EventTopic"]


class EventTopic(str, Enum):
    """Enumeration of every topic published on the event bus."""

    GENERATE_DUNGEON = "GenerateDungeon"
    """Published by callers that want a new dungeon.

    Subscribers: :class:`modules.dungeon.systems.dungeon_generator.DungeonGeneratorSystem`.
    Guarantees: carries ``params`` (a ``DungeonGenParams``).
    """

    DUNGEON_GENERATED = "DungeonGenerated"
    """Published by the dungeon generator once a layout is available.

    Subscribers: loot spawners, renderers, authoring tools.
    Guarantees: carries ``layout`` (a ``DungeonLayout``).
    """

    SPAWN_LOOT = "SpawnLoot"
    """Published by callers that want loot placed in the current dungeon.

    Subscribers: :class:`modules.loot.systems.loot_spawner.LootSpawnerSystem`.
    Guarantees: carries ``params`` (a ``LootParams``) and optional ``overrides``.
    """

    LOOT_SPAWNED = "LootSpawned"
    """Published by the loot spawner after a spawn run.

    Subscribers: inventory views and report exporters.
    Guarantees: carries ``result`` (a ``SpawnResult``).
    """

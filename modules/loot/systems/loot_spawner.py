from __future__ import annotations

import logging
import random
from typing import Callable, Mapping, Optional, Protocol, Sequence

from core.event_bus import Topic
from modules.dungeon.errors import ConfigurationError
from modules.dungeon.overrides import RoomRoleOverride
from modules.dungeon.spec import DungeonLayout
from modules.loot.events import LootSpawned, SpawnLoot
from modules.loot.params import LootParams
from modules.loot.spawner import SpawnResult, spawn_items


logger = logging.getLogger(__name__)

DungeonSource = Callable[[], Optional[DungeonLayout]]
StreamSource = Callable[[], Optional[random.Random]]


class _EventBus(Protocol):
    def subscribe(self, event_type: Topic, callback: Callable[..., None]) -> None:
        ...

    def publish(
        self, event_type: Topic, payload: Mapping[str, object] | None = None, /, **kwargs: object
    ) -> None:
        ...


class LootSpawnerSystem:
    """Spawn loot into the current dungeon on :class:`SpawnLoot` requests.

    ``dungeon_source`` returns the layout to populate, or ``None`` when no
    dungeon has been generated yet. ``stream_source`` returns the generator
    that built that layout so loot continues its stream; without it (or
    when it returns ``None``) a loot stream is derived from the layout seed.
    """

    def __init__(
        self,
        *,
        event_bus: _EventBus,
        dungeon_source: DungeonSource,
        stream_source: Optional[StreamSource] = None,
    ) -> None:
        self._bus = event_bus
        self._dungeon_source = dungeon_source
        self._stream_source = stream_source
        self.latest_result: Optional[SpawnResult] = None
        self._bus.subscribe(SpawnLoot.topic, self._on_spawn_requested)

    def _on_spawn_requested(
        self,
        *,
        params: LootParams,
        overrides: Optional[Sequence[RoomRoleOverride]] = None,
        **_: object,
    ) -> None:
        layout = self._dungeon_source()
        if layout is None:
            raise ConfigurationError("cannot spawn loot before a dungeon has been generated")
        rng = self._stream_source() if self._stream_source else None
        try:
            result = spawn_items(layout, params, rng, overrides=overrides)
        except Exception:
            logger.exception("Loot spawn failed for seed=%s budget=%s", layout.seed, params.item_budget)
            raise
        self.latest_result = result
        LootSpawned(result=result).publish(self._bus)


__all__ = ["DungeonSource", "LootSpawnerSystem", "StreamSource"]

from __future__ import annotations

import logging
import random
from typing import Callable, Mapping, Optional, Protocol

from core.event_bus import Topic
from modules.dungeon.events import DungeonGenerated, GenerateDungeon
from modules.dungeon.gen.layout import generate_dungeon, start_run
from modules.dungeon.gen.params import DungeonGenParams
from modules.dungeon.spec import DungeonLayout


logger = logging.getLogger(__name__)


class _EventBus(Protocol):
    def subscribe(self, event_type: Topic, callback: Callable[..., None]) -> None:
        ...

    def publish(
        self, event_type: Topic, payload: Mapping[str, object] | None = None, /, **kwargs: object
    ) -> None:
        ...


class DungeonGeneratorSystem:
    """Listen for :class:`GenerateDungeon` events and publish :class:`DungeonGenerated`.

    ``latest_rng`` is the stream that built ``latest_layout``; a loot stage
    for the same run continues from it.
    """

    def __init__(self, *, event_bus: _EventBus) -> None:
        self._bus = event_bus
        self.latest_layout: Optional[DungeonLayout] = None
        self.latest_rng: Optional[random.Random] = None
        self._bus.subscribe(GenerateDungeon.topic, self._on_generate_requested)

    def _on_generate_requested(self, *, params: DungeonGenParams, **_: object) -> None:
        params, rng = start_run(params)
        try:
            layout = generate_dungeon(params, rng)
        except Exception:
            logger.exception(
                "Dungeon generation failed for params: size=%s seed=%s", params.size, params.seed
            )
            raise
        self.latest_layout = layout
        self.latest_rng = rng
        DungeonGenerated(layout=layout, rng=rng).publish(self._bus)


__all__ = ["DungeonGeneratorSystem"]

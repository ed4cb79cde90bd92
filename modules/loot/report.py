"""Aggregation of spawned items into an exportable report."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from modules.loot.equipment import ItemSpec, stat_summary
from modules.loot.params import LootParams
from modules.loot.schema import ItemEntryModel, ItemReportModel, RoomLogModel

if TYPE_CHECKING:  # pragma: no cover - typing only
    from modules.loot.spawner import PlacementRecord


logger = logging.getLogger(__name__)

DEFAULT_REPORT_STEM = "Item_Log"


@dataclass(frozen=True, slots=True)
class ItemEntry:
    name: str
    rarity: str
    stats: str
    position: tuple[int, int]

    @property
    def world_pos(self) -> tuple[float, float]:
        """Centre of the item's cell."""

        return self.position[0] + 0.5, self.position[1] + 0.5

    @classmethod
    def from_item(cls, item: ItemSpec, position: tuple[int, int]) -> "ItemEntry":
        return cls(
            name=item.name,
            rarity=item.rarity.label,
            stats=stat_summary(item),
            position=position,
        )


@dataclass(frozen=True, slots=True)
class RoomLog:
    room_level: int
    items: tuple[ItemEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class GenerationReport:
    seed: int
    parameters: LootParams
    rooms: tuple[RoomLog, ...] = ()

    @property
    def item_count(self) -> int:
        return sum(len(room.items) for room in self.rooms)

    def iter_items(self) -> Iterable[ItemEntry]:
        for room in self.rooms:
            yield from room.items

    def to_model(self) -> ItemReportModel:
        params = self.parameters
        return ItemReportModel(
            seed=self.seed,
            totalItemBudget=params.item_budget,
            noiseScale=params.noise_scale,
            noiseThreshold=params.noise_threshold,
            globalDifficulty=params.difficulty,
            penaltyIntensity=params.penalty_scale,
            tradeOffSpawnChance=params.trade_off_chance,
            rooms=[
                RoomLogModel(
                    roomLevel=room.room_level,
                    items=[
                        ItemEntryModel(
                            name=entry.name,
                            rarity=entry.rarity,
                            stats=entry.stats,
                            worldPos=list(entry.world_pos),
                        )
                        for entry in room.items
                    ],
                )
                for room in self.rooms
            ],
        )

    def to_dict(self) -> dict:
        return self.to_model().model_dump(mode="json")


@dataclass
class ReportAssembler:
    """Collects per-room placements in the order rooms are processed."""

    seed: int
    parameters: LootParams
    _rooms: list[RoomLog] = field(default_factory=list, init=False, repr=False)

    def add_room(self, room_level: int, records: Iterable["PlacementRecord"]) -> RoomLog:
        log = RoomLog(
            room_level=room_level,
            items=tuple(ItemEntry.from_item(record.item, record.position) for record in records),
        )
        self._rooms.append(log)
        return log

    def build(self) -> GenerationReport:
        return GenerationReport(seed=self.seed, parameters=self.parameters, rooms=tuple(self._rooms))


def next_available_path(directory: str | Path, stem: str = DEFAULT_REPORT_STEM, suffix: str = ".json") -> Path:
    """``stem.json`` if free, otherwise ``stem_2.json``, ``stem_3.json``, ..."""

    directory = Path(directory)
    candidate = directory / f"{stem}{suffix}"
    counter = 2
    while candidate.exists():
        candidate = directory / f"{stem}_{counter}{suffix}"
        counter += 1
    return candidate


def save_report(report: GenerationReport, directory: str | Path, stem: str = DEFAULT_REPORT_STEM) -> Path:
    """Write ``report`` under ``directory`` without overwriting earlier runs."""

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = next_available_path(directory, stem)
    path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
    logger.info("Report saved to %s", path.name)
    return path


def load_report(path: str | Path) -> ItemReportModel:
    return ItemReportModel.model_validate_json(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "DEFAULT_REPORT_STEM",
    "GenerationReport",
    "ItemEntry",
    "ReportAssembler",
    "RoomLog",
    "load_report",
    "next_available_path",
    "save_report",
]

"""Loot spawn run: allocate the budget, place items and roll their stats."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from modules.dungeon.errors import ConfigurationError
from modules.dungeon.gen.layout import generate_dungeon, start_run
from modules.dungeon.gen.params import DungeonGenParams
from modules.dungeon.gen.random import derive_rng, rand_float
from modules.dungeon.overrides import RoomRoleOverride, select_loot_rooms
from modules.dungeon.spec import DungeonLayout
from modules.loot.budget import allocate
from modules.loot.equipment import ItemSpec, roll_equipment
from modules.loot.params import LootParams
from modules.loot.placement import PositionPredicate, sample_room
from modules.loot.rarity import Rarity, icon_for, roll_rarity
from modules.loot.report import GenerationReport, ReportAssembler
from utils.logger import get_generation_logger, log_calls

AssetLookup = Callable[[Rarity], Any]


@dataclass(frozen=True, slots=True)
class PlacementRecord:
    """One spawned item and where it lies."""

    position: tuple[int, int]
    item: ItemSpec
    room_index: int
    icon: Any = None


@dataclass(frozen=True, slots=True)
class SpawnResult:
    records: tuple[PlacementRecord, ...]
    report: GenerationReport
    allocations: tuple[int, ...]

    @property
    def placed(self) -> int:
        return len(self.records)


def roll_trade_off(rng: random.Random, trade_off_chance: float) -> bool:
    """Percent chance (0-100) that an item may carry trade-offs."""

    return rand_float(rng, 0.0, 100.0) < trade_off_chance


@log_calls
def spawn_items(
    layout: Optional[DungeonLayout],
    params: LootParams,
    rng: Optional[random.Random] = None,
    *,
    overrides: Optional[Sequence[RoomRoleOverride]] = None,
    is_blocked: Optional[PositionPredicate] = None,
    is_floor: Optional[PositionPredicate] = None,
    asset_lookup: Optional[AssetLookup] = None,
) -> SpawnResult:
    """Populate the loot rooms of ``layout`` and build the report.

    ``is_floor`` defaults to membership in ``layout.floor_cells``. Pass the
    generator that built ``layout`` as ``rng`` to continue its stream; without
    one, a loot stream is derived from the layout seed so the draws never
    replay the generation stage. Raises
    :class:`~modules.dungeon.errors.ConfigurationError` when there is no
    layout or no eligible room.
    """

    if layout is None:
        raise ConfigurationError("cannot spawn loot before a dungeon has been generated")
    selected = select_loot_rooms(layout, overrides)
    if rng is None:
        rng = derive_rng(layout.seed, "loot")
    is_floor = is_floor or layout.is_floor

    allocations = allocate([room for _, room in selected], params.item_budget)
    noise_params = params.noise_params(layout.seed)
    assembler = ReportAssembler(seed=layout.seed, parameters=params)

    records: list[PlacementRecord] = []
    for (room_index, room), target in zip(selected, allocations):
        positions = sample_room(room, target, noise_params, is_blocked, is_floor=is_floor)
        room_records: list[PlacementRecord] = []
        for position in positions:
            rarity = roll_rarity(rng, room.level, params.rarity_table)
            allow_trade_off = roll_trade_off(rng, params.trade_off_chance)
            item = roll_equipment(
                rng,
                rarity,
                room.level,
                difficulty=params.difficulty,
                penalty_scale=params.penalty_scale,
                allow_trade_off=allow_trade_off,
            )
            icon = asset_lookup(rarity) if asset_lookup else icon_for(rarity, params.rarity_table)
            room_records.append(
                PlacementRecord(
                    position=position,
                    item=item,
                    room_index=room_index,
                    icon=icon,
                )
            )
        assembler.add_room(room.level, room_records)
        records.extend(room_records)

    get_generation_logger().info(
        "Spawned %d of %d items across %d rooms (seed=%s)",
        len(records),
        params.item_budget,
        len(selected),
        layout.seed,
    )
    return SpawnResult(records=tuple(records), report=assembler.build(), allocations=tuple(allocations))


def generate_and_spawn(
    dungeon_params: DungeonGenParams,
    loot_params: LootParams,
    *,
    overrides: Optional[Sequence[RoomRoleOverride]] = None,
    asset_lookup: Optional[AssetLookup] = None,
) -> tuple[DungeonLayout, SpawnResult]:
    """Run both stages from one seed, sharing a single random stream."""

    dungeon_params, rng = start_run(dungeon_params)
    layout = generate_dungeon(dungeon_params, rng)
    result = spawn_items(layout, loot_params, rng, overrides=overrides, asset_lookup=asset_lookup)
    return layout, result


__all__ = [
    "AssetLookup",
    "PlacementRecord",
    "SpawnResult",
    "generate_and_spawn",
    "roll_trade_off",
    "spawn_items",
]

"""Item rarities and the level-biased rarity roll."""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, Mapping, Sequence

from modules.dungeon.gen.random import rand_float

LEVEL_BOOST_EXPONENT = 0.27
SUPPRESSION_START_LEVEL = 10
SUPPRESSED_RARITY_COUNT = 2


class Rarity(IntEnum):
    """Item grades, ordered from most common to rarest."""

    NORMAL = 0
    RARE = 1
    EPIC = 2
    UNIQUE = 3
    LEGENDARY = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: "Rarity | str | int") -> "Rarity":
        if isinstance(value, Rarity):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).upper()]
        except KeyError as exc:
            raise ValueError(f"unknown rarity '{value}'") from exc


@dataclass(frozen=True, slots=True)
class RarityWeight:
    """Base weight of a rarity plus an opaque visual handle for renderers."""

    rarity: Rarity
    base_weight: float
    icon: Any = None

    def __post_init__(self) -> None:
        if self.base_weight < 0:
            raise ValueError("rarity base weights must be non-negative")


DEFAULT_RARITY_TABLE: tuple[RarityWeight, ...] = (
    RarityWeight(Rarity.NORMAL, 100),
    RarityWeight(Rarity.RARE, 40),
    RarityWeight(Rarity.EPIC, 15),
    RarityWeight(Rarity.UNIQUE, 5),
    RarityWeight(Rarity.LEGENDARY, 1),
)


def rarity_table_from_config(entries: Iterable[Mapping[str, Any]]) -> tuple[RarityWeight, ...]:
    """Build a table from ``[{rarity, base_weight}, ...]`` mappings."""

    table = tuple(
        RarityWeight(Rarity.parse(entry["rarity"]), float(entry["base_weight"]))
        for entry in entries
    )
    if not table:
        raise ValueError("rarity table must not be empty")
    return tuple(sorted(table, key=lambda weight: weight.rarity))


def rarity_weights(room_level: int, table: Sequence[RarityWeight] = DEFAULT_RARITY_TABLE) -> list[float]:
    """Effective weight of each table entry at ``room_level``.

    Entry ``i`` is boosted by ``(i + 1) ** (room_level * 0.27)``; beyond
    level 10 the two most common entries are also divided by
    ``room_level - 9``.
    """

    weights: list[float] = []
    for index, entry in enumerate(table):
        boost = (index + 1) ** (room_level * LEVEL_BOOST_EXPONENT)
        if room_level > SUPPRESSION_START_LEVEL and index < SUPPRESSED_RARITY_COUNT:
            suppression = 1.0 / (room_level - (SUPPRESSION_START_LEVEL - 1))
        else:
            suppression = 1.0
        weights.append(entry.base_weight * boost * suppression)
    return weights


def roll_rarity(
    rng: random.Random,
    room_level: int,
    table: Sequence[RarityWeight] = DEFAULT_RARITY_TABLE,
) -> Rarity:
    """Weighted roulette over :func:`rarity_weights`."""

    weights = rarity_weights(room_level, table)
    roll = rand_float(rng, 0.0, sum(weights))
    cursor = 0.0
    for entry, weight in zip(table, weights):
        cursor += weight
        if weight > 0 and roll <= cursor:
            return entry.rarity
    return Rarity.NORMAL


def icon_for(rarity: Rarity, table: Sequence[RarityWeight] = DEFAULT_RARITY_TABLE) -> Any:
    for entry in table:
        if entry.rarity is rarity:
            return entry.icon
    return None


__all__ = [
    "DEFAULT_RARITY_TABLE",
    "Rarity",
    "RarityWeight",
    "icon_for",
    "rarity_table_from_config",
    "rarity_weights",
    "roll_rarity",
]

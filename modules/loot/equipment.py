"""Equipment stat and trade-off rolling."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from modules.dungeon.gen.random import rand_choice, rand_int
from modules.loot.rarity import Rarity

TRADE_OFF_MIN_RARITY = Rarity.EPIC


class BonusAttribute(str, Enum):
    """High-return options; ``magnitude`` is the per-roll base amount."""

    CRIT_RATE = "crit_rate"
    LIFE_STEAL = "life_steal"
    COOLDOWN_REDUCTION = "cooldown_reduction"
    ARMOR_PENETRATION = "armor_penetration"
    GOLD_GAIN = "gold_gain"
    MOVE_SPEED_INCREASE = "move_speed_increase"
    ATTACK_SPEED_INCREASE = "attack_speed_increase"

    @property
    def magnitude(self) -> float:
        return _BONUS_MAGNITUDES[self]


class PenaltyAttribute(str, Enum):
    """High-risk options; ``magnitude`` is the per-roll base amount."""

    MANA_COST_INCREASE = "mana_cost_increase"
    HEAL_RECEIVED_DECREASE = "heal_received_decrease"
    ARMOR_DECREASE = "armor_decrease"
    MOVE_SPEED_DECREASE = "move_speed_decrease"
    FIRE_WEAKNESS = "fire_weakness"
    ATTACK_SPEED_DECREASE = "attack_speed_decrease"

    @property
    def magnitude(self) -> float:
        return _PENALTY_MAGNITUDES[self]


_BONUS_MAGNITUDES: Mapping[BonusAttribute, float] = {
    BonusAttribute.CRIT_RATE: 5.0,
    BonusAttribute.LIFE_STEAL: 2.0,
    BonusAttribute.COOLDOWN_REDUCTION: 5.0,
    BonusAttribute.ARMOR_PENETRATION: 8.0,
    BonusAttribute.GOLD_GAIN: 15.0,
    BonusAttribute.MOVE_SPEED_INCREASE: 10.0,
    BonusAttribute.ATTACK_SPEED_INCREASE: 10.0,
}

_PENALTY_MAGNITUDES: Mapping[PenaltyAttribute, float] = {
    PenaltyAttribute.MANA_COST_INCREASE: 10.0,
    PenaltyAttribute.HEAL_RECEIVED_DECREASE: 15.0,
    PenaltyAttribute.ARMOR_DECREASE: 10.0,
    PenaltyAttribute.MOVE_SPEED_DECREASE: 8.0,
    PenaltyAttribute.FIRE_WEAKNESS: 20.0,
    PenaltyAttribute.ATTACK_SPEED_DECREASE: 8.0,
}

# Short labels and signs used by stat summaries.
_BONUS_LABELS: Mapping[BonusAttribute, str] = {
    BonusAttribute.CRIT_RATE: "Crit:+",
    BonusAttribute.LIFE_STEAL: "LS:+",
    BonusAttribute.COOLDOWN_REDUCTION: "CDR:+",
    BonusAttribute.ARMOR_PENETRATION: "ArPen:+",
    BonusAttribute.GOLD_GAIN: "Gold:+",
    BonusAttribute.MOVE_SPEED_INCREASE: "MS:+",
    BonusAttribute.ATTACK_SPEED_INCREASE: "AS:+",
}

_PENALTY_LABELS: Mapping[PenaltyAttribute, str] = {
    PenaltyAttribute.MANA_COST_INCREASE: "Mana:+",
    PenaltyAttribute.HEAL_RECEIVED_DECREASE: "Heal:-",
    PenaltyAttribute.ARMOR_DECREASE: "Armor:-",
    PenaltyAttribute.MOVE_SPEED_DECREASE: "MS:-",
    PenaltyAttribute.FIRE_WEAKNESS: "FireVuln:+",
    PenaltyAttribute.ATTACK_SPEED_DECREASE: "AS:-",
}


@dataclass(frozen=True, slots=True)
class ItemSpec:
    """A rolled piece of equipment."""

    name: str
    rarity: Rarity
    strength: int
    attack: int
    bonus_attributes: Mapping[BonusAttribute, float] = field(default_factory=dict)
    penalty_attributes: Mapping[PenaltyAttribute, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bonus_attributes", MappingProxyType(dict(self.bonus_attributes)))
        object.__setattr__(self, "penalty_attributes", MappingProxyType(dict(self.penalty_attributes)))

    @property
    def is_trade_off(self) -> bool:
        return bool(self.bonus_attributes) and bool(self.penalty_attributes)

    def bonus(self, attribute: BonusAttribute) -> float:
        return self.bonus_attributes.get(attribute, 0.0)

    def penalty(self, attribute: PenaltyAttribute) -> float:
        return self.penalty_attributes.get(attribute, 0.0)


def item_name(rarity: Rarity, room_level: int) -> str:
    return f"[{rarity.label}] Lv.{room_level} Gear"


def roll_base_stats(
    rng: random.Random,
    rarity: Rarity,
    room_level: int,
    difficulty: float,
) -> tuple[int, int]:
    """Return ``(strength, attack)`` for a random tier of ``rarity``."""

    tier = rand_int(rng, int(rarity) + 1, int(rarity) + 3)
    scaling = (room_level / 20 + 1) * tier * difficulty
    return round(scaling * 1.5), round(scaling * 0.8)


def trade_off_multiplier(room_level: int, penalty_scale: float) -> float:
    return (1 + room_level * 0.05) * penalty_scale


def roll_trade_offs(
    rng: random.Random,
    rarity: Rarity,
    room_level: int,
    penalty_scale: float,
) -> tuple[dict[BonusAttribute, float], dict[PenaltyAttribute, float]]:
    """Roll ``rarity`` bonus slots and one fewer penalty slot.

    Each slot picks an attribute uniformly; repeated picks accumulate.
    """

    bonus_slots = int(rarity)
    penalty_slots = bonus_slots - 1
    multiplier = trade_off_multiplier(room_level, penalty_scale)

    bonuses: dict[BonusAttribute, float] = {}
    for _ in range(bonus_slots):
        attribute = rand_choice(rng, list(BonusAttribute))
        bonuses[attribute] = bonuses.get(attribute, 0.0) + attribute.magnitude * multiplier

    penalties: dict[PenaltyAttribute, float] = {}
    for _ in range(penalty_slots):
        attribute = rand_choice(rng, list(PenaltyAttribute))
        penalties[attribute] = penalties.get(attribute, 0.0) + attribute.magnitude * multiplier
    return bonuses, penalties


def roll_equipment(
    rng: random.Random,
    rarity: Rarity,
    room_level: int,
    difficulty: float = 1.0,
    penalty_scale: float = 1.0,
    allow_trade_off: bool = True,
) -> ItemSpec:
    """Roll base stats and, for Epic and above, the trade-off attributes."""

    strength, attack = roll_base_stats(rng, rarity, room_level, difficulty)
    bonuses: dict[BonusAttribute, float] = {}
    penalties: dict[PenaltyAttribute, float] = {}
    if allow_trade_off and rarity >= TRADE_OFF_MIN_RARITY:
        bonuses, penalties = roll_trade_offs(rng, rarity, room_level, penalty_scale)
    return ItemSpec(
        name=item_name(rarity, room_level),
        rarity=rarity,
        strength=strength,
        attack=attack,
        bonus_attributes=bonuses,
        penalty_attributes=penalties,
    )


def stat_summary(item: ItemSpec) -> str:
    """Compact one-line description, e.g. ``"S:8 A:4 Crit:+6% MS:-9%"``."""

    parts = [f"S:{item.strength}", f"A:{item.attack}"]
    for attribute in BonusAttribute:
        value = item.bonus(attribute)
        if value > 0:
            parts.append(f"{_BONUS_LABELS[attribute]}{value:.0f}%")
    for attribute in PenaltyAttribute:
        value = item.penalty(attribute)
        if value > 0:
            parts.append(f"{_PENALTY_LABELS[attribute]}{value:.0f}%")
    return " ".join(parts)


__all__ = [
    "BonusAttribute",
    "ItemSpec",
    "PenaltyAttribute",
    "TRADE_OFF_MIN_RARITY",
    "item_name",
    "roll_base_stats",
    "roll_equipment",
    "roll_trade_offs",
    "stat_summary",
    "trade_off_multiplier",
]

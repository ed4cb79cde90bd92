"""User-facing parameters for a loot spawn run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Sequence

from modules.loot.noise import NoiseParams
from modules.loot.rarity import DEFAULT_RARITY_TABLE, RarityWeight, rarity_table_from_config

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config.config_loader import ConfigLoader


@dataclass(frozen=True, slots=True)
class LootParams:
    """Knobs recorded alongside every generation report."""

    #: Inclusive ranges accepted for the tunable floats.
    RANGES: ClassVar[dict[str, tuple[float, float]]] = {
        "noise_scale": (0.01, 1.0),
        "noise_threshold": (0.0, 1.0),
        "difficulty": (0.5, 2.0),
        "penalty_scale": (0.5, 3.0),
        "trade_off_chance": (0.0, 100.0),
    }

    item_budget: int = 50
    noise_scale: float = 0.15
    noise_threshold: float = 0.45
    difficulty: float = 1.0
    penalty_scale: float = 1.0
    trade_off_chance: float = 50.0
    rarity_table: Sequence[RarityWeight] = DEFAULT_RARITY_TABLE

    def __post_init__(self) -> None:
        if self.item_budget < 0:
            raise ValueError("item_budget must not be negative")
        for field_name, (low, high) in self.RANGES.items():
            value = getattr(self, field_name)
            if not low <= value <= high:
                raise ValueError(f"{field_name} must lie between {low} and {high}")
        table = tuple(self.rarity_table)
        if not table:
            raise ValueError("rarity_table must not be empty")
        object.__setattr__(self, "rarity_table", table)

    def noise_params(self, seed: int) -> NoiseParams:
        return NoiseParams.for_seed(seed, scale=self.noise_scale, threshold=self.noise_threshold)

    @classmethod
    def from_config(cls, loader: "ConfigLoader", **overrides: Any) -> "LootParams":
        """Build parameters from the ``loot`` section of ``loader``."""

        section = dict(loader.section("loot"))
        values: dict[str, Any] = {
            key: section[key]
            for key in ("item_budget", *cls.RANGES)
            if key in section
        }
        if section.get("rarity_table"):
            values["rarity_table"] = rarity_table_from_config(section["rarity_table"])
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


__all__ = ["LootParams"]

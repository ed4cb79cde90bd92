"""User-facing parameters for procedural dungeon generation."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config.config_loader import ConfigLoader


@dataclass(frozen=True, slots=True)
class RandomWalkParams:
    """Shape of the iterated random walk used for organic room floors."""

    iterations: int = 10
    walk_length: int = 10
    start_randomly_each_iteration: bool = True

    def __post_init__(self) -> None:
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")
        if self.walk_length < 0:
            raise ValueError("walk_length must not be negative")


@dataclass(frozen=True, slots=True)
class DungeonGenParams:
    """Configuration bundle describing the dungeon to partition and connect."""

    #: Keys read from the ``dungeon`` configuration section.
    CONFIG_KEYS: ClassVar[tuple[str, ...]] = (
        "width",
        "height",
        "min_room_width",
        "min_room_height",
        "offset",
        "treasure_chance",
        "random_walk_rooms",
    )

    width: int = 20
    height: int = 20
    origin: tuple[int, int] = (0, 0)
    min_room_width: int = 4
    min_room_height: int = 4
    offset: int = 1
    treasure_chance: float = 0.2
    random_walk_rooms: bool = False
    random_walk: RandomWalkParams = RandomWalkParams()
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("dungeon width and height must be positive")
        if self.min_room_width <= 0 or self.min_room_height <= 0:
            raise ValueError("minimum room dimensions must be positive")
        if not 0 <= self.offset <= 10:
            raise ValueError("offset must lie between 0 and 10")
        if not 0.0 <= self.treasure_chance <= 1.0:
            raise ValueError("treasure_chance must lie between 0 and 1")
        if len(self.origin) != 2:
            raise ValueError("origin must be an (x, y) pair")
        object.__setattr__(self, "origin", (int(self.origin[0]), int(self.origin[1])))

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_config(
        cls,
        loader: "ConfigLoader",
        *,
        seed: int | None = None,
        **overrides: Any,
    ) -> "DungeonGenParams":
        """Build parameters from the ``dungeon`` section of ``loader``.

        Keyword ``overrides`` whose value is not ``None`` replace the
        configured value.
        """

        section = loader.section("dungeon")
        values: dict[str, Any] = {key: section[key] for key in cls.CONFIG_KEYS if key in section}
        if "origin" in section:
            values["origin"] = tuple(section["origin"])
        walk = section.get("random_walk") or {}
        if walk:
            known = {f.name for f in fields(RandomWalkParams)}
            values["random_walk"] = RandomWalkParams(
                **{key: value for key, value in walk.items() if key in known}
            )
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(seed=seed, **values)


__all__ = ["DungeonGenParams", "RandomWalkParams"]

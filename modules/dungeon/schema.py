"""Pydantic models for the persisted dungeon schema."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoomSave(BaseModel):
    """One room as stored on disk: ``{min, size, type, roomLevel}``."""

    model_config = ConfigDict(extra="ignore")

    min: List[int] = Field(min_length=2, max_length=3)
    size: List[int] = Field(min_length=2, max_length=3)
    type: str
    roomLevel: int = Field(ge=1)

    @field_validator("min", "size")
    @classmethod
    def _drop_z(cls, value: List[int]) -> List[int]:
        # Older saves carry an (x, y, z) triple; z is always zero.
        return list(value[:2])

    @field_validator("size")
    @classmethod
    def _positive_size(cls, value: List[int]) -> List[int]:
        if any(component <= 0 for component in value):
            raise ValueError("room size must be positive")
        return value


class DungeonSave(BaseModel):
    """Persisted dungeon: ``{seed, rooms: [...]}``."""

    model_config = ConfigDict(extra="ignore")

    seed: int
    rooms: List[RoomSave] = Field(default_factory=list)


class RoomTypeOverrideSave(BaseModel):
    """Externally edited role assignment: ``{roomIndex, roomLevel, type}``."""

    model_config = ConfigDict(extra="ignore")

    roomIndex: int = Field(ge=0)
    roomLevel: int = Field(ge=1)
    type: str


__all__ = ["DungeonSave", "RoomSave", "RoomTypeOverrideSave"]

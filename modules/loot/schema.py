"""Pydantic models for the persisted generation report."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ItemEntryModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    rarity: str
    stats: str
    worldPos: List[float] = Field(min_length=2, max_length=2)


class RoomLogModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    roomLevel: int = Field(ge=1)
    items: List[ItemEntryModel] = Field(default_factory=list)


class ItemReportModel(BaseModel):
    """``{seed, totalItemBudget, noiseScale, ..., rooms: [...]}``."""

    model_config = ConfigDict(extra="ignore")

    seed: int
    totalItemBudget: int = Field(ge=0)
    noiseScale: float
    noiseThreshold: float
    globalDifficulty: float
    penaltyIntensity: float
    tradeOffSpawnChance: float
    rooms: List[RoomLogModel] = Field(default_factory=list)


__all__ = ["ItemEntryModel", "ItemReportModel", "RoomLogModel"]

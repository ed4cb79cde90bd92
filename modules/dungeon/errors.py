"""Exceptions raised by the dungeon and loot generation pipeline."""
from __future__ import annotations

from typing import Iterable


class DungeonError(RuntimeError):
    """Base exception for generation failures surfaced to callers."""


class ConfigurationError(DungeonError):
    """Raised when a required input is missing or unusable."""


class DisconnectedGraphError(DungeonError):
    """Raised when breadth-first labelling cannot reach every room."""

    def __init__(self, unreachable: Iterable[int], start_index: int = 0) -> None:
        self.unreachable = tuple(sorted(unreachable))
        self.start_index = start_index
        super().__init__(
            f"rooms {list(self.unreachable)} are unreachable from room {start_index}"
        )


__all__ = ["DungeonError", "ConfigurationError", "DisconnectedGraphError"]

"""Invariant audit for generated dungeon layouts."""
from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Mapping, Optional, Set

from modules.dungeon.errors import DisconnectedGraphError
from modules.dungeon.gen.depth import label_depths
from modules.dungeon.spec import DungeonLayout, RoomRole


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    problems: List[str] = field(default_factory=list)


class DungeonValidator:
    """Check a layout (and optionally its room graph) for structural problems."""

    def __init__(self, layout: DungeonLayout, graph: Optional[Mapping[int, Set[int]]] = None) -> None:
        self.layout = layout
        self.graph = graph

    def is_valid(self) -> bool:
        return self.validate().valid

    def validate(self) -> ValidationResult:
        problems: List[str] = []
        problems.extend(self._check_roles())
        problems.extend(self._check_levels())
        problems.extend(self._check_overlaps())
        if self.graph is not None:
            problems.extend(self._check_graph())
        return ValidationResult(valid=not problems, problems=problems)

    def _check_roles(self) -> List[str]:
        rooms = self.layout.rooms
        if not rooms:
            return ["layout has no rooms"]
        problems: List[str] = []
        starts = [index for index, room in enumerate(rooms) if room.role is RoomRole.START]
        if starts != [0]:
            problems.append(f"expected a single Start room at index 0, found {starts}")
        bosses = [index for index, room in enumerate(rooms) if room.role is RoomRole.BOSS]
        if len(bosses) > 1:
            problems.append(f"more than one Boss room: {bosses}")
        return problems

    def _check_levels(self) -> List[str]:
        problems: List[str] = []
        rooms = self.layout.rooms
        if rooms and rooms[0].level != 1:
            problems.append(f"start room has level {rooms[0].level}, expected 1")
        for index, room in enumerate(rooms):
            if room.level < 1:
                problems.append(f"room {index} has level {room.level}")
        return problems

    def _check_overlaps(self) -> List[str]:
        problems: List[str] = []
        indexed = list(enumerate(self.layout.rooms))
        for (a, first), (b, second) in combinations(indexed, 2):
            if first.bounds.overlaps(second.bounds):
                problems.append(f"rooms {a} and {b} overlap")
        return problems

    def _check_graph(self) -> List[str]:
        assert self.graph is not None
        try:
            expected = label_depths(self.graph, start_index=0, room_count=self.layout.room_count)
        except DisconnectedGraphError as exc:
            return [f"rooms {list(exc.unreachable)} are unreachable from the start room"]
        problems: List[str] = []
        for index, (room, level) in enumerate(zip(self.layout.rooms, expected)):
            if room.level != level:
                problems.append(f"room {index} has level {room.level}, BFS distance gives {level}")
        return problems


__all__ = ["DungeonValidator", "ValidationResult"]

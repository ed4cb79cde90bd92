"""Breadth-first depth labelling of the room graph."""
from __future__ import annotations

from collections import deque
from typing import Mapping, Sequence, Set

from modules.dungeon.errors import DisconnectedGraphError


def label_depths(
    graph: Mapping[int, Set[int]],
    start_index: int = 0,
    room_count: int | None = None,
) -> list[int]:
    """Return one level per room index: start is 1, then parent level + 1.

    ``room_count`` defaults to the number of graph nodes. Raises
    :class:`DisconnectedGraphError` when any room cannot be reached.
    """

    count = len(graph) if room_count is None else room_count
    if count == 0:
        return []
    if not 0 <= start_index < count:
        raise IndexError(f"start index {start_index} outside 0..{count - 1}")

    levels = [0] * count
    levels[start_index] = 1
    queue: deque[int] = deque([start_index])
    while queue:
        current = queue.popleft()
        for neighbour in sorted(graph.get(current, ())):
            if levels[neighbour] == 0:
                levels[neighbour] = levels[current] + 1
                queue.append(neighbour)

    unreachable = [index for index, level in enumerate(levels) if level == 0]
    if unreachable:
        raise DisconnectedGraphError(unreachable, start_index)
    return levels


def select_boss(levels: Sequence[int]) -> int:
    """Index of the deepest room; the lowest index wins ties."""

    if not levels:
        raise ValueError("cannot select a boss room from an empty level list")
    boss = 0
    for index in range(1, len(levels)):
        if levels[index] > levels[boss]:
            boss = index
    return boss


__all__ = ["label_depths", "select_boss"]

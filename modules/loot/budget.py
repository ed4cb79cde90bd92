"""Item budget distribution across loot rooms."""
from __future__ import annotations

import logging
import math
from typing import Protocol, Sequence


logger = logging.getLogger(__name__)

LEVEL_WEIGHT_FACTOR = 0.8


class _HasLevel(Protocol):
    level: int


def room_weight(level: int) -> float:
    """Logarithmic level weight: deeper rooms get more, with diminishing returns."""

    return 1.0 + LEVEL_WEIGHT_FACTOR * math.log(1 + level)


def allocate(rooms: Sequence[_HasLevel], total_budget: int) -> list[int]:
    """Split ``total_budget`` items across ``rooms`` in input order.

    Largest-remainder scheme: every room first receives the floor of its
    weight share, then the leftover units go one at a time to rooms in
    descending weight order (input order among equal weights), cycling if
    needed. The result always sums to ``total_budget``.
    """

    if total_budget < 0:
        raise ValueError("total_budget must not be negative")
    if not rooms:
        raise ValueError("cannot allocate a budget across zero rooms")

    weights = [room_weight(room.level) for room in rooms]
    total_weight = sum(weights)

    allocations = [math.floor(weight / total_weight * total_budget) for weight in weights]
    remaining = total_budget - sum(allocations)
    if remaining > 0:
        order = sorted(range(len(weights)), key=lambda index: weights[index], reverse=True)
        for step in range(remaining):
            allocations[order[step % len(order)]] += 1

    logger.debug("Allocated %d items over %d rooms: %s", total_budget, len(rooms), allocations)
    return allocations


__all__ = ["LEVEL_WEIGHT_FACTOR", "allocate", "room_weight"]

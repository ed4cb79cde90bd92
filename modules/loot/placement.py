"""Noise-driven selection of item positions inside a room."""
from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from modules.dungeon.spec import Room
from modules.loot.noise import NoiseParams, PerlinNoise2D


logger = logging.getLogger(__name__)

Position = tuple[int, int]
PositionPredicate = Callable[[Position], bool]

_DEFAULT_NOISE = PerlinNoise2D()


def _never_blocked(_: Position) -> bool:
    return False


def _always_floor(_: Position) -> bool:
    return True


def interior_cells(room: Room, margin: int = 1) -> list[Position]:
    """Room cells inset by ``margin``, in row-major order."""

    return list(room.bounds.shrink(margin).cells())


def score_candidates(
    cells: list[Position],
    noise_params: NoiseParams,
    noise: PerlinNoise2D = _DEFAULT_NOISE,
) -> list[tuple[Position, float]]:
    """Noise value for each cell, keeping only those at or above the threshold."""

    if not cells:
        return []
    coords = np.asarray(cells, dtype=np.float64)
    values = noise.sample(
        (coords[:, 0] + noise_params.offset_x) * noise_params.scale,
        (coords[:, 1] + noise_params.offset_y) * noise_params.scale,
    )
    return [
        (cell, float(value))
        for cell, value in zip(cells, values)
        if value >= noise_params.threshold
    ]


def sample_room(
    room: Room,
    target_count: int,
    noise_params: NoiseParams,
    is_blocked: Optional[PositionPredicate] = None,
    *,
    is_floor: Optional[PositionPredicate] = None,
    noise: PerlinNoise2D = _DEFAULT_NOISE,
) -> list[Position]:
    """Pick up to ``target_count`` positions at the room's noise peaks.

    Interior floor cells are scored, filtered by the threshold and visited
    from the highest noise down (scan order among equal values). Blocked
    cells are skipped. Returning fewer positions than requested is normal.
    """

    if target_count <= 0:
        return []
    is_blocked = is_blocked or _never_blocked
    is_floor = is_floor or _always_floor

    cells = [cell for cell in interior_cells(room) if is_floor(cell)]
    candidates = score_candidates(cells, noise_params, noise)
    candidates.sort(key=lambda item: item[1], reverse=True)

    accepted: list[Position] = []
    for position, _value in candidates:
        if len(accepted) >= target_count:
            break
        if is_blocked(position):
            continue
        accepted.append(position)

    if len(accepted) < target_count:
        logger.debug(
            "Room at %s (level %d) filled %d of %d items from %d candidates",
            room.bounds.origin,
            room.level,
            len(accepted),
            target_count,
            len(candidates),
        )
    return accepted


__all__ = ["interior_cells", "sample_room", "score_candidates"]

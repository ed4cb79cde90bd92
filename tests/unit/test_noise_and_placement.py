from __future__ import annotations

import numpy as np
import pytest

from modules.dungeon.gen.partition import Bounds
from modules.dungeon.spec import Room, RoomRole
from modules.loot.noise import NoiseParams, PerlinNoise2D, seed_offsets
from modules.loot.placement import interior_cells, sample_room, score_candidates


@pytest.fixture
def big_room() -> Room:
    return Room(bounds=Bounds(0, 0, 12, 12), role=RoomRole.TREASURE, level=3)


def test_noise_values_lie_in_unit_interval() -> None:
    noise = PerlinNoise2D()
    xs, ys = np.meshgrid(np.linspace(-20, 20, 80), np.linspace(-20, 20, 80))
    values = noise.sample(xs.ravel(), ys.ravel())
    assert values.min() >= 0.0
    assert values.max() <= 1.0
    assert values.std() > 0.01


def test_noise_is_deterministic_and_coherent() -> None:
    first, second = PerlinNoise2D(), PerlinNoise2D()
    assert first(3.3, 4.7) == second(3.3, 4.7)
    assert abs(first(1.25, 1.25) - first(1.26, 1.25)) < 0.05


def test_noise_is_neutral_on_lattice_points() -> None:
    assert PerlinNoise2D()(4.0, 9.0) == pytest.approx(0.5)


@pytest.mark.parametrize(
    ("seed", "expected"),
    [
        (0, (0.0, 0.0)),
        (123456789, (67.89, 23.45)),
        (-123456789, (-67.89, -23.45)),
        (10000, (0.0, 0.01)),
    ],
)
def test_seed_offsets_truncate_toward_zero(seed: int, expected: tuple[float, float]) -> None:
    assert seed_offsets(seed) == pytest.approx(expected)


@pytest.mark.parametrize(("scale", "threshold"), [(0.0, 0.5), (0.15, -0.1), (0.15, 1.5)])
def test_noise_params_validate(scale: float, threshold: float) -> None:
    with pytest.raises(ValueError):
        NoiseParams(scale=scale, threshold=threshold)


def test_interior_cells_skip_the_wall_ring(big_room: Room) -> None:
    cells = interior_cells(big_room)
    assert len(cells) == 100
    assert cells[0] == (1, 1) and cells[1] == (2, 1)
    assert all(1 <= x <= 10 and 1 <= y <= 10 for x, y in cells)


def test_samples_are_threshold_filtered_and_sorted(big_room: Room) -> None:
    params = NoiseParams.for_seed(42, scale=0.3, threshold=0.3)
    noise = PerlinNoise2D()
    scored = dict(score_candidates(interior_cells(big_room), params, noise))

    positions = sample_room(big_room, 200, params, noise=noise)

    assert positions
    assert len(positions) == len(scored)
    values = [scored[position] for position in positions]
    assert values == sorted(values, reverse=True)
    assert all(value >= 0.3 for value in values)


def test_threshold_of_one_yields_nothing(big_room: Room) -> None:
    assert sample_room(big_room, 10, NoiseParams(scale=0.15, threshold=1.0)) == []


def test_zero_threshold_fills_exactly_the_target(big_room: Room) -> None:
    positions = sample_room(big_room, 7, NoiseParams(threshold=0.0))
    assert len(positions) == 7
    assert len(set(positions)) == 7


def test_blocked_cells_are_skipped(big_room: Room) -> None:
    params = NoiseParams(threshold=0.0)
    unblocked = sample_room(big_room, 5, params)
    blocked = {unblocked[0], unblocked[2]}

    positions = sample_room(big_room, 5, params, lambda cell: cell in blocked)

    assert len(positions) == 5
    assert not blocked & set(positions)
    assert positions[:2] == [unblocked[1], unblocked[3]]


def test_under_fill_is_silent() -> None:
    tiny = Room(bounds=Bounds(0, 0, 4, 4), role=RoomRole.BOSS, level=2)
    assert len(sample_room(tiny, 50, NoiseParams(threshold=0.0))) == 4


def test_non_floor_cells_are_never_chosen(big_room: Room) -> None:
    positions = sample_room(
        big_room, 100, NoiseParams(threshold=0.0), is_floor=lambda cell: cell[0] < 4
    )
    assert len(positions) == 30
    assert all(x < 4 for x, _ in positions)


def test_zero_target_returns_empty(big_room: Room) -> None:
    assert sample_room(big_room, 0, NoiseParams(threshold=0.0)) == []

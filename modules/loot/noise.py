"""Coherent 2D gradient noise used to cluster loot.

The field is classic improved Perlin noise evaluated with numpy over whole
batches of coordinates and remapped into ``[0, 1]``. The permutation table
is fixed, so a coordinate always maps to the same value; per-dungeon
variation comes from the seed-derived offsets in :class:`NoiseParams`.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

PERMUTATION_SEED = 1337

_GRADIENTS = np.array(
    [(1, 1), (-1, 1), (1, -1), (-1, -1), (1, 0), (-1, 0), (0, 1), (0, -1)],
    dtype=np.float64,
)


def _build_permutation(seed: int) -> np.ndarray:
    # RandomState keeps a frozen stream, so the table is stable across numpy releases.
    table = np.random.RandomState(seed).permutation(256).astype(np.int64)
    return np.concatenate([table, table])


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


class PerlinNoise2D:
    """Vectorised 2D Perlin noise with values in ``[0, 1]``."""

    def __init__(self, permutation_seed: int = PERMUTATION_SEED) -> None:
        self._perm = _build_permutation(permutation_seed)

    def _gradient_dot(self, hashes: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        grads = _GRADIENTS[hashes % len(_GRADIENTS)]
        return grads[..., 0] * dx + grads[..., 1] * dy

    def sample(self, xs, ys) -> np.ndarray:
        """Evaluate the field at every ``(xs[i], ys[i])``."""

        x = np.asarray(xs, dtype=np.float64)
        y = np.asarray(ys, dtype=np.float64)
        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xi = x_floor.astype(np.int64) & 255
        yi = y_floor.astype(np.int64) & 255
        xf = x - x_floor
        yf = y - y_floor

        perm = self._perm
        aa = perm[perm[xi] + yi]
        ab = perm[perm[xi] + yi + 1]
        ba = perm[perm[xi + 1] + yi]
        bb = perm[perm[xi + 1] + yi + 1]

        u = _fade(xf)
        v = _fade(yf)
        bottom = _lerp(self._gradient_dot(aa, xf, yf), self._gradient_dot(ba, xf - 1.0, yf), u)
        top = _lerp(
            self._gradient_dot(ab, xf, yf - 1.0),
            self._gradient_dot(bb, xf - 1.0, yf - 1.0),
            u,
        )
        raw = _lerp(bottom, top, v)
        return np.clip((raw + 1.0) * 0.5, 0.0, 1.0)

    def __call__(self, x: float, y: float) -> float:
        return float(self.sample([x], [y])[0])


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def _trunc_mod(value: int, divisor: int) -> int:
    return value - _trunc_div(value, divisor) * divisor


def seed_offsets(seed: int) -> tuple[float, float]:
    """Noise-space offsets derived from the dungeon seed.

    Integer division and remainder truncate toward zero, so negative seeds
    produce negative offsets.
    """

    offset_x = _trunc_mod(seed, 10000) * 0.01
    offset_y = _trunc_mod(_trunc_div(seed, 10000), 10000) * 0.01
    return offset_x, offset_y


@dataclass(frozen=True, slots=True)
class NoiseParams:
    """How the noise field is sampled for one dungeon."""

    scale: float = 0.15
    threshold: float = 0.45
    offset_x: float = 0.0
    offset_y: float = 0.0

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("noise scale must be positive")
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError("noise threshold must lie between 0 and 1")

    @classmethod
    def for_seed(cls, seed: int, scale: float = 0.15, threshold: float = 0.45) -> "NoiseParams":
        offset_x, offset_y = seed_offsets(seed)
        return cls(scale=scale, threshold=threshold, offset_x=offset_x, offset_y=offset_y)


__all__ = ["NoiseParams", "PERMUTATION_SEED", "PerlinNoise2D", "seed_offsets"]

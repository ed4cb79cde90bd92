"""Deterministic random utilities dedicated to dungeon and loot generation."""
from __future__ import annotations

import random
from typing import Hashable, Sequence, TypeVar

_T = TypeVar("_T")


def get_rng(seed: int | None = None) -> random.Random:
    """Return a :class:`random.Random` instance optionally seeded."""

    rng = random.Random()
    if seed is not None:
        rng.seed(seed)
    return rng


def derive_rng(seed: int, *salt: Hashable) -> random.Random:
    """Return an independent generator derived from ``seed`` and ``salt``.

    Used for loot spawned into a layout whose generation stream is gone
    (for instance one loaded from disk), so its draws never replay the
    partition and corridor draws of the same seed.
    """

    material = ":".join([str(seed), *(str(part) for part in salt)])
    return random.Random(material)


def rand_choice(rng: random.Random, sequence: Sequence[_T]) -> _T:
    """Return a random element from ``sequence`` using ``rng``."""

    if not sequence:
        raise IndexError("cannot choose from an empty sequence")
    return rng.choice(sequence)


def rand_int(rng: random.Random, start: int, stop: int) -> int:
    """Return a random integer ``N`` such that ``start <= N <= stop``."""

    return rng.randint(start, stop)


def rand_float(rng: random.Random, low: float, high: float) -> float:
    """Return a random float in the closed range ``[low, high]``."""

    return rng.uniform(low, high)


def rand_value(rng: random.Random) -> float:
    """Return a random float in ``[0, 1)``."""

    return rng.random()


def random_seed() -> int:
    """Pick a fresh seed for runs that did not request one."""

    return random.SystemRandom().randint(-(2**31), 2**31 - 1)

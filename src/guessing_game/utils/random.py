# src/guessing_game/utils/random.py
"""Random number generator helpers."""

from __future__ import annotations

import numpy as np

# Inclusive bounds of the default secret range.
DEFAULT_LOW = 1
DEFAULT_HIGH = 100


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Return a :class:`numpy.random.Generator` seeded with *seed*."""

    return np.random.default_rng(seed)


def draw_secret(
    rng: np.random.Generator, low: int = DEFAULT_LOW, high: int = DEFAULT_HIGH
) -> int:
    """Draw one integer uniformly from the *inclusive* range ``[low, high]``.

    ``Generator.integers`` excludes its upper bound, hence ``high + 1``.
    """

    if low > high:
        raise ValueError(f"Empty secret range [{low}, {high}]")
    return int(rng.integers(low, high + 1))


__all__ = ["DEFAULT_HIGH", "DEFAULT_LOW", "draw_secret", "make_rng"]

from __future__ import annotations

import random
from typing import Optional, Union

Number = Union[int, float]


class RandomSource:
    """Half-open uniform draws for piece generation.

    Integer bounds give an int from ``range(lower, upper)``; any float bound
    gives a float in ``[lower, upper)``. Seed it for reproducible games.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def uniform(self, lower: Number, upper: Number) -> Number:
        if upper <= lower:
            raise ValueError(f"empty range [{lower}, {upper})")
        if isinstance(lower, int) and isinstance(upper, int):
            return self._rng.randrange(lower, upper)
        # random() is in [0, 1), so the product never reaches upper
        value = lower + (upper - lower) * self._rng.random()
        return value if value < upper else float(lower)

from __future__ import annotations

import random
from typing import Sequence

from gemfall.components.gem import GemType


class GemRandom:
    """Seedable random source for gem spawning.

    Wraps ``random.Random`` so tests can replay a board from its seed.
    """

    def __init__(self, gem_types: Sequence[GemType], seed: int | None = None, *, rng: random.Random | None = None):
        if not gem_types:
            raise ValueError("GemRandom needs at least one gem type")
        self.gem_types = list(gem_types)
        self.seed = seed
        self._rng = rng or random.Random(seed)

    def next_gem_type(self) -> GemType:
        return self._rng.choice(self.gem_types)

    def next_uniform(self) -> float:
        return self._rng.random()

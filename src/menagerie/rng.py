from __future__ import annotations

import random
from typing import Sequence, TypeVar

from pygame.math import Vector2

from .vector import Vec2

T = TypeVar("T")


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[self._random.randrange(len(items))]

    def next_offset(self, max_radius: float) -> Vec2:
        """Uniform angle, uniform radius in ``[0, max_radius]``."""
        vector = Vector2()
        vector.from_polar((self._random.uniform(0.0, max_radius), self._random.uniform(0.0, 360.0)))
        return Vec2.from_pygame(vector)

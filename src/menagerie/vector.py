from __future__ import annotations

from dataclasses import dataclass

from pygame.math import Vector2


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


@dataclass(frozen=True, slots=True)
class Vec2:
    x: float
    y: float

    @classmethod
    def from_pygame(cls, vector: Vector2) -> "Vec2":
        return cls(float(vector.x), float(vector.y))

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def scaled_by(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x * other.x, self.y * other.y)

    def direction(self) -> "Vec2":
        return Vec2(_sign(self.x), _sign(self.y))

    def distance_squared_to(self, other: "Vec2") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


ZERO = Vec2(0.0, 0.0)


def add(a: Vec2, b: Vec2) -> Vec2:
    return a + b


def subtract(a: Vec2, b: Vec2) -> Vec2:
    """Position of ``a`` relative to ``b``."""
    return a - b


def direction(vector: Vec2) -> Vec2:
    """Componentwise sign of ``vector``; zero components stay zero."""
    return vector.direction()


def squared_distance(a: Vec2, b: Vec2) -> float:
    return a.distance_squared_to(b)


def as_vec2(value: Vec2 | Vector2 | tuple[float, float] | list[float]) -> Vec2:
    if isinstance(value, Vec2):
        return value
    if isinstance(value, Vector2):
        return Vec2.from_pygame(value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Vec2(float(value[0]), float(value[1]))
    raise ValueError(f"Expected an (x, y) pair, got {value!r}")

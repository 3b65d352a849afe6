from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .medium import LocomotionMedium
from .vector import Vec2, add, direction, squared_distance, subtract


@dataclass(frozen=True, slots=True)
class KindProfile:
    stride: Vec2
    safety_radius_squared: float
    cut_back_steps: int = 0


class AgentKind(str, Enum):
    RUNNER = "Runner"
    FLYER = "Flyer"
    SWIMMER = "Swimmer"

    @property
    def profile(self) -> KindProfile:
        return KIND_PROFILES[self]

    @classmethod
    def parse(cls, value: "AgentKind | str") -> "AgentKind":
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == name or member.name.lower() == name:
                return member
        raise ValueError(f"Unknown agent kind: {value!r}")


KIND_PROFILES: Dict[AgentKind, KindProfile] = {
    # A runner's first step dashes across the hazard when that lands it no closer; later steps retreat.
    AgentKind.RUNNER: KindProfile(stride=Vec2(16.0, 16.0), safety_radius_squared=200.0, cut_back_steps=1),
    AgentKind.FLYER: KindProfile(stride=Vec2(16.0, 14.0), safety_radius_squared=100.0),
    AgentKind.SWIMMER: KindProfile(stride=Vec2(10.0, 10.0), safety_radius_squared=75.0),
}

_FIXED_FIELDS = frozenset({"id", "kind", "medium"})


@dataclass(slots=True, eq=False)
class Agent:
    id: int
    kind: AgentKind
    medium: LocomotionMedium
    position: Vec2
    steps_taken: int = 0
    evasion_steps: int = 0

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _FIXED_FIELDS and hasattr(self, name):
            raise AttributeError(f"Agent.{name} cannot change after construction")
        object.__setattr__(self, name, value)

    def brace(self) -> None:
        """Start a new disaster response; the cut-back gait applies again."""
        self.evasion_steps = 0

    def heading_from(self, hazard: Vec2) -> Vec2:
        heading = direction(subtract(self.position, hazard))
        if self.evasion_steps < self.kind.profile.cut_back_steps:
            # Cross over only when the far side is no closer than where we stand.
            crossed = add(self.position, (-heading).scaled_by(self.kind.profile.stride))
            if squared_distance(crossed, hazard) >= squared_distance(self.position, hazard):
                return -heading
        return heading

    def evade_step(self, hazard: Vec2) -> Vec2:
        """Move one step away from ``hazard`` and return the new position."""
        self.medium.apply_to(self)
        stride = self.kind.profile.stride
        self.position = add(self.position, self.heading_from(hazard).scaled_by(stride))
        self.steps_taken += 1
        self.evasion_steps += 1
        return self.position

    def is_safe_from(self, hazard: Vec2) -> bool:
        return squared_distance(self.position, hazard) > self.kind.profile.safety_radius_squared

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .agent import Agent


class LocomotionMedium(str, Enum):
    GROUND = "Ground"
    AIR = "Air"
    WATER = "Water"

    def apply_to(self, agent: "Agent") -> None:
        # Hook for environment effects on a single evasive step; every medium is neutral for now.
        return None

    @classmethod
    def parse(cls, value: "LocomotionMedium | str") -> "LocomotionMedium":
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == name or member.name.lower() == name:
                return member
        raise ValueError(f"Unknown locomotion medium: {value!r}")

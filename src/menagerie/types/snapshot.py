from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(slots=True)
class AgentSnapshot:
    id: int
    kind: str
    medium: str
    x: float
    y: float
    steps_taken: int
    distance_squared: float
    safe: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "medium": self.medium,
            "x": self.x,
            "y": self.y,
            "steps_taken": self.steps_taken,
            "distance_squared": self.distance_squared,
            "safe": self.safe,
        }

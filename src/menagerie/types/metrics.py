from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..vector import Vec2


@dataclass(slots=True)
class PassMetrics:
    pass_index: int
    stepped: int
    unsafe_after: int
    pass_duration_ms: float = 0.0


@dataclass(slots=True)
class DisasterReport:
    hazard: Vec2
    passes: int = 0
    converged: bool = False
    metrics: List[PassMetrics] = field(default_factory=list)

    @property
    def total_steps(self) -> int:
        return sum(entry.stepped for entry in self.metrics)

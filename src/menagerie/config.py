from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml


@dataclass
class EcosystemConfig:
    max_passes: int = 10_000
    workers: int = 1
    deadline_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {self.max_passes}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise ValueError(f"deadline_seconds must be positive, got {self.deadline_seconds}")


@dataclass
class AgentConfig:
    kind: str
    position: tuple[float, float]
    medium: Optional[str] = None


@dataclass
class ScenarioConfig:
    hazard: tuple[float, float] = (10.0, 10.0)
    seed: int = 42
    agents: List[AgentConfig] = field(default_factory=list)
    ecosystem: EcosystemConfig = field(default_factory=EcosystemConfig)

    @staticmethod
    def from_yaml(path: Path) -> "ScenarioConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)

    def to_dict(self) -> dict:
        return {
            "hazard": list(self.hazard),
            "seed": self.seed,
            "agents": [
                {"kind": a.kind, "position": list(a.position), **({"medium": a.medium} if a.medium else {})}
                for a in self.agents
            ],
            "ecosystem": {
                "max_passes": self.ecosystem.max_passes,
                "workers": self.ecosystem.workers,
                "deadline_seconds": self.ecosystem.deadline_seconds,
            },
        }


def _pair(value: object, name: str) -> tuple[float, float]:
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return (float(value[0]), float(value[1]))
    if isinstance(value, dict) and {"x", "y"} <= value.keys():
        return (float(value["x"]), float(value["y"]))
    raise ValueError(f"{name} must be an [x, y] pair, got {value!r}")


def load_config(raw: dict) -> ScenarioConfig:
    agents = []
    for index, entry in enumerate(raw.get("agents", [])):
        values = dict(entry)
        values["position"] = _pair(values.get("position"), f"agents[{index}].position")
        agents.append(AgentConfig(**values))
    ecosystem = EcosystemConfig(**(raw.get("ecosystem") or {}))
    scenario_values = {k: v for k, v in raw.items() if k not in {"agents", "ecosystem", "hazard"}}
    hazard = _pair(raw["hazard"], "hazard") if "hazard" in raw else ScenarioConfig.hazard
    return ScenarioConfig(hazard=hazard, agents=agents, ecosystem=ecosystem, **scenario_values)


def reference_scenario() -> ScenarioConfig:
    """Three animals clustered around a hazard at (10, 10)."""
    return ScenarioConfig(
        hazard=(10.0, 10.0),
        agents=[
            AgentConfig(kind="Flyer", medium="Air", position=(12.0, 12.0)),
            AgentConfig(kind="Swimmer", medium="Water", position=(12.0, 8.0)),
            AgentConfig(kind="Runner", medium="Ground", position=(8.0, 12.0)),
        ],
    )

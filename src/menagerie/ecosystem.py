from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from enum import Enum
from time import perf_counter
from typing import Iterable, List, Optional, Tuple

from .agent import Agent
from .config import EcosystemConfig
from .errors import NoConvergence
from .types.metrics import DisasterReport, PassMetrics
from .types.snapshot import AgentSnapshot
from .vector import Vec2, as_vec2, squared_distance

log = logging.getLogger(__name__)


class EcosystemState(str, Enum):
    IDLE = "Idle"
    SETTLING = "Settling"
    ALL_SAFE = "AllSafe"


class Ecosystem:
    """Owns a set of agents and moves them clear of a hazard.

    Each convergence pass steps every agent that is still inside its safety
    radius; the run ends on the first pass in which nobody needed to move.
    """

    def __init__(self, agents: Iterable[Agent], config: Optional[EcosystemConfig] = None):
        self._config = config or EcosystemConfig()
        self._agents: List[Agent] = list(agents)
        seen: set[int] = set()
        for agent in self._agents:
            if id(agent) in seen:
                raise ValueError(f"agent {agent.id} is listed more than once")
            seen.add(id(agent))
        self._state = EcosystemState.IDLE
        self._last_report: DisasterReport | None = None

    @property
    def agents(self) -> Tuple[Agent, ...]:
        return tuple(replace(agent) for agent in self._agents)

    @property
    def state(self) -> EcosystemState:
        return self._state

    @property
    def config(self) -> EcosystemConfig:
        return self._config

    @property
    def last_report(self) -> DisasterReport | None:
        return self._last_report

    def unsafe_agents(self, hazard: Vec2) -> List[Agent]:
        return [agent for agent in self._agents if not agent.is_safe_from(hazard)]

    def on_disaster(self, hazard: Vec2 | tuple[float, float]) -> DisasterReport:
        hazard = as_vec2(hazard)
        config = self._config
        report = DisasterReport(hazard=hazard)
        self._last_report = report
        self._state = EcosystemState.SETTLING
        for agent in self._agents:
            agent.brace()
        started = perf_counter()

        executor = ThreadPoolExecutor(max_workers=config.workers) if config.workers > 1 else None
        try:
            for pass_index in range(1, config.max_passes + 1):
                pass_start = perf_counter()
                stepped = self._run_pass(hazard, executor)
                if stepped == 0:
                    break
                unsafe_after = len(self.unsafe_agents(hazard))
                duration_ms = (perf_counter() - pass_start) * 1000.0
                report.passes = pass_index
                report.metrics.append(PassMetrics(pass_index, stepped, unsafe_after, duration_ms))
                log.debug("pass %d: stepped=%d unsafe_after=%d", pass_index, stepped, unsafe_after)
                if config.deadline_seconds is not None and perf_counter() - started > config.deadline_seconds:
                    if unsafe_after:
                        self._fail(report, hazard, "deadline")
                    break
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        if self.unsafe_agents(hazard):
            self._fail(report, hazard, "max_passes")
        report.converged = True
        self._state = EcosystemState.ALL_SAFE
        log.info("all %d agents safe from %s after %d pass(es)", len(self._agents), hazard, report.passes)
        return report

    def _run_pass(self, hazard: Vec2, executor: ThreadPoolExecutor | None) -> int:
        if executor is None:
            return sum(1 for agent in self._agents if self._advance(agent, hazard))
        # map() yields only once every task of the pass has finished
        results = list(executor.map(lambda agent: self._advance(agent, hazard), self._agents))
        return sum(1 for moved in results if moved)

    @staticmethod
    def _advance(agent: Agent, hazard: Vec2) -> bool:
        if agent.is_safe_from(hazard):
            return False
        agent.evade_step(hazard)
        return True

    def _fail(self, report: DisasterReport, hazard: Vec2, reason: str) -> None:
        unsafe_ids = [agent.id for agent in self.unsafe_agents(hazard)]
        log.warning("no convergence after %d pass(es) (%s); unsafe agents: %s", report.passes, reason, unsafe_ids)
        raise NoConvergence(report.passes, unsafe_ids, reason)

    def snapshot(self, hazard: Vec2 | tuple[float, float]) -> List[AgentSnapshot]:
        hazard = as_vec2(hazard)
        return [
            AgentSnapshot(
                id=agent.id,
                kind=agent.kind.value,
                medium=agent.medium.value,
                x=agent.position.x,
                y=agent.position.y,
                steps_taken=agent.steps_taken,
                distance_squared=squared_distance(agent.position, hazard),
                safe=agent.is_safe_from(hazard),
            )
            for agent in self._agents
        ]

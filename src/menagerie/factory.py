from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, TYPE_CHECKING

from pygame.math import Vector2

from .agent import Agent, AgentKind
from .errors import UnsupportedVariant
from .medium import LocomotionMedium
from .vector import Vec2, as_vec2

if TYPE_CHECKING:
    from .config import AgentConfig

log = logging.getLogger(__name__)

SUPPORTED_MEDIA: Dict[AgentKind, FrozenSet[LocomotionMedium]] = {
    AgentKind.RUNNER: frozenset({LocomotionMedium.GROUND}),
    AgentKind.FLYER: frozenset({LocomotionMedium.AIR}),
    AgentKind.SWIMMER: frozenset({LocomotionMedium.WATER}),
}


def default_medium(kind: AgentKind | str) -> LocomotionMedium:
    try:
        resolved = AgentKind.parse(kind)
    except ValueError as exc:
        raise UnsupportedVariant(kind, None, str(exc)) from exc
    return next(iter(SUPPORTED_MEDIA[resolved]))


class AgentFactory:
    """Builds agents with sequential ids, validating the kind/medium pairing up front."""

    def __init__(self, first_id: int = 0) -> None:
        self._next_id = first_id

    def create(
        self,
        kind: AgentKind | str,
        medium: LocomotionMedium | str,
        initial_position: Vec2 | Vector2 | tuple[float, float],
    ) -> Agent:
        try:
            resolved_kind = AgentKind.parse(kind)
            resolved_medium = LocomotionMedium.parse(medium)
        except ValueError as exc:
            raise UnsupportedVariant(kind, medium, str(exc)) from exc
        if resolved_medium not in SUPPORTED_MEDIA.get(resolved_kind, frozenset()):
            raise UnsupportedVariant(resolved_kind, resolved_medium)

        agent = Agent(
            id=self._next_id,
            kind=resolved_kind,
            medium=resolved_medium,
            position=as_vec2(initial_position),
        )
        self._next_id += 1
        log.debug("created agent %s: %s via %s at %s", agent.id, agent.kind.value, agent.medium.value, agent.position)
        return agent

    def create_many(self, configs: Iterable["AgentConfig"]) -> List[Agent]:
        agents: List[Agent] = []
        for entry in configs:
            medium = entry.medium if entry.medium is not None else default_medium(entry.kind)
            agents.append(self.create(entry.kind, medium, entry.position))
        return agents

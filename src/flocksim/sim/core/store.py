from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from pygame.math import Vector2

from .agent import Agent
from .config import SimulationConfig
from .errors import UnknownAgentError
from .rng import DeterministicRng


class AgentStore:
    """Insertion-ordered collection of agents with stable integer ids."""

    def __init__(self) -> None:
        self._agents: List[Agent] = []
        self._id_to_index: Dict[int, int] = {}
        self._next_id = 0

    @property
    def agents(self) -> List[Agent]:
        return self._agents

    def __iter__(self) -> Iterator[Agent]:
        return iter(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def add(
        self,
        position: Vector2,
        velocity: Optional[Vector2] = None,
        target: Optional[Vector2] = None,
        is_seeking: bool = True,
    ) -> Agent:
        agent = Agent(
            id=self._next_id,
            position=Vector2(position),
            velocity=Vector2() if velocity is None else Vector2(velocity),
            target=None if target is None else Vector2(target),
            is_seeking=is_seeking,
        )
        self._id_to_index[agent.id] = len(self._agents)
        self._agents.append(agent)
        self._next_id += 1
        return agent

    def get(self, agent_id: int) -> Agent:
        index = self._id_to_index.get(agent_id)
        if index is None:
            raise UnknownAgentError(agent_id)
        return self._agents[index]

    def seeking(self) -> List[Agent]:
        return [agent for agent in self._agents if agent.is_boid and agent.is_seeking]

    def spawn(self, rng: DeterministicRng, config: SimulationConfig) -> None:
        for _ in range(config.population):
            position = rng.next_point(config.spawn_range)
            target = rng.next_point(config.retarget_range)
            self.add(position, target=target)

    def clear(self) -> None:
        self._agents.clear()
        self._id_to_index.clear()
        self._next_id = 0

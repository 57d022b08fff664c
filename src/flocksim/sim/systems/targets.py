from __future__ import annotations

import logging
from typing import Iterable

from pygame.math import Vector2

from ..core.agent import Agent
from ..core.rng import DeterministicRng

logger = logging.getLogger(__name__)


def command_target(agents: Iterable[Agent], point: Vector2) -> int:
    """Assign ``point`` to every boid, replacing whatever target it had."""

    assigned = 0
    for agent in agents:
        if not agent.is_boid:
            continue
        agent.target = Vector2(point)
        assigned += 1
    logger.debug("Commanded %d agents to (%.2f, %.2f)", assigned, point.x, point.y)
    return assigned


def retarget_arrived(
    agents: Iterable[Agent],
    arrival_radius: float,
    retarget_range: float,
    rng: DeterministicRng,
) -> int:
    arrival_sq = arrival_radius * arrival_radius
    retargeted = 0
    for agent in agents:
        target = agent.target
        if target is None:
            continue
        if agent.position.distance_squared_to(target) > arrival_sq:
            continue
        agent.target = rng.next_point(retarget_range)
        retargeted += 1
        logger.debug(
            "Agent %d arrived; new target (%.2f, %.2f)", agent.id, agent.target.x, agent.target.y
        )
    return retargeted

from __future__ import annotations

from typing import Dict, Iterable

from pygame.math import Vector2

from ..core.agent import Agent
from ..utils.math2d import _safe_normalize_xy


def seek_steering(agents: Iterable[Agent], strength: float, deltas: Dict[int, Vector2]) -> int:
    """Pull each given agent toward its target. Callers pass the seeking agents (see ``AgentStore.seeking``)."""

    pulled = 0
    for agent in agents:
        if agent.target is None:
            continue
        target = agent.target
        # Points away from the target; subtracting it pulls the agent in.
        direction = _safe_normalize_xy(agent.position.x - target.x, agent.position.y - target.y)
        if direction.x == 0.0 and direction.y == 0.0:
            continue
        deltas[agent.id] -= direction * strength
        pulled += 1
    return pulled

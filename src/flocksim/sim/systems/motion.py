from __future__ import annotations

from typing import Iterable

from pygame.math import Vector2

from ..core.agent import Agent
from ..core.config import SimulationConfig
from ..core.errors import NonFiniteStateError
from ..utils.math2d import _heading_from_velocity, _is_finite, _is_zero, _within_box


def integrate(agents: Iterable[Agent], config: SimulationConfig) -> int:
    """
    Move each agent one fixed-length step along its velocity, then damp the velocity.

    Velocity only steers: the translation is always ``move_speed`` long while the
    agent is moving. Returns the number of agents that translated.
    """

    speed = config.move_speed
    threshold = config.damping_threshold
    factor = config.damping_factor
    moved = 0
    for agent in agents:
        if not _is_finite(agent.position):
            raise NonFiniteStateError(agent.id, "position", tuple(agent.position))
        velocity = agent.velocity
        if not _is_finite(velocity):
            raise NonFiniteStateError(agent.id, "velocity", tuple(velocity))
        if _is_zero(velocity):
            continue

        step = velocity.normalize() * speed
        agent.position.update(agent.position.x + step.x, agent.position.y + step.y)
        agent.heading = _heading_from_velocity(velocity)
        moved += 1

        if _within_box(velocity, threshold):
            velocity.update(0.0, 0.0)
        else:
            damped = velocity.lerp(Vector2(), factor)
            velocity.update(damped.x, damped.y)
    return moved

from __future__ import annotations

from typing import Iterable, List

from pygame.math import Vector2

from ..core.agent import Agent, NeighborRecord


def find_neighbors(agents: Iterable[Agent], radius: float) -> int:
    """
    Rebuild every agent's neighbor buffer from the current positions.

    Brute-force O(n^2) over all ordered pairs; fine for flocks of a few dozen agents.
    Records hold copies of the neighbor's position and velocity, so writes made later
    in the tick never leak back into this tick's steering inputs.
    Returns the number of distance checks performed.
    """

    population: List[Agent] = list(agents)
    radius_sq = radius * radius
    checks = 0
    snapshot = [(agent.id, Vector2(agent.position), Vector2(agent.velocity)) for agent in population]

    for agent in population:
        out = agent.neighbors
        out.clear()
        pos_x = agent.position.x
        pos_y = agent.position.y
        for other_id, other_pos, other_vel in snapshot:
            if other_id == agent.id:
                continue
            checks += 1
            offset_x = other_pos.x - pos_x
            offset_y = other_pos.y - pos_y
            if offset_x * offset_x + offset_y * offset_y <= radius_sq:
                out.append(NeighborRecord(other_id, other_vel, other_pos))
    return checks

from __future__ import annotations

import math
from typing import List

from ..core.agent import Agent
from ..types.metrics import TickMetrics


def create_metrics(
    tick: int,
    agents: List[Agent],
    neighbor_checks: int,
    avoidance_pairs: int,
    retargeted: int,
    commanded: bool,
    moving: int,
    duration_ms: float,
) -> TickMetrics:
    population = len(agents)
    links = 0
    speed_sum = 0.0
    for agent in agents:
        links += len(agent.neighbors)
        speed_sum += math.hypot(agent.velocity.x, agent.velocity.y)
    return TickMetrics(
        tick=tick,
        population=population,
        neighbor_checks=neighbor_checks,
        neighbor_links=links,
        avoidance_pairs=avoidance_pairs,
        retargeted=retargeted,
        commanded=commanded,
        moving=moving,
        average_speed=speed_sum / population if population else 0.0,
        tick_duration_ms=duration_ms,
    )

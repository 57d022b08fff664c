from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    population: int
    neighbor_checks: int
    neighbor_links: int
    avoidance_pairs: int
    retargeted: int
    commanded: bool
    moving: int
    average_speed: float
    tick_duration_ms: float = 0.0

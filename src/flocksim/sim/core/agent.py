from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pygame.math import Vector2


@dataclass(frozen=True, slots=True)
class NeighborRecord:
    neighbor_id: int
    velocity: Vector2
    position: Vector2


@dataclass(slots=True)
class Agent:
    id: int
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    target: Optional[Vector2] = None
    is_boid: bool = True
    is_seeking: bool = True
    heading: float = 0.0
    neighbors: List[NeighborRecord] = field(default_factory=list)

    @property
    def moving(self) -> bool:
        return self.velocity.x != 0.0 or self.velocity.y != 0.0

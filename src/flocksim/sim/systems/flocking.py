from __future__ import annotations

from typing import Dict, List, Sequence

from pygame.math import Vector2

from ..core.agent import Agent, NeighborRecord
from ..core.rng import DeterministicRng
from ..utils.math2d import _safe_normalize_xy


def alignment(neighbors: Sequence[NeighborRecord]) -> Vector2:
    if not neighbors:
        return Vector2()
    sum_x = 0.0
    sum_y = 0.0
    for record in neighbors:
        sum_x += record.velocity.x
        sum_y += record.velocity.y
    count = len(neighbors)
    return _safe_normalize_xy(sum_x / count, sum_y / count)


def cohesion(position: Vector2, neighbors: Sequence[NeighborRecord]) -> Vector2:
    if not neighbors:
        return Vector2()
    sum_x = 0.0
    sum_y = 0.0
    for record in neighbors:
        sum_x += record.position.x
        sum_y += record.position.y
    count = len(neighbors)
    return _safe_normalize_xy(sum_x / count - position.x, sum_y / count - position.y)


def avoidance(position: Vector2, other: Vector2, strength: float, rng: DeterministicRng) -> Vector2:
    if position.x == other.x and position.y == other.y:
        # Direction is undefined for coincident agents; pick a random push instead.
        return Vector2(
            rng.next_range(-1.0, 1.0) * strength,
            rng.next_range(-1.0, 1.0) * strength,
        )
    direction = _safe_normalize_xy(other.x - position.x, other.y - position.y)
    return -direction * strength


def accumulate_avoidance(
    agents: List[Agent],
    radius: float,
    strength: float,
    rng: DeterministicRng,
    deltas: Dict[int, Vector2],
    symmetric: bool = False,
) -> int:
    """
    Add pairwise avoidance pushes into ``deltas`` (keyed by agent id).

    Each unordered pair within ``radius`` is visited once, in store order. Only the
    first agent of the pair is pushed unless ``symmetric`` is set, in which case the
    second agent receives the mirrored push as well. Returns the number of pairs
    that contributed.
    """

    radius_sq = radius * radius
    pairs = 0
    count = len(agents)
    for i in range(count):
        first = agents[i]
        for j in range(i + 1, count):
            second = agents[j]
            if first.position.distance_squared_to(second.position) > radius_sq:
                continue
            push = avoidance(first.position, second.position, strength, rng)
            deltas[first.id] += push
            if symmetric:
                deltas[second.id] -= push
            pairs += 1
    return pairs


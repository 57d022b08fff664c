from __future__ import annotations

from pygame.math import Vector2

from flocksim.sim.core.store import AgentStore
from flocksim.sim.systems.neighbors import find_neighbors


def _store(positions):
    store = AgentStore()
    for pos in positions:
        store.add(Vector2(pos))
    return store


def test_neighbor_lists_match_bruteforce():
    positions = [(0, 0), (100, 100), (250, 0), (600, 600), (-299, 0)]
    store = _store(positions)
    radius = 300.0

    find_neighbors(store.agents, radius)

    for agent in store:
        brute = sorted(
            other.id
            for other in store
            if other.id != agent.id and (other.position - agent.position).length() <= radius
        )
        assert sorted(record.neighbor_id for record in agent.neighbors) == brute


def test_far_pairs_are_excluded_both_ways():
    store = _store([(0, 0), (300.5, 0)])
    find_neighbors(store.agents, 300.0)

    assert store.get(0).neighbors == []
    assert store.get(1).neighbors == []


def test_radius_is_inclusive_and_self_excluded():
    store = _store([(0, 0), (300, 0)])
    find_neighbors(store.agents, 300.0)

    assert [record.neighbor_id for record in store.get(0).neighbors] == [1]
    assert [record.neighbor_id for record in store.get(1).neighbors] == [0]


def test_records_copy_neighbor_state():
    store = _store([(0, 0), (10, 0)])
    store.get(1).velocity.update(3.0, -1.0)
    find_neighbors(store.agents, 300.0)

    record = store.get(0).neighbors[0]
    assert record.velocity == Vector2(3.0, -1.0)
    assert record.position == Vector2(10.0, 0.0)

    store.get(1).velocity.update(0.0, 0.0)
    store.get(1).position.update(50.0, 50.0)
    assert record.velocity == Vector2(3.0, -1.0)
    assert record.position == Vector2(10.0, 0.0)


def test_lists_are_rebuilt_every_call():
    store = _store([(0, 0), (10, 0)])
    find_neighbors(store.agents, 300.0)
    store.get(1).position.update(1000.0, 0.0)

    find_neighbors(store.agents, 300.0)

    assert store.get(0).neighbors == []
    assert store.get(1).neighbors == []


def test_returns_pairwise_check_count():
    store = _store([(0, 0), (1, 0), (2, 0), (3, 0)])
    assert find_neighbors(store.agents, 300.0) == 12

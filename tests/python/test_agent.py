from __future__ import annotations

import pytest
from pygame.math import Vector2

from flocksim.sim.core.agent import Agent, NeighborRecord
from flocksim.sim.core.config import SimulationConfig
from flocksim.sim.core.errors import UnknownAgentError
from flocksim.sim.core.rng import DeterministicRng
from flocksim.sim.core.store import AgentStore


def test_agent_and_records_use_slots_and_isolate_defaults():
    agent_a = Agent(id=1, position=Vector2())
    agent_b = Agent(id=2, position=Vector2())

    assert not hasattr(agent_a, "__dict__")
    assert hasattr(Agent, "__slots__")
    assert hasattr(NeighborRecord, "__slots__")

    agent_a.velocity.x = 1.5
    agent_a.neighbors.append(NeighborRecord(2, Vector2(), Vector2()))
    assert agent_b.velocity.x == 0.0
    assert agent_b.neighbors == []
    assert agent_a.is_boid and agent_a.is_seeking
    assert agent_a.target is None


def test_store_assigns_sequential_ids_and_copies_vectors():
    store = AgentStore()
    position = Vector2(3.0, 4.0)
    first = store.add(position)
    second = store.add(Vector2(), target=Vector2(1.0, 1.0))

    assert [first.id, second.id] == [0, 1]
    assert store.get(1) is second
    assert len(store) == 2
    assert list(store) == [first, second]

    position.x = 99.0
    assert first.position.x == 3.0


def test_store_get_unknown_id_raises():
    store = AgentStore()
    store.add(Vector2())
    with pytest.raises(UnknownAgentError):
        store.get(5)
    with pytest.raises(KeyError):
        store.get(-1)


def test_seeking_filters_capabilities():
    store = AgentStore()
    seeker = store.add(Vector2())
    store.add(Vector2(), is_seeking=False)
    drifter = store.add(Vector2())
    drifter.is_boid = False

    assert store.seeking() == [seeker]


def test_spawn_places_agents_in_spawn_square_with_targets():
    config = SimulationConfig(population=25)
    store = AgentStore()
    store.spawn(DeterministicRng(3), config)

    assert len(store) == 25
    assert [agent.id for agent in store] == list(range(25))
    for agent in store:
        assert -config.spawn_range <= agent.position.x <= config.spawn_range
        assert -config.spawn_range <= agent.position.y <= config.spawn_range
        assert agent.target is not None
        assert -config.retarget_range <= agent.target.x <= config.retarget_range
        assert -config.retarget_range <= agent.target.y <= config.retarget_range
        assert agent.velocity == Vector2()


def test_clear_restarts_ids():
    store = AgentStore()
    store.add(Vector2())
    store.add(Vector2())
    store.clear()

    assert len(store) == 0
    assert store.add(Vector2()).id == 0

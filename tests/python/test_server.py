import asyncio
import json

import pytest
from pygame.math import Vector2

from flocksim.app.server import SimulationController, _parse_point, app
from flocksim.sim.core.config import SimulationConfig


def test_target_command_reaches_every_agent_on_next_tick() -> None:
    controller = SimulationController(SimulationConfig(population=3, seed=4))

    async def exercise() -> None:
        await controller.set_target(50.0, 50.0)
        await controller.advance()

    asyncio.run(exercise())

    assert controller.tick == 1
    assert controller.world.metrics.commanded
    assert all(agent.target == Vector2(50.0, 50.0) for agent in controller.world.agents)


def test_reset_rewinds_tick_counter() -> None:
    controller = SimulationController(SimulationConfig(seed=4))

    async def exercise() -> None:
        await controller.advance()
        await controller.advance()
        await controller.reset()

    asyncio.run(exercise())

    assert controller.tick == 0
    assert controller.world.metrics is None


def test_serialized_snapshot_is_json() -> None:
    controller = SimulationController(SimulationConfig(population=2))
    payload = json.loads(json.dumps(controller.serialize_snapshot()))

    assert payload["type"] == "snapshot"
    assert payload["tick"] == 0
    assert len(payload["agents"]) == 2
    assert payload["metadata"]["population"] == 2


def test_parse_point_rejects_malformed_payloads() -> None:
    assert _parse_point({"x": "1.5", "y": 2}) == (1.5, 2.0)
    with pytest.raises(ValueError):
        _parse_point({"x": 1.0})
    with pytest.raises(ValueError):
        _parse_point({"x": "left", "y": 0})


def test_control_routes() -> None:
    paths = {route.path for route in app.routes}

    assert {
        "/api/status",
        "/api/control/start",
        "/api/control/stop",
        "/api/control/reset",
        "/api/control/target",
        "/ws",
    } <= paths
    assert "/api/control/speed" not in paths

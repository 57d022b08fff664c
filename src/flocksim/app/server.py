from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict
from typing import Any, Dict, Set

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from ..sim.core.config import SimulationConfig
from ..sim.core.world import World

logger = logging.getLogger(__name__)


class SimulationController:
    def __init__(self, config: SimulationConfig, broadcast_interval: int = 1):
        self.config = config
        self.world = World(config)
        self.broadcast_interval = max(1, broadcast_interval)
        self.running = False
        self.tick = 0
        self.clients: Set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._loop_task: asyncio.Task | None = None

    async def start(self) -> None:
        if self._loop_task is None:
            self._loop_task = asyncio.create_task(self._loop())
        self.running = True

    async def stop(self) -> None:
        self.running = False

    async def reset(self) -> None:
        async with self._lock:
            self.world.reset()
            self.tick = 0
        logger.info("Simulation reset")
        await self._broadcast_snapshot()

    async def set_target(self, x: float, y: float) -> None:
        async with self._lock:
            self.world.set_target(x, y)

    async def advance(self) -> None:
        async with self._lock:
            self.world.step(self.tick)
            self.tick += 1
        if self.tick % self.broadcast_interval == 0:
            await self._broadcast_snapshot()

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.time_step)
            if not self.running:
                continue
            await self.advance()

    def serialize_snapshot(self) -> Dict[str, Any]:
        snapshot = self.world.snapshot(self.tick)
        return {
            "type": "snapshot",
            "tick": snapshot.tick,
            "metrics": asdict(snapshot.metrics),
            "agents": snapshot.agents,
            "metadata": asdict(snapshot.metadata),
        }

    async def _broadcast_snapshot(self) -> None:
        if not self.clients:
            return
        payload = json.dumps(self.serialize_snapshot())
        stale: Set[WebSocket] = set()
        for client in self.clients:
            try:
                await client.send_text(payload)
            except WebSocketDisconnect:
                stale.add(client)
        for client in stale:
            self.clients.discard(client)


def _parse_point(payload: Dict[str, Any]) -> tuple[float, float]:
    try:
        return float(payload["x"]), float(payload["y"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Expected numeric 'x' and 'y', got {payload!r}") from exc


app = FastAPI(title="Flock Simulation")
controller = SimulationController(SimulationConfig())


@app.on_event("startup")
async def _startup() -> None:
    await controller.start()


@app.get("/api/status")
async def status() -> JSONResponse:
    snapshot = controller.world.snapshot(controller.tick)
    return JSONResponse(
        {
            "running": controller.running,
            "tick": controller.tick,
            "population": len(controller.world.agents),
            "metrics": asdict(snapshot.metrics),
        }
    )


@app.post("/api/control/start")
async def start_simulation() -> JSONResponse:
    controller.running = True
    return JSONResponse({"running": True})


@app.post("/api/control/stop")
async def stop_simulation() -> JSONResponse:
    controller.running = False
    return JSONResponse({"running": False})


@app.post("/api/control/reset")
async def reset_simulation() -> JSONResponse:
    await controller.reset()
    return JSONResponse({"running": controller.running, "tick": controller.tick})


@app.post("/api/control/target")
async def set_target(payload: dict) -> JSONResponse:
    try:
        x, y = _parse_point(payload)
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=422)
    await controller.set_target(x, y)
    return JSONResponse({"target": [x, y]})


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    controller.clients.add(websocket)
    await websocket.send_text(json.dumps(controller.serialize_snapshot()))
    try:
        while True:
            message = await websocket.receive_text()
            try:
                payload = json.loads(message)
            except json.JSONDecodeError:
                continue
            # Pointer released on the client's canvas, already in world coordinates.
            if isinstance(payload, dict) and payload.get("type") == "target":
                try:
                    x, y = _parse_point(payload)
                except ValueError:
                    logger.warning("Ignoring malformed target message: %s", message)
                    continue
                await controller.set_target(x, y)
    except WebSocketDisconnect:
        controller.clients.discard(websocket)


__all__ = ["app", "controller"]
